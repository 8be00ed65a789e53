"""Styled status messages on stderr; stdout is reserved for dry-run output."""

from __future__ import annotations

import click


def info(message: str) -> None:
    click.echo(message, err=True)


def success(message: str) -> None:
    click.secho(message, fg="green", err=True)


def warning(message: str) -> None:
    click.secho(message, fg="yellow", err=True)


def error(message: str) -> None:
    click.secho(message, fg="red", err=True)


__all__ = ["info", "success", "warning", "error"]
