"""Utility Click group definitions."""

from __future__ import annotations

import click


class OrderedGroup(click.Group):
    """Click group that lists commands in the order they were added."""

    def list_commands(self, ctx):  # type: ignore[override]
        return list(self.commands.keys())


__all__ = ["OrderedGroup"]
