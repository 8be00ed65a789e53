from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_piper_logger():
    yield
    logger = logging.getLogger("piper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
