"""
Shared pytest fixtures for ruletrace tests.
"""

import logging

import pytest

from ruletrace import create_trace


@pytest.fixture
def recorder():
    """A fresh recorder with no initial message."""
    return create_trace()


@pytest.fixture(autouse=True)
def reset_ruletrace_logging():
    """Reset the ruletrace logger before and after each test.

    Leaves only the library NullHandler and an inherited (NOTSET) level so
    one test's logging setup cannot leak into another.
    """
    logger = logging.getLogger("ruletrace")

    def reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
