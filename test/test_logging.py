import logging

import pytest
from rich.logging import RichHandler

from algebraic_sum.logging import configure_logger, logger


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logger().setLevel(logging.NOTSET)


def test_child_loggers():
    assert logger().name == "algebraic_sum"
    assert logger("fallible").name == "algebraic_sum.fallible"
    assert logger("fallible").parent is logger()


def test_debug_only_for_package():
    configure_logger(True, rich=False)
    assert logger("flags").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("asyncio").getEffectiveLevel() == logging.INFO
    assert isinstance(logging.getLogger().handlers[0], logging.StreamHandler)

    configure_logger(False)
    assert logger("flags").getEffectiveLevel() == logging.INFO
    assert isinstance(logging.getLogger().handlers[0], RichHandler)
