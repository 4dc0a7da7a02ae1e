import logging
import sys
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler

ROOT = "algebraic_sum"


def logger(name: str | None = None) -> logging.Logger:
    """The package logger, or the child logger for one of its modules."""
    return logging.getLogger(ROOT if name is None else f"{ROOT}.{name}")


class BackTickHighlighter(RegexHighlighter):
    """Renders `quoted` names (feature keys, class names) in bold."""

    highlights = [r"`(?P<bold>[^`]*)`"]


def _handler(debug: bool, rich: bool) -> logging.Handler:
    if rich:
        return RichHandler(show_path=debug, highlighter=BackTickHighlighter())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    return handler


def configure_logger(debug: bool, rich: bool = True):
    """Set up the root handler for command-line use. Library code only ever
    asks for `logger()`. With `debug`, only this package's loggers go down to
    DEBUG; everything else (asyncio among it) stays at INFO."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s" if rich else None,
        datefmt="[%X]" if rich else None,
        handlers=[_handler(debug, rich)],
        force=True,
    )
    logger().setLevel(logging.DEBUG if debug else logging.NOTSET)
