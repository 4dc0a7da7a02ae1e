from argparse import ArgumentParser
from pathlib import Path
import re
import sys
import tomllib
from typing import Optional
import argh  # type: ignore
import asyncio
from rich.console import Console

from rich_argparse import RichHelpFormatter
from rich.table import Table

from .demo import ErrableController, FallibleController, InputModel, ViewAction
from .demo.controller import Controller
from .errors import HelpfulUserError, UserError
from .flags import DEFAULT_SECTION, FeatureManager
from .logging import logger, configure_logger
from .version import __version__

log = logger()

PYPROJECT_SECTION = f"tool.algebraic-sum.{DEFAULT_SECTION}"


def load_flags(flags_file: Optional[str]) -> Optional[FeatureManager]:
    if flags_file is not None:
        if m := re.match(r"([^\[\]]+)\[([^\[\]\s]+)\]", flags_file):
            return FeatureManager.read(Path(m.group(1)), m.group(2))
        return FeatureManager.read(Path(flags_file))

    if Path("features.toml").exists():
        return FeatureManager.read(Path("features.toml"))

    if Path("pyproject.toml").exists():
        with open("pyproject.toml", "rb") as f_in:
            data = tomllib.load(f_in)
        try:
            for s in PYPROJECT_SECTION.split("."):
                data = data[s]
        except KeyError:
            log.debug("no `[%s]` section in `pyproject.toml`", PYPROJECT_SECTION)
            return None
        return FeatureManager(data, PYPROJECT_SECTION)

    return None


def new_controller(errable: bool) -> Controller:
    return ErrableController() if errable else FallibleController()


async def run_async(inputs: list[str], errable: bool) -> list[tuple[ViewAction, list[str]]]:
    async def one(text: str):
        controller = new_controller(errable)
        view = await controller.action_async(InputModel(text))  # type: ignore
        return view, controller.model_state_errors

    return list(await asyncio.gather(*(one(t) for t in inputs)))


def run_sync(inputs: list[str], errable: bool) -> list[tuple[ViewAction, list[str]]]:
    results = []
    for text in inputs:
        controller = new_controller(errable)
        view = controller.action(InputModel(text))  # type: ignore
        results.append((view, controller.model_state_errors))
    return results


def print_flags(flags: FeatureManager):
    enabled = set(flags.enabled())
    t = Table(title="Feature Flags", header_style="italic green", show_edge=False)
    t.add_column("feature", style="bold yellow")
    t.add_column("enabled")
    for key in flags.walk():
        t.add_row(key, "yes" if key in enabled else "no")
    Console().print(t)


@argh.arg("inputs", nargs="*", help="input strings to push through the demo controller")
@argh.arg(
    "-f",
    "--flags-file",
    help="feature flags TOML or JSON file, use a `[...]` suffix to indicate a subsection.",
)
@argh.arg("-a", "--use-async", help="run the asynchronous version of the action")
@argh.arg("-e", "--errable", help="use the Errable controller instead of the Fallible one")
@argh.arg("--list-flags", help="show configured feature flags")
@argh.arg("-v", "--version", help="print version number and exit")
@argh.arg("--debug", help="more verbose logging")
def algebraic_sum(
    inputs: list[str],
    *,
    flags_file: Optional[str] = None,
    use_async: bool = False,
    errable: bool = False,
    list_flags: bool = False,
    version: bool = False,
    debug: bool = False,
):
    """Validate and render the given inputs with the demo controllers."""
    if version:
        print(f"algebraic-sum {__version__}")
        sys.exit(0)

    configure_logger(debug)
    try:
        flags = load_flags(flags_file)
        if list_flags:
            if flags is None:
                raise HelpfulUserError(
                    "No feature flags found: give `-f`, or add a `features.toml` or a "
                    f"`[{PYPROJECT_SECTION}]` section to `pyproject.toml`."
                )
            print_flags(flags)
            sys.exit(0)

        if flags is not None:
            for key in flags.enabled():
                log.info("feature `%s` is enabled", key)

        if use_async:
            results = asyncio.run(run_async(inputs, errable))
        else:
            results = run_sync(inputs, errable)

    except UserError as e:
        log.error(f"Failed: {e}")
        sys.exit(1)

    t = Table(title="Views", header_style="italic green", show_edge=False)
    t.add_column("input", style="bold yellow")
    t.add_column("view")
    t.add_column("model")
    t.add_column("errors", style="red")
    for text, (view, errors) in zip(inputs, results):
        t.add_row(text, view.view_name, repr(view.view_model), ", ".join(errors))
    Console().print(t)


def cli():
    parser = ArgumentParser(formatter_class=RichHelpFormatter)
    argh.set_default_command(parser, algebraic_sum)
    argh.dispatch(parser)


if __name__ == "__main__":
    cli()
