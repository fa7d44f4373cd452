import logging
import os
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from fragment_key.cli.transform import passes, transform
from fragment_key.cli.watch import watch

app = typer.Typer(
    name="fragment-key",
    help="Fragment Key: add stable keys to fragments returned by JSX components.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("transform")(transform)
app.command("watch")(watch)
app.command("passes")(passes)

err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> int:
    """Configure the root logger from --verbose or FRAGMENT_KEY_LOG_LEVEL and return the level used."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv("FRAGMENT_KEY_LOG_LEVEL", "WARNING").strip().upper()
        known = logging.getLevelNamesMapping()
        if name in known:
            level = known[name]
        else:
            err_console.print(
                f"[red]Ignoring invalid FRAGMENT_KEY_LOG_LEVEL {escape(repr(name))}[/red]; "
                f"expected one of {escape(str(sorted(known)))}, using WARNING"
            )
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return level


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    configure_logging(verbose)


def main() -> None:
    app()
