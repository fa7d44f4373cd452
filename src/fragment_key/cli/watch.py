import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fragment_key.core.transform import transform_file
from fragment_key.models import TransformResult
from fragment_key.watcher.watchfiles_adapter import WatchfilesWatcher

logger = logging.getLogger(__name__)
console = Console()


def _rewrite_file(path: Path) -> TransformResult | None:
    if not path.is_file():
        return None
    result = transform_file(str(path))
    if not result.changed:
        return None
    path.write_text(result.code, encoding="utf-8")
    return result


async def rewrite_changed(paths: set[Path]) -> None:
    for path in sorted(paths):
        result = await asyncio.to_thread(_rewrite_file, path)
        if result is None:
            continue
        logger.info("Rewrote %s", path)
        console.print(f"[green]Rewrote[/green] {path} ({len(result.fragments)} fragment(s))")


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
    debounce: Annotated[int, typer.Option(help="Milliseconds to group file changes for.")] = 1600,
) -> None:
    """Watch a directory and key fragments in changed files in place."""
    if not directory.is_dir():
        console.print(f"[red]Not a directory: {directory}[/red]")
        raise typer.Exit(code=2)

    watcher = WatchfilesWatcher(directory, rewrite_changed, debounce=debounce)

    async def _run() -> None:
        await watcher.start()
        console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped")
