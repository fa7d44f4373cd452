from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from fragment_key.core.discovery import iter_source_files
from fragment_key.core.transform import PASSES, transform_file, transform_source
from fragment_key.models import TransformResult

console = Console()
err_console = Console(stderr=True)


def _report(result: TransformResult) -> None:
    for fragment in result.fragments:
        err_console.print(
            f"  {result.filename}:{fragment.start_point.row + 1}:{fragment.start_point.column + 1} "
            f"[cyan]{fragment.component}[/cyan] key={fragment.key}",
            highlight=False,
        )


def transform(
    paths: Annotated[list[Path] | None, typer.Argument(help="Files or directories to transform.")] = None,
    code: Annotated[str | None, typer.Option(help="Source code string to transform instead of files.")] = None,
    language: Annotated[str | None, typer.Option(help="Language name (javascript, jsx, tsx).")] = None,
    write: Annotated[bool, typer.Option("--write", help="Rewrite files in place.")] = False,
    check: Annotated[bool, typer.Option("--check", help="Exit with status 1 if any file would change.")] = False,
) -> None:
    """Add keys to top-level fragments returned by function components."""
    try:
        if code is not None:
            result = transform_source(code, language=language)
            typer.echo(result.code, nl=False)
            if check and result.changed:
                raise typer.Exit(code=1)
            return

        if not paths:
            err_console.print("[red]Provide at least one path or --code.[/red]")
            raise typer.Exit(code=2)

        files = list(iter_source_files(paths))
        results = [transform_file(str(file), language) for file in files]
    except (ValueError, FileNotFoundError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from None

    changed = [result for result in results if result.changed]

    if check:
        for result in changed:
            err_console.print(f"[yellow]Would rewrite[/yellow] {result.filename}")
            _report(result)
        err_console.print(f"{len(changed)} of {len(results)} file(s) would change")
        if changed:
            raise typer.Exit(code=1)
        return

    if write:
        for result in changed:
            Path(result.filename).write_text(result.code, encoding="utf-8")
            err_console.print(f"[green]Rewrote[/green] {result.filename} ({len(result.fragments)} fragment(s))")
            _report(result)
        err_console.print(f"{len(changed)} of {len(results)} file(s) rewritten")
        return

    for result in results:
        if len(results) > 1:
            console.rule(result.filename)
        typer.echo(result.code, nl=False)


def passes() -> None:
    """List registered transformation passes."""
    for name, pass_cls in sorted(PASSES.items()):
        doc = (pass_cls.__doc__ or "").strip().splitlines()
        console.print(f"[bold]{name}[/bold]  {doc[0] if doc else ''}")
