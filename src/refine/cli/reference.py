from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from refine.cli.instrument import ExtensionOption, RootOption, build_settings
from refine.core import codec
from refine.core.reference import DEFAULT_CONTEXT_LINES, excerpt, lookup
from refine.errors import InvalidReferenceError, TemplateNotFoundError

console = Console()
err_console = Console(stderr=True)


def encode(
    template_id: Annotated[str, typer.Argument(help="Dot-delimited template id, e.g. components.alert.")],
    line: Annotated[int, typer.Argument(help="1-based line number.")],
) -> None:
    """Print the marker token for a template id and line."""
    try:
        token = codec.encode(template_id, line)
    except ValueError:
        err_console.print("[red]Template id must not be empty and line must be >= 1.[/red]")
        raise typer.Exit(2) from None
    typer.echo(token)


def decode(
    token: Annotated[str, typer.Argument(help="Marker token from a rendered element.")],
) -> None:
    """Print the reference encoded in a marker token as JSON."""
    reference = codec.decode(token)
    if reference is None:
        err_console.print("[red]Invalid source reference[/red]")
        raise typer.Exit(1)
    typer.echo(reference.model_dump_json())


def locate(
    token: Annotated[str, typer.Argument(help="Marker token from a rendered element.")],
    root: RootOption = None,
    extension: ExtensionOption = None,
    context: Annotated[int, typer.Option(min=0, help="Lines of context around the target.")] = DEFAULT_CONTEXT_LINES,
) -> None:
    """Resolve a marker token to its template file and show the surrounding lines."""
    settings = build_settings(root=root, extension=extension)
    try:
        resolved = lookup(token, settings.template_roots, settings.template_extension)
    except InvalidReferenceError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None
    except TemplateNotFoundError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(2) from None

    try:
        region = excerpt(Path(resolved.path), resolved.line, context)
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Could not read {escape(resolved.path)}:[/red] {escape(str(exc))}")
        raise typer.Exit(2) from None
    console.print(
        f"[bold]{escape(resolved.path)}[/bold]:{resolved.line} ({escape(resolved.template_id)})", highlight=False
    )
    width = len(str(region.end_line))
    for number, text in enumerate(region.lines, start=region.start_line):
        gutter = str(number).rjust(width)
        if number == resolved.line:
            console.print(f"[yellow]{gutter} > {escape(text)}[/yellow]", highlight=False)
        else:
            console.print(f"{gutter}   {escape(text)}", highlight=False)
