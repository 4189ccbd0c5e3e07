from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from refine.config import Settings
from refine.core.instrument import Instrumenter
from refine.core.paths import to_template_id

console = Console()
err_console = Console(stderr=True)

RootOption = Annotated[list[Path] | None, typer.Option("--root", "-r", help="Template root directory (repeatable).")]
TemplateIdOption = Annotated[
    str | None, typer.Option("--template-id", help="Template id to embed (derived from --root by default).")
]
AttributeOption = Annotated[str | None, typer.Option("--attribute", help="Marker attribute name.")]
DialectOption = Annotated[str | None, typer.Option(help="Template dialect (blade, jinja).")]
ExtensionOption = Annotated[str | None, typer.Option(help="Template file extension, e.g. .blade.php.")]
NoComponentsOption = Annotated[bool, typer.Option("--no-components", help="Do not annotate component tags.")]
TemplateArgument = Annotated[
    Path, typer.Argument(help="Template file.", exists=True, dir_okay=False, readable=True, resolve_path=True)
]


def build_settings(
    root: list[Path] | None = None,
    attribute: str | None = None,
    dialect: str | None = None,
    extension: str | None = None,
    no_components: bool = False,
) -> Settings:
    try:
        return Settings.from_env(
            template_roots=tuple(str(r.resolve()) for r in root) if root else None,
            attribute_name=attribute,
            dialect=dialect,
            template_extension=extension,
            instrument_components=False if no_components else None,
        )
    except ValueError as exc:
        err_console.print(f"[red]Invalid settings:[/red] {escape(str(exc))}")
        raise typer.Exit(2) from None


def _template_id(path: Path, settings: Settings, template_id: str | None) -> str:
    if template_id:
        return template_id
    return to_template_id(path, settings.template_roots, settings.template_extension)


def instrument(
    path: TemplateArgument,
    root: RootOption = None,
    template_id: TemplateIdOption = None,
    attribute: AttributeOption = None,
    dialect: DialectOption = None,
    extension: ExtensionOption = None,
    no_components: NoComponentsOption = False,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to a file instead of stdout.")] = None,
) -> None:
    """Print a template with source markers added to its opening tags."""
    settings = build_settings(root, attribute, dialect, extension, no_components)
    source = path.read_text(encoding="utf-8")
    result = Instrumenter(settings).instrument(source, _template_id(path, settings, template_id), source)

    if output is None:
        typer.echo(result, nl=False)
    else:
        output.write_text(result, encoding="utf-8")
        err_console.print(f"[green]Wrote[/green] {output}")


def scan(
    path: TemplateArgument,
    root: RootOption = None,
    attribute: AttributeOption = None,
    dialect: DialectOption = None,
    extension: ExtensionOption = None,
    no_components: NoComponentsOption = False,
) -> None:
    """List candidate tags and whether each would be annotated."""
    settings = build_settings(root, attribute, dialect, extension, no_components)
    source = path.read_text(encoding="utf-8")
    tags = Instrumenter(settings).scan(source, source)

    table = Table(show_lines=False)
    for header in ("line", "tag", "status", "reason"):
        table.add_column(header)
    for tag in tags:
        if tag.already_annotated:
            status = "[dim]annotated[/dim]"
        elif tag.is_unsafe:
            status = "[red]unsafe[/red]"
        else:
            status = "[green]annotate[/green]"
        table.add_row(str(tag.line), escape(tag.tag_name), status, escape(tag.reason or ""))

    console.print(table)
    eligible = sum(1 for t in tags if t.is_eligible)
    console.print(f"({len(tags)} tags, {eligible} to annotate)", highlight=False)
