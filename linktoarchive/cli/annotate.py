"""Annotate and decorate commands."""

import sys
from pathlib import Path

import rich_click as click

from ..hooks import ArchiveLinkHooks
from ._console import console


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write result to this file")
@click.option("--stdout", is_flag=True, help="Output to stdout instead of file")
def annotate(path: Path, output: Path | None, stdout: bool):
    """Add archive links after the external links of a rendered HTML page."""
    hooks = ArchiveLinkHooks.from_config()
    source = path.read_text(encoding="utf-8")
    result = hooks.postprocessor.process(source)

    if stdout:
        click.echo(result.html, nl=False)
        return

    target = output or path.with_name(f"{path.stem}.archived{path.suffix}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.html, encoding="utf-8")
    console.print(f"Annotated {result.annotated} links")
    console.print(f"Written to: {target}")


@click.command()
@click.argument("url")
@click.option("--text", "-t", help="Link text (defaults to the URL)")
@click.option("--rel", help="rel attribute of the original link")
@click.option("--target", help="target attribute of the original link")
def decorate(url: str, text: str | None, rel: str | None, target: str | None):
    """Render one external link followed by its archive links."""
    hooks = ArchiveLinkHooks.from_config()
    attribs = {"class": "external free"}
    if rel:
        attribs["rel"] = rel
    if target:
        attribs["target"] = target

    decoration = hooks.on_linker_make_external_link(url, text or url, attribs)
    if not decoration.replaces_default:
        console.print("[yellow]Link left unchanged[/yellow]", highlight=False)
        sys.exit(1)

    click.echo(decoration.html)
