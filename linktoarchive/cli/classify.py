"""Classify command."""

import json

import rich_click as click
from rich.table import Table

from ..config import load_settings
from ..link_utils import classify_url, is_http_url
from ..renderer import ArchiveLinkRenderer
from ._console import console


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of a table")
def classify(urls: tuple[str, ...], as_json: bool):
    """Show the variant and archive links of each URL."""
    renderer = ArchiveLinkRenderer(load_settings())

    rows = []
    for url in urls:
        descriptors = renderer.descriptors(url)
        rows.append(
            {
                "url": url,
                "variant": classify_url(url).value if is_http_url(url) else None,
                "archive_links": [d.href for d in descriptors],
            }
        )

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    table = Table(show_header=True)
    table.add_column("URL", style="bold")
    table.add_column("Variant")
    table.add_column("Archive links")

    for row in rows:
        variant = row["variant"] or "[dim]-[/dim]"
        links = "\n".join(row["archive_links"]) or "[dim]skipped[/dim]"
        table.add_row(row["url"], variant, links)

    console.print(table)
