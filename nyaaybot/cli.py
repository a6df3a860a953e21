"""Command-line interface for NyaayBot."""

import json
import logging
import mimetypes
import os
import sys

import click
from rich.console import Console
from rich.markup import escape

from nyaaybot.config import Settings
from nyaaybot.formatter import (
    format_terminal,
    format_verbose,
    format_error,
    format_markdown,
)
from nyaaybot.models import UploadedFile
from nyaaybot.pipeline import CaseAnalysisPipeline

console = Console()


def _load_file(path: str) -> UploadedFile:
    mime_type, _ = mimetypes.guess_type(path)
    with open(path, "rb") as f:
        data = f.read()
    return UploadedFile(
        name=os.path.basename(path),
        mime_type=mime_type or "",
        data=data,
    )


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--jurisdiction", "-j",
    default=None,
    help="Jurisdiction to analyze under (default: India, or NYAAYBOT_DEFAULT_JURISDICTION).",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Save the analysis as a markdown file at this path.",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Print the raw JSON response instead of formatted output.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Show per-file extraction previews and progress logs.",
)
def main(paths: tuple[str, ...], jurisdiction: str | None, output: str | None,
         as_json: bool, verbose: bool) -> None:
    """Analyze legal documents and report case stats.

    Extracts text from each of PATHS (PDF, DOCX, TXT, or images),
    sends it to Claude for a narrative analysis, and derives severity,
    confidence, a recommended court, and a short summary.

    \b
    Examples:
        nyaaybot fir.pdf
        nyaaybot fir.pdf witness.docx scan.png --jurisdiction "United Kingdom"
        nyaaybot notice.txt --output report.md
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    settings = Settings.from_env()
    jurisdiction = jurisdiction or settings.default_jurisdiction
    files = [_load_file(p) for p in paths]

    pipeline = CaseAnalysisPipeline(settings=settings)
    label = f"[bold cyan]Analyzing {len(files)} file{'s' if len(files) != 1 else ''}...[/bold cyan]"

    try:
        with console.status(label, spinner="dots"):
            response = pipeline.run(files, jurisdiction).to_dict()
    except Exception as e:
        console.print(format_error({"error": "Failed to analyze documents", "details": str(e)}))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(response, ensure_ascii=False, indent=2))
    else:
        if verbose:
            console.print(format_verbose(response))
        console.print(format_terminal(response))

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(format_markdown(response, jurisdiction))
        console.print(f"  [green]Saved markdown report to:[/green] {escape(output)}\n")
