"""Format analysis responses into terminal output and markdown."""

from datetime import datetime

from rich.markup import escape

from nyaaybot import __version__

DISCLAIMER = (
    "This analysis is AI-generated and may contain errors. Severity, court, "
    "and confidence are heuristic labels, not legal determinations. Verify "
    "everything against the source documents and consult a qualified lawyer."
)

SEVERITY_STYLES = {
    "High": "bold red",
    "Medium": "bold yellow",
    "Low": "bold green",
}


def format_terminal(response: dict) -> str:
    """Format an analysis response into rich-compatible terminal markup.

    Args:
        response: Dict from ``AnalysisResponse.to_dict()``.

    Returns:
        String with rich console markup for styled terminal output.
    """
    lines: list[str] = []
    stats = response.get("stats", {})
    severity = stats.get("severity", "Low")
    style = SEVERITY_STYLES.get(severity, "bold")

    # Header
    lines.append("")
    lines.append(f"[bold cyan]{'=' * 60}[/bold cyan]")
    lines.append("[bold cyan]  NYAAYBOT — Case Analysis[/bold cyan]")
    lines.append(f"[bold cyan]{'=' * 60}[/bold cyan]")
    lines.append(f"  [dim]Files:[/dim] {response.get('totalFiles', 0)}")
    lines.append("")

    # Stats
    lines.append("[bold yellow]  CASE STATS[/bold yellow]")
    lines.append(f"  [dim]{'─' * 56}[/dim]")
    lines.append(f"  [dim]Severity:[/dim]   [{style}]{severity}[/{style}]")
    lines.append(f"  [dim]Confidence:[/dim] {stats.get('confidence', 0)}%")
    lines.append(f"  [dim]Court:[/dim]      {escape(stats.get('court', ''))}")
    lines.append(f"  [dim]Time:[/dim]       {stats.get('timeTaken', 0)}s")
    lines.append("")

    summary = stats.get("summary", "")
    if summary:
        lines.append("[bold green]  SUMMARY[/bold green]")
        lines.append(f"  [dim]{'─' * 56}[/dim]")
        lines.append(f"  {escape(summary)}")
        lines.append("")

    # Narrative
    analysis = response.get("analysis", "")
    if analysis:
        lines.append("[bold magenta]  ANALYSIS[/bold magenta]")
        lines.append(f"  [dim]{'─' * 56}[/dim]")
        for paragraph in analysis.split("\n"):
            lines.append(f"  {escape(paragraph)}" if paragraph.strip() else "")
        lines.append("")

    # Files
    files = response.get("files", [])
    if files:
        lines.append("[bold blue]  FILES[/bold blue]")
        lines.append(f"  [dim]{'─' * 56}[/dim]")
        for entry in files:
            lines.append(
                f"  [bold]{escape(entry.get('fileName', '?'))}[/bold] "
                f"[dim]({entry.get('textLength', 0):,} chars)[/dim]"
            )
        lines.append("")

    lines.append(f"  [dim italic]{DISCLAIMER}[/dim italic]")
    lines.append(f"[bold cyan]{'=' * 60}[/bold cyan]")
    lines.append("")

    return "\n".join(lines)


def format_verbose(response: dict) -> str:
    """Per-file extraction previews for --verbose output."""
    lines = ["", "[dim]  Extraction details:[/dim]"]
    for entry in response.get("files", []):
        preview = escape(entry.get("preview", "").replace("\n", " "))
        name = escape(entry.get("fileName", "?"))
        lines.append(f"  [dim]  {name}: {preview}[/dim]")
    lines.append("")
    return "\n".join(lines)


def format_error(error: dict) -> str:
    """Format an error dict for terminal display.

    Args:
        error: Error dict with 'error' and optional 'details' keys.
    """
    code = escape(error.get("error", "unknown_error"))
    details = escape(error.get("details", ""))
    return f"\n[bold red]  Error: {code}[/bold red]\n  {details}\n"


def format_markdown(response: dict, jurisdiction: str) -> str:
    """Format an analysis response into a markdown report.

    Args:
        response: Dict from ``AnalysisResponse.to_dict()``.
        jurisdiction: Jurisdiction the analysis was run for.

    Returns:
        Markdown string suitable for writing to a .md file.
    """
    lines: list[str] = []
    stats = response.get("stats", {})
    now = datetime.now().strftime("%Y-%m-%d %H:%M")

    lines.append("# NyaayBot Case Analysis")
    lines.append("")
    lines.append(f"**Jurisdiction:** {jurisdiction}  ")
    lines.append(f"**Generated:** {now}  ")
    lines.append("")

    lines.append("## Case Stats")
    lines.append("")
    lines.append("| Severity | Confidence | Recommended Court | Time |")
    lines.append("|----------|------------|-------------------|------|")
    lines.append(
        f"| {stats.get('severity', '')} | {stats.get('confidence', '')}% "
        f"| {stats.get('court', '')} | {stats.get('timeTaken', '')}s |"
    )
    lines.append("")

    if stats.get("summary"):
        lines.append("## Summary")
        lines.append("")
        lines.append(stats["summary"])
        lines.append("")

    # The narrative is already markdown
    lines.append("## Analysis")
    lines.append("")
    lines.append(response.get("analysis", ""))
    lines.append("")

    files = response.get("files", [])
    if files:
        lines.append("## Files")
        lines.append("")
        lines.append("| File | Characters | Preview |")
        lines.append("|------|------------|---------|")
        for entry in files:
            preview = entry.get("preview", "").replace("\n", " ").replace("|", "\\|")
            lines.append(
                f"| {entry.get('fileName', '?')} | {entry.get('textLength', 0)} | {preview} |"
            )
        lines.append("")

    lines.append("---")
    lines.append(f"*{DISCLAIMER}*")
    lines.append("")
    lines.append(f"*Generated by NyaayBot v{__version__}*")
    lines.append("")

    return "\n".join(lines)
