"""
Command-line interface for docusage
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from docusage.catalog import CatalogError, CatalogStore, new_catalog
from docusage.constants import DEFAULT_CATALOG_PATH, DEFAULT_REPORT_LIMIT
from docusage.discovery import discover_catalog
from docusage.extractors.usage_extractor import ExtractorSettings, UsageExtractor
from docusage.graph import UsageGraph
from docusage.models import BuildSummary, UsageRecord
from docusage.pipeline import run_build
from docusage.readers import read_file_safe

# Create a console instance for all output
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _make_extractor(args: argparse.Namespace) -> UsageExtractor:
    return UsageExtractor(ExtractorSettings(dedupe_hook_calls=args.dedupe_hooks))


def print_usage_table(page: str, records: list[UsageRecord]) -> None:
    """Print the usage records of one page."""
    if not records:
        console.print(f"[yellow]No catalog components or hooks used in {rich_escape(page)}.[/]")
        return

    table = Table(title=f"Used in {page}", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="dim")
    table.add_column("Count", justify="right", style="bold")
    table.add_column("First usage", style="white", overflow="fold")

    for record in records:
        table.add_row(
            rich_escape(record.name),
            rich_escape(record.type),
            str(record.count),
            rich_escape(record.first_usage),
        )

    console.print(table)


def print_build_summary(summary: BuildSummary, catalog_path: Path) -> None:
    """Print the outcome of a catalog build."""
    text = Text()
    text.append("Pages:          ", style="bold")
    text.append(f"{summary.pages_total}\n", style="cyan bold")
    text.append("Analyzed:       ", style="bold")
    text.append(f"{summary.pages_analyzed}\n", style="green bold")
    text.append("With usage:     ", style="bold")
    text.append(f"{summary.pages_with_usage}\n", style="green bold")
    text.append("Missing source: ", style="bold")
    text.append(f"{len(summary.pages_missing)}", style="yellow bold" if summary.pages_missing else "dim")

    console.print(Panel(text, title="[bold blue]Component Usage Build[/]", border_style="blue"))

    for name in summary.pages_missing:
        console.print(f"  [yellow]⚠[/] Could not find source for [white]{rich_escape(name)}[/]")

    console.print(f"\n[bold green]✓[/] Updated [underline]{rich_escape(str(catalog_path))}[/]")


def print_report(graph: UsageGraph, limit: int) -> None:
    """Print catalog-wide usage rankings and unused entities."""
    ranking = graph.most_used(limit)

    table = Table(title="Most Used", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Uses", justify="right", style="bold")
    table.add_column("Pages", style="green")

    for name, total in ranking:
        pages = ", ".join(graph.pages_using(name))
        table.add_row(rich_escape(name), str(total), rich_escape(pages))

    console.print(table)

    unused = graph.unused_entities()
    if unused:
        console.print(f"\n[bold yellow]Unused ({len(unused)}):[/]")
        for name in unused:
            console.print(f"  [dim]•[/] [yellow]{rich_escape(name)}[/]")
    else:
        console.print("\n[green]✓ Every component and hook is used by a page.[/]")


def cmd_extract(args: argparse.Namespace) -> int:
    """Show the catalog entities one page uses."""
    data = CatalogStore.load(args.catalog)

    source = read_file_safe(args.page)
    if source is None:
        console.print(f"[bold red]Error:[/] Cannot read page: {rich_escape(str(args.page))}")
        return 1

    records = _make_extractor(args).extract(source, CatalogStore.entries(data))

    if args.json:
        console.print_json(json.dumps([record.to_dict() for record in records]))
    else:
        print_usage_table(args.page.name, records)
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Attach usedComponents to every page in the catalog."""
    console.print(f"[bold]Building component usage for:[/] [blue]{rich_escape(str(args.catalog))}[/]")
    summary = run_build(args.catalog, base_dir=args.base_dir, extractor=_make_extractor(args))
    print_build_summary(summary, args.catalog)
    return 0


def cmd_discover(args: argparse.Namespace) -> int:
    """Scan a source tree and write a fresh catalog."""
    console.print(f"[bold]Scanning:[/] [blue]{rich_escape(str(args.directory.resolve()))}[/]")
    entries = discover_catalog(args.directory, project_root=args.project_root)
    CatalogStore.save(new_catalog(entries), args.output)

    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.type] = counts.get(entry.type, 0) + 1
    summary = ", ".join(f"{count} {kind}s" for kind, count in sorted(counts.items())) or "nothing"

    console.print(f"Found {summary}")
    console.print(f"\n[bold green]✓[/] Catalog saved to [underline]{rich_escape(str(args.output))}[/]")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Rank catalog entities by usage across pages."""
    graph = UsageGraph.from_catalog(CatalogStore.load(args.catalog))
    print_report(graph, args.top)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Component usage extraction for React documentation sites"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Show components and hooks used by one page")
    extract.add_argument("page", type=Path, help="Page source file")
    extract.add_argument(
        "--catalog",
        type=Path,
        default=Path(DEFAULT_CATALOG_PATH),
        help=f"Catalog JSON file (default: {DEFAULT_CATALOG_PATH})"
    )
    extract.add_argument("--json", action="store_true", help="Print records as JSON")
    extract.set_defaults(handler=cmd_extract)

    build = subparsers.add_parser("build", help="Add usedComponents to every page in the catalog")
    build.add_argument(
        "--catalog",
        type=Path,
        default=Path(DEFAULT_CATALOG_PATH),
        help=f"Catalog JSON file, updated in place (default: {DEFAULT_CATALOG_PATH})"
    )
    build.add_argument(
        "--base-dir",
        type=Path,
        help="Directory page paths are resolved from (default: current directory)"
    )
    build.set_defaults(handler=cmd_build)

    for sub in (extract, build):
        sub.add_argument(
            "--dedupe-hooks",
            action="store_true",
            help="Count a destructured hook call once instead of twice"
        )

    discover = subparsers.add_parser("discover", help="Build a catalog from a source tree")
    discover.add_argument("directory", type=Path, help="Source directory to scan")
    discover.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_CATALOG_PATH),
        help=f"Catalog file to write (default: {DEFAULT_CATALOG_PATH})"
    )
    discover.add_argument(
        "--project-root",
        type=Path,
        help="Root that recorded file paths are relative to (default: the scanned directory)"
    )
    discover.set_defaults(handler=cmd_discover)

    report = subparsers.add_parser("report", help="Rank components and hooks by usage")
    report.add_argument(
        "--catalog",
        type=Path,
        default=Path(DEFAULT_CATALOG_PATH),
        help=f"Catalog JSON file (default: {DEFAULT_CATALOG_PATH})"
    )
    report.add_argument(
        "--top",
        type=int,
        default=DEFAULT_REPORT_LIMIT,
        help=f"Number of entries to rank (default: {DEFAULT_REPORT_LIMIT})"
    )
    report.set_defaults(handler=cmd_report)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return args.handler(args)
    except (FileNotFoundError, NotADirectoryError) as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        return 1
    except CatalogError as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        return 1


if __name__ == "__main__":
    exit(main())
