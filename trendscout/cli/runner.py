# trendscout/cli/runner.py

"""Headless CLI runner, reusing the async recommendation pipeline."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from trendscout.config.config_store import ConfigStore
from trendscout.models.report import RecommendationReport
from trendscout.services.collaborators import CollaboratorProvider
from trendscout.services.recommendation_pipeline import analyze_product
from trendscout.storage.file_manager import FileManager

logger = logging.getLogger("trendscout.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def parse_categories(category_csv: str | None) -> list[str] | None:
    """Split a comma-separated category list; None means random sampling."""
    if category_csv is None:
        return None
    categories = [c.strip() for c in category_csv.split(",") if c.strip()]
    return categories or None


def _dump_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _print_report(report: RecommendationReport) -> None:
    """Render product and niche tables to stdout."""
    table = Table(
        title="Product Recommendations",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Title", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Profit", justify="right")
    table.add_column("Trend", justify="center")
    table.add_column("Competition", justify="center")
    table.add_column("Category", style="magenta")

    for idx, p in enumerate(report.products, 1):
        profit = (
            f"${p.margins.profit:,.2f} ({p.margins.profit_margin}%)"
            if p.margins
            else "-"
        )
        table.add_row(
            str(idx),
            str(p.ai_score),
            p.title[:50],
            f"${p.price:,.2f}",
            profit,
            p.trend.value,
            p.competition.value,
            p.category,
        )

    niches = Table(title="Trending Niches", title_style="bold cyan")
    niches.add_column("Category", style="magenta")
    niches.add_column("Products", justify="right")
    niches.add_column("Avg Score", justify="right", style="bold")
    niches.add_column("Total Sales", justify="right")
    for n in report.niches:
        niches.add_row(
            n.category, str(n.count), str(n.avg_score), f"{n.total_sales:,}"
        )

    console = Console()
    console.print(table)
    console.print(niches)


def _save_report(
    report: RecommendationReport, output_dir: str
) -> None:
    try:
        file_manager = FileManager(Path(output_dir))
        path = file_manager.save_report(report)
        _err.print(f"[dim]Saved report → {path}[/dim]")
        csv_path = file_manager.export_csv(report.products)
        _err.print(f"[dim]Saved CSV → {csv_path}[/dim]")
    except Exception as exc:
        logger.error("Save failed: %s", exc, exc_info=True)
        _err.print(f"[red]Save failed: {exc}[/red]")


async def cli_recommend(
    category_csv: str | None,
    output_format: str,
    output_dir: str | None,
    provider: CollaboratorProvider | None = None,
) -> int:
    """Run one recommendation pass and return an exit code (0=ok, 1=fail)."""
    provider = provider or CollaboratorProvider()
    pipeline = provider.pipeline()
    mode = "AI-assisted" if provider.keys().has_openai_key else "heuristic"
    _err.print(f"[bold]Generating recommendations[/bold] [dim]({mode} scoring)[/dim]")

    report = await pipeline.generate(parse_categories(category_csv))
    _err.print(f"[dim]Categories: {', '.join(report.categories)}[/dim]")

    for error_msg in report.errors:
        _err.print(f"[red]Error: {error_msg}[/red]")

    if not report.success:
        _err.print(f"[yellow]{report.error}[/yellow]")
        if output_format == "json":
            _dump_json(report.to_dict())
        return 1

    _err.print(
        f"[green]✓ {report.total_products} products"
        f" in {len(report.niches)} niches[/green]"
    )

    if output_dir is not None:
        _save_report(report, output_dir)

    if output_format == "table":
        _print_report(report)
    else:
        _dump_json(report.to_dict())
    return 0


def cli_analyze(title: str, price: str) -> int:
    """Print margins and sourcing for one product."""
    analysis = analyze_product(title, price)
    _dump_json(analysis.to_dict())
    if not analysis.success:
        _err.print(f"[red]{analysis.error}[/red]")
        return 1
    return 0


def cli_search(
    endpoint_id: str,
    query: str,
    provider: CollaboratorProvider | None = None,
) -> int:
    """Pass a query through to one raw upstream endpoint."""
    provider = provider or CollaboratorProvider()
    try:
        data = provider.source().search(endpoint_id, query)
    except Exception as exc:
        logger.error("Search on %s failed: %s", endpoint_id, exc, exc_info=True)
        _err.print(f"[red]❌ {exc}[/red]")
        return 1
    _dump_json({"success": True, "data": data})
    return 0


def save_keys(api_key: str | None, openai_key: str | None) -> int:
    """Persist API keys to the config store."""
    ConfigStore().save(api_key=api_key, openai_key=openai_key)
    _err.print("[green]✅ Config saved[/green]")
    return 0


async def run_health_check(
    provider: CollaboratorProvider | None = None,
) -> int:
    """Check upstream connectivity and scoring configuration."""
    from trendscout.services.health_checker import HealthChecker

    _err.print("[bold]Running health check...[/bold]")
    checker = HealthChecker(provider)
    results = await checker.check_all()

    table = Table(
        title="Collaborator Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Service", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        elif r.status == "off":
            status = "[dim]- OFF[/dim]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "-"
        table.add_row(r.source_id, status, latency, r.message)

    Console().print(table)
    return 1 if any_down else 0
