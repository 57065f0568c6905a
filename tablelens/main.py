"""
TableLens - Main Entry Point

Command-line interface for analyzing sales spreadsheets.
"""

import sys
import logging
from typing import List, Optional
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape

from tablelens import __version__
from tablelens.analyzer import DashboardAnalyzer
from tablelens.config import OutputFormat, TableLensConfig, create_default_config
from tablelens.core.column_inference import ColumnTypeInferencer
from tablelens.core.pii_scanner import PIIScanner
from tablelens.core.results import AggregatedBucket, ColumnSelection, DashboardReport, PIIScanResult
from tablelens.io.reader import read_table

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()


def _load_config(config_path: Optional[str], as_json: bool, output_dir: Optional[str]) -> TableLensConfig:
    if not config_path:
        return create_default_config(output_format="json" if as_json else "table", output_dir=output_dir)

    config = TableLensConfig.from_yaml(config_path)
    if as_json:
        config.output.format = OutputFormat.JSON
    if output_dir:
        config.output.output_dir = output_dir
    return config


def _fail(e: Exception, verbose: bool):
    console.print(f"\n[bold red]✗ Error: {escape(str(e))}[/bold red]")
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


def _bucket_table(title: str, buckets: List[AggregatedBucket], limit: int) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for bucket in buckets[:limit]:
        table.add_row(bucket.name, f"{bucket.value:,.2f}".rstrip("0").rstrip("."))
    return table


def _print_pii(result: PIIScanResult):
    if not result.total_count:
        console.print("[green]No sensitive information detected.[/green]")
        return

    summary = Table(title="🔒 Sensitive Information", show_header=True)
    summary.add_column("Type", style="cyan")
    summary.add_column("Matches", style="red", justify="right")
    for bucket in result.summary:
        summary.add_row(bucket.name, str(int(bucket.value)))
    summary.add_row("[bold]Total[/bold]", f"[bold]{result.total_count}[/bold]")
    console.print(summary)

    columns = Table(title="Flagged Columns", show_header=True)
    columns.add_column("Column", style="cyan")
    columns.add_column("Types", style="yellow")
    columns.add_column("Matches", justify="right")
    for name in result.flagged_columns:
        col = result.by_column[name]
        types = sorted({f.type for f in col.findings})
        columns.add_row(name, ", ".join(types), str(col.match_count))
    console.print(columns)


def _print_report(report: DashboardReport, limit: int):
    stats = report.get_statistics()
    overview = Table(title="📊 Overview", show_header=True)
    overview.add_column("Metric", style="cyan")
    overview.add_column("Value", style="green")
    overview.add_row("Total Records", f"{stats['total_rows']:,}")
    overview.add_row("Columns", str(stats["total_columns"]))
    overview.add_row("Sensitive Matches", str(stats["pii_matches"]))
    sel = report.selection
    for role, name in (
        ("Region Column", sel.region),
        ("Product Column", sel.product),
        ("Value Column", sel.value),
        ("Date Column", sel.date),
    ):
        overview.add_row(role, name or "—")
    console.print(overview)
    console.print()

    _print_pii(report.pii)

    if report.hot_products.products:
        mode = "date column" if report.hot_products.split_mode == "date" else "row order (first 30% = recent)"
        hot = Table(title=f"🔥 Hot Products (split by {mode})", show_header=True)
        hot.add_column("#", justify="right")
        hot.add_column("Product", style="cyan")
        hot.add_column("Hot Score", style="red", justify="right")
        hot.add_column("Share %", justify="right")
        hot.add_column("Recent", justify="right")
        hot.add_column("Earlier", justify="right")
        hot.add_column("Unit Price", justify="right")
        for i, p in enumerate(report.hot_products.products[:limit], 1):
            hot.add_row(
                str(i), p.name, f"{p.hot_score:.2f}", f"{p.sales_share:.2f}",
                f"{p.recent_sales:,.2f}", f"{p.earlier_sales:,.2f}", f"{p.recent_unit_price:,.2f}",
            )
        console.print(hot)

    if report.product_regions:
        prof = Table(title="🗺 Product × Region", show_header=True)
        prof.add_column("Product", style="cyan")
        prof.add_column("Orders", justify="right")
        prof.add_column("Top Region", style="green")
        prof.add_column("Top Share %", justify="right")
        for p in report.product_regions[:limit]:
            prof.add_row(p.product, str(p.total_orders), p.top_region, f"{p.top_region_share:.1f}")
        console.print(prof)

    bundle = report.top_products
    if bundle and bundle.stack_data:
        cross = Table(title="🏆 Top Products by Region", show_header=True)
        cross.add_column("Region", style="cyan")
        for product in bundle.top_products:
            cross.add_column(product, justify="right")
        for row in bundle.stack_data:
            cross.add_row(row.name, *(f"{row.values[p]:,.2f}" for p in bundle.top_products))
        console.print(cross)

    if sel.region and report.region_counts:
        console.print(_bucket_table(f"Distribution by {sel.region}", report.region_counts, limit))
    if sel.region and report.amount_by_region:
        console.print(_bucket_table(f"{sel.value} by {sel.region}", report.amount_by_region, limit))
    if sel.category and report.category_counts:
        console.print(_bucket_table(f"Category: {sel.category}", report.category_counts, limit))
    if sel.other_dimension and sel.other_dimension != sel.region and report.other_counts:
        console.print(_bucket_table(f"Dimension: {sel.other_dimension}", report.other_counts, limit))


# CLI Commands
@click.group()
@click.version_option(version=__version__, prog_name="TableLens")
def cli():
    """TableLens - Spreadsheet PII detection and sales analytics"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--product-col', help='Product column (detected if omitted)')
@click.option('--region-col', help='Region column (detected if omitted)')
@click.option('--value-col', help='Sales amount column (first numeric column if omitted)')
@click.option('--date-col', help='Order date column (detected if omitted)')
@click.option('--sheet', default='0', help='Sheet index or name for Excel files')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True), help='YAML config file')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.option('--output', '-o', help='Directory to write the JSON report to')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def analyze(file, product_col, region_col, value_col, date_col, sheet, config_path, as_json, output, verbose):
    """
    Analyze a spreadsheet and print every view.

    Examples:

        tablelens analyze sales.xlsx

        tablelens analyze orders.csv --value-col 金额 --json
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = _load_config(config_path, as_json, output)
        if config.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        rows = read_table(file, sheet=int(sheet) if sheet.isdigit() else sheet,
                          unnamed_column=config.labels.unnamed_column)

        overrides = ColumnSelection(region=region_col, product=product_col, value=value_col, date=date_col)
        report = DashboardAnalyzer(config).run(rows, source=Path(file).name, overrides=overrides)

        if config.output.output_dir:
            out_dir = Path(config.output.output_dir)
            out_dir.mkdir(parents=True, exist_ok=True)
            out_path = out_dir / f"{Path(file).stem}_report.json"
            out_path.write_text(report.to_json(), encoding="utf-8")
            logger.info(f"Report written to {out_path}")

        if config.output.format == OutputFormat.JSON:
            click.echo(report.to_json())
        else:
            console.print(Panel(
                f"[bold blue]TableLens[/bold blue]\n[dim]{report.source}[/dim]",
                border_style="blue"
            ))
            _print_report(report, config.output.max_rows)

    except Exception as e:
        _fail(e, verbose)


@cli.command('scan-pii')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Print findings as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def scan_pii(file, as_json, verbose):
    """Scan a spreadsheet for sensitive information only."""
    try:
        rows = read_table(file)
        result = PIIScanner().scan(rows)
        if as_json:
            import json
            click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            _print_pii(result)
    except Exception as e:
        _fail(e, verbose)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def columns(file):
    """Show inferred column types."""
    try:
        rows = read_table(file)
        types = ColumnTypeInferencer().infer(rows)

        table = Table(title=f"Columns of {Path(file).name}", show_header=True)
        table.add_column("Column", style="cyan")
        table.add_column("Type", style="green")
        for name, col_type in types.items():
            table.add_row(name, col_type.value)
        console.print(table)
    except Exception as e:
        _fail(e, False)


@cli.command()
def version():
    """Show version information."""
    console.print(Panel(
        f"[bold]TableLens[/bold] v{__version__}\n\n"
        "Spreadsheet sensitive-data detection and sales analytics.\n\n"
        "Components:\n"
        "  • PII Scanner\n"
        "  • Column Type & Role Inference\n"
        "  • Aggregations\n"
        "  • Product-Region Analyzer\n"
        "  • Top Products Cross-Tab\n"
        "  • Hot Product Scorer",
        title="About",
        border_style="blue"
    ))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
