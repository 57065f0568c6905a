"""
Dashboard Analyzer

Runs every analysis over one table and picks the columns each view is
built on.
"""

from typing import Optional
import logging

from tablelens.config import TableLensConfig
from tablelens.core.aggregation import count_by_column, sum_by_group
from tablelens.core.cells import Table, column_names
from tablelens.core.column_inference import (
    ColumnTypeInferencer,
    find_date_column,
    find_product_column,
    find_region_column,
)
from tablelens.core.hot_products import HotProductScorer
from tablelens.core.pii_scanner import PIIScanner
from tablelens.core.product_region import ProductRegionAnalyzer
from tablelens.core.results import ColumnSelection, ColumnType, DashboardReport
from tablelens.core.top_products import TopProductsRegionBuilder

logger = logging.getLogger(__name__)


class DashboardAnalyzer:
    """
    Orchestrates the analytics engine for one uploaded table.

    Stages:
    1. Scan cells for PII
    2. Infer column types
    3. Select region/product/value/date columns
    4. Aggregate and score
    """

    def __init__(self, config: Optional[TableLensConfig] = None):
        self.config = config or TableLensConfig()
        analysis = self.config.analysis
        labels = self.config.labels

        self.pii_scanner = PIIScanner()
        self.type_inferencer = ColumnTypeInferencer(analysis)
        self.product_region_analyzer = ProductRegionAnalyzer(analysis, labels)
        self.top_products_builder = TopProductsRegionBuilder(analysis, labels)
        self.hot_product_scorer = HotProductScorer(analysis, labels)

    def run(
        self,
        table: Table,
        source: Optional[str] = None,
        overrides: Optional[ColumnSelection] = None,
    ) -> DashboardReport:
        """
        Derive every view for the table.

        Args:
            table: Parsed rows
            source: Name of the uploaded file, for display
            overrides: Columns chosen by the user; None fields are detected

        Returns:
            A fresh DashboardReport
        """
        report = DashboardReport(source=source, row_count=len(table), columns=column_names(table))
        if not table:
            logger.info("Empty table, nothing to analyze")
            return report

        report.pii = self.pii_scanner.scan(table)
        report.column_types = self.type_inferencer.infer(table)
        report.selection = self.select_columns(table, report, overrides)
        self._aggregate(table, report)

        logger.info(
            f"Analyzed {report.row_count} rows: {report.pii.total_count} PII matches, "
            f"{len(report.hot_products)} hot products"
        )
        return report

    def select_columns(
        self,
        table: Table,
        report: DashboardReport,
        overrides: Optional[ColumnSelection] = None,
    ) -> ColumnSelection:
        """Pick the column for each analytical role."""
        overrides = overrides or ColumnSelection()
        columns = report.columns
        types = report.column_types

        for name in (overrides.region, overrides.product, overrides.value, overrides.date):
            if name and name not in columns:
                logger.warning(f"Column '{name}' not found in table; ignoring it")

        def chosen(name: Optional[str]) -> Optional[str]:
            return name if name in columns else None

        numeric = [c for c in columns if types.get(c) == ColumnType.NUMERIC]
        categorical = [c for c in columns if types.get(c) == ColumnType.CATEGORICAL]

        region = chosen(overrides.region) or find_region_column(table)
        category = chosen(overrides.category) or (categorical[0] if categorical else None)
        other = chosen(overrides.other_dimension) or next(
            (c for c in categorical if c != region and c != category),
            columns[0] if columns else None,
        )
        product = (
            chosen(overrides.product)
            or find_product_column(table)
            or category
            or (columns[0] if columns else None)
        )

        selection = ColumnSelection(
            region=region,
            product=product,
            value=chosen(overrides.value) or (numeric[0] if numeric else None),
            date=chosen(overrides.date) or find_date_column(table),
            category=category,
            other_dimension=other,
        )
        logger.debug(f"Column selection: {selection.to_dict()}")
        return selection

    def _aggregate(self, table: Table, report: DashboardReport):
        sel = report.selection
        empty = self.config.labels.empty

        if sel.region:
            report.region_counts = count_by_column(table, sel.region, empty)
            if sel.value:
                report.amount_by_region = sum_by_group(table, sel.region, sel.value, empty)
        if sel.category:
            report.category_counts = count_by_column(table, sel.category, empty)
        if sel.other_dimension:
            report.other_counts = count_by_column(table, sel.other_dimension, empty)

        if sel.product and sel.value:
            report.hot_products = self.hot_product_scorer.score(table, sel.product, sel.value, sel.date)
        report.product_regions = self.product_region_analyzer.analyze(table, sel.product, sel.region)
        report.top_products = self.top_products_builder.build(table, sel.product, sel.region, sel.value)


def analyze_table(table: Table, config: Optional[TableLensConfig] = None) -> DashboardReport:
    return DashboardAnalyzer(config).run(table)
