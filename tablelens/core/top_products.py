"""
Top-N Cross-Tab Builder

Picks the best-selling products and cross-tabulates them against regions.
The stacked view shares one set of top regions across all top products;
the grouped view ranks regions separately for each product.
"""

from typing import Dict, List, Optional
import logging

from tablelens.config import AnalysisConfig, LabelConfig
from tablelens.core.cells import Table, group_key, number_or_zero
from tablelens.core.results import GroupRow, StackRow, TopProductsRegionBundle

logger = logging.getLogger(__name__)


def _ranked(totals: Dict[str, float], limit: int) -> List[str]:
    return [name for name, _ in sorted(totals.items(), key=lambda kv: -kv[1])[:limit]]


class TopProductsRegionBuilder:
    """Builds the stacked and grouped product-by-region views."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        labels: Optional[LabelConfig] = None,
    ):
        self.config = config or AnalysisConfig()
        self.labels = labels or LabelConfig()

    def build(
        self,
        table: Table,
        product_column: Optional[str],
        region_column: Optional[str],
        value_column: Optional[str],
    ) -> Optional[TopProductsRegionBundle]:
        """
        Cross-tabulate top products against top regions.

        Non-numeric values count as 0. Returns None when a column is
        missing or the table is empty.
        """
        if not table or not product_column or not region_column or not value_column:
            return None

        product_sales: Dict[str, float] = {}
        for row in table:
            product = group_key(row.get(product_column), self.labels.unnamed)
            product_sales[product] = product_sales.get(product, 0) + number_or_zero(row.get(value_column))

        top_products = _ranked(product_sales, self.config.top_products)
        if not top_products:
            return None

        by_product: Dict[str, Dict[str, float]] = {}
        region_totals: Dict[str, float] = {}
        for row in table:
            product = group_key(row.get(product_column), self.labels.unnamed)
            if product not in top_products:
                continue
            region = group_key(row.get(region_column), self.labels.unnamed)
            value = number_or_zero(row.get(value_column))
            per_region = by_product.setdefault(product, {})
            per_region[region] = per_region.get(region, 0) + value
            region_totals[region] = region_totals.get(region, 0) + value

        top_regions = _ranked(region_totals, self.config.top_regions)

        stack_data = [
            StackRow(
                name=region,
                values={p: by_product.get(p, {}).get(region, 0) for p in top_products},
            )
            for region in top_regions
        ]

        group_data = []
        for product in top_products:
            per_region = by_product.get(product, {})
            own_regions = _ranked(per_region, self.config.top_regions)
            group_data.append(GroupRow(
                product=product,
                regions={r: per_region[r] for r in own_regions},
                total=product_sales[product],
            ))

        logger.debug(f"Top products {top_products} across {len(top_regions)} regions")
        return TopProductsRegionBundle(
            top_products=top_products,
            top_regions=top_regions,
            product_sales=product_sales,
            stack_data=stack_data,
            group_data=group_data,
        )


def build_top_products_by_region(
    table: Table,
    product_column: Optional[str],
    region_column: Optional[str],
    value_column: Optional[str],
) -> Optional[TopProductsRegionBundle]:
    return TopProductsRegionBuilder().build(table, product_column, region_column, value_column)
