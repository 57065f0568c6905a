"""
Product-Region Analyzer

Shows, per product, how its orders spread across regions and which
region dominates.
"""

from typing import Dict, List, Optional
import logging

from tablelens.config import AnalysisConfig, LabelConfig
from tablelens.core.cells import Table, group_key
from tablelens.core.results import ProductRegionProfile, RegionShare

logger = logging.getLogger(__name__)


class ProductRegionAnalyzer:
    """
    Counts orders per (product, region) pair.

    Products are ranked by total order count and capped at
    ``product_region_limit``.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        labels: Optional[LabelConfig] = None,
    ):
        self.config = config or AnalysisConfig()
        self.labels = labels or LabelConfig()

    def analyze(
        self,
        table: Table,
        product_column: Optional[str],
        region_column: Optional[str],
    ) -> List[ProductRegionProfile]:
        """
        Build one ProductRegionProfile per product.

        Args:
            table: Parsed rows
            product_column: Column naming the product
            region_column: Column naming the region

        Returns:
            Profiles sorted by total orders, descending
        """
        if not table or not product_column or not region_column:
            return []

        region_counts: Dict[str, Dict[str, int]] = {}
        totals: Dict[str, int] = {}
        for row in table:
            product = group_key(row.get(product_column), self.labels.unnamed)
            region = group_key(row.get(region_column), self.labels.unnamed)
            per_region = region_counts.setdefault(product, {})
            per_region[region] = per_region.get(region, 0) + 1
            totals[product] = totals.get(product, 0) + 1

        profiles = [
            self._profile(product, per_region, totals[product])
            for product, per_region in region_counts.items()
        ]
        profiles.sort(key=lambda p: -p.total_orders)
        logger.debug(f"Profiled {len(profiles)} products across regions")
        return profiles[:self.config.product_region_limit]

    def _profile(self, product: str, per_region: Dict[str, int], total: int) -> ProductRegionProfile:
        regions = [
            RegionShare(region=region, count=count, percent=count / total * 100)
            for region, count in per_region.items()
        ]
        regions.sort(key=lambda r: -r.count)
        return ProductRegionProfile(
            product=product,
            total_orders=total,
            top_region=regions[0].region,
            top_region_share=regions[0].percent,
            regions=regions,
        )


def analyze_product_regions(
    table: Table,
    product_column: Optional[str],
    region_column: Optional[str],
) -> List[ProductRegionProfile]:
    return ProductRegionAnalyzer().analyze(table, product_column, region_column)
