"""Analytics engine for TableLens."""

from tablelens.core.table import normalize_headers
from tablelens.core.pii_scanner import PIIScanner, scan_pii
from tablelens.core.column_inference import (
    ColumnTypeInferencer,
    infer_column_types,
    find_numeric_columns,
    find_region_column,
    find_product_column,
    find_date_column,
)
from tablelens.core.aggregation import count_by_column, sum_by_group
from tablelens.core.product_region import ProductRegionAnalyzer, analyze_product_regions
from tablelens.core.top_products import TopProductsRegionBuilder, build_top_products_by_region
from tablelens.core.hot_products import HotProductScorer, score_hot_products
from tablelens.core.results import ColumnType

__all__ = [
    "normalize_headers",
    "PIIScanner",
    "scan_pii",
    "ColumnTypeInferencer",
    "infer_column_types",
    "find_numeric_columns",
    "find_region_column",
    "find_product_column",
    "find_date_column",
    "count_by_column",
    "sum_by_group",
    "ProductRegionAnalyzer",
    "analyze_product_regions",
    "TopProductsRegionBuilder",
    "build_top_products_by_region",
    "HotProductScorer",
    "score_hot_products",
    "ColumnType",
]
