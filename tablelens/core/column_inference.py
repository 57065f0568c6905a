"""
Column Inference

Classifies columns by their values (numeric / categorical / text) and
guesses which columns carry region, product and date semantics from
their names.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import logging

from tablelens.config import AnalysisConfig
from tablelens.core.cells import Table, cell_text, column_names, to_number
from tablelens.core.results import ColumnType

logger = logging.getLogger(__name__)


class ColumnTypeInferencer:
    """Classifies each column independently of row order."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def infer(self, table: Table) -> Dict[str, ColumnType]:
        """Map every column of the table to its ColumnType."""
        types = {}
        for col in column_names(table):
            types[col] = self.classify([row.get(col) for row in table])
        logger.debug(f"Inferred types for {len(types)} columns")
        return types

    def classify(self, values: Sequence) -> ColumnType:
        """Classify one column from its raw cell values."""
        present = [v for v in values if cell_text(v) != ""]
        if not present:
            return ColumnType.TEXT

        numeric_count = sum(1 for v in present if to_number(v) is not None)
        if numeric_count / len(present) > self.config.numeric_ratio:
            return ColumnType.NUMERIC

        distinct = {cell_text(v) for v in present}
        if len(distinct) <= self.config.categorical_max_distinct:
            return ColumnType.CATEGORICAL
        return ColumnType.TEXT


def infer_column_types(table: Table) -> Dict[str, ColumnType]:
    return ColumnTypeInferencer().infer(table)


def find_numeric_columns(table: Table) -> List[str]:
    """Numeric columns in schema order."""
    return [col for col, t in infer_column_types(table).items() if t == ColumnType.NUMERIC]


@dataclass(frozen=True)
class KeywordRule:
    """A column-name keyword; rules earlier in a list take priority."""
    keyword: str
    case_sensitive: bool = False

    def matches(self, column: str) -> bool:
        if self.case_sensitive:
            return self.keyword in column
        return self.keyword.lower() in column.lower()


def _rules(words: Sequence[str], suffixed: Sequence[str] = (), case_sensitive: bool = False):
    keywords = list(words) + list(suffixed) + [f"{w}_" for w in suffixed]
    return tuple(KeywordRule(k, case_sensitive) for k in keywords)


REGION_RULES = _rules(
    ["地区", "省", "市", "来源", "区域", "地域", "城市", "地址", "所在地"],
    ["state", "region", "province", "city", "address", "location", "area", "country", "zone"],
)

PRODUCT_RULES = _rules(
    ["产品", "商品", "品名", "SKU", "名称", "品类", "类目", "货品"],
    ["product", "item", "sku", "name", "category", "goods", "merchandise"],
)

DATE_RULES = _rules(["日期", "时间", "下单", "销售", "创建", "订单"], case_sensitive=True)


def match_column(columns: Sequence[str], rules: Sequence[KeywordRule]) -> Optional[str]:
    """
    Pick the column for the highest-priority keyword.

    Keywords are tried in order; for each, the leftmost column containing
    it wins. Returns None when no keyword matches any column.
    """
    for rule in rules:
        for col in columns:
            if rule.matches(col):
                return col
    return None


def find_region_column(table: Table) -> Optional[str]:
    return match_column(column_names(table), REGION_RULES)


def find_product_column(table: Table) -> Optional[str]:
    return match_column(column_names(table), PRODUCT_RULES)


def find_date_column(table: Table) -> Optional[str]:
    return match_column(column_names(table), DATE_RULES)
