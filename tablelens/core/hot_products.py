"""
Hot-Product Scorer

Splits the table into a recent and an earlier window and ranks products
by a score that combines their overall sales share with recent volume.

Splitting:
- With a date column, rows in the last 30% of the observed time span are
  recent. Rows whose date cannot be parsed are dropped.
- Without one (or with fewer than two parseable dates) the first 30% of
  rows in table order are recent. Many exports list newest rows first;
  this is an assumption, not a guarantee.

Scoring:
    hotScore = min(5, salesShare / 10) * sqrt(recentSales + 1)
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import math

from dateutil import parser as dateparser

from tablelens.config import AnalysisConfig, LabelConfig
from tablelens.core.cells import Row, Table, group_key, number_or_zero, round2, to_number
from tablelens.core.results import HotProductRanking, HotProductScore

logger = logging.getLogger(__name__)

EXCEL_EPOCH_OFFSET_DAYS = 25569  # 1970-01-01 as an Excel serial day
MS_PER_DAY = 86400 * 1000

# Missing month/day/time fields fall back to January 1st, 00:00
_DEFAULT_DATE = datetime(1970, 1, 1)
_ALT_DEFAULT_DATE = datetime(1971, 1, 1)

SPLIT_BY_DATE = "date"
SPLIT_BY_ROW_ORDER = "row_order"


def parse_timestamp(value: Any) -> Optional[float]:
    """
    Parse a cell as a millisecond epoch timestamp.

    Numbers above 100000 are taken as millisecond epochs, numbers above
    1000 as Excel serial days. Other numbers fail. Strings are parsed as
    calendar dates and must name a year; naive values are read as UTC.
    Anything unparseable, including an out-of-range UTC offset, gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp() * 1000

    number = to_number(value)
    if number is not None:
        if number > 100000:
            return number
        if number > 1000:
            return (number - EXCEL_EPOCH_OFFSET_DAYS) * MS_PER_DAY
        return None

    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = dateparser.parse(text, default=_DEFAULT_DATE)
        # A string without a year ("March", "10:30") has no fixed date
        if dateparser.parse(text, default=_ALT_DEFAULT_DATE).year != parsed.year:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp() * 1000
    except (ValueError, OverflowError):
        return None


class HotProductScorer:
    """
    Ranks products by hot score.

    This module handles:
    - Recent/earlier window selection
    - Per-product sales and order tallies
    - Sales share and score normalization
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        labels: Optional[LabelConfig] = None,
    ):
        self.config = config or AnalysisConfig()
        self.labels = labels or LabelConfig()

    def score(
        self,
        table: Table,
        product_column: Optional[str],
        value_column: Optional[str],
        date_column: Optional[str] = None,
    ) -> HotProductRanking:
        """
        Score every product and keep the best ones.

        Args:
            table: Parsed rows
            product_column: Column naming the product
            value_column: Column holding the sales amount
            date_column: Optional column holding the order date

        Returns:
            Up to ``hot_product_limit`` products with positive recent sales,
            highest score first
        """
        if not table or not product_column or not value_column:
            return HotProductRanking()

        recent, earlier, mode = self.split(table, date_column)
        logger.debug(f"Hot product split by {mode}: {len(recent)} recent, {len(earlier)} earlier rows")

        recent_sales, recent_orders = self._tally(recent, product_column, value_column)
        earlier_sales, earlier_orders = self._tally(earlier, product_column, value_column)

        products = list(dict.fromkeys(list(recent_sales) + list(earlier_sales)))
        all_sales = sum(recent_sales.get(p, 0) + earlier_sales.get(p, 0) for p in products)

        scores = [
            self._score_product(
                name,
                recent_sales.get(name, 0),
                earlier_sales.get(name, 0),
                recent_orders.get(name, 0),
                earlier_orders.get(name, 0),
                all_sales,
            )
            for name in products
        ]
        ranked = sorted((s for s in scores if s.recent_sales > 0), key=lambda s: -s.hot_score)

        return HotProductRanking(
            products=ranked[:self.config.hot_product_limit],
            split_mode=mode,
            recent_rows=len(recent),
            earlier_rows=len(earlier),
        )

    def split(self, table: Table, date_column: Optional[str] = None) -> Tuple[List[Row], List[Row], str]:
        """Partition rows into (recent, earlier, split mode)."""
        if date_column:
            stamped = []
            for row in table:
                ts = parse_timestamp(row.get(date_column))
                if ts is not None:
                    stamped.append((ts, row))
            if len(stamped) >= 2:
                stamped.sort(key=lambda item: item[0])
                min_ts = stamped[0][0]
                max_ts = stamped[-1][0]
                cut_ts = max_ts - (max_ts - min_ts) * self.config.recent_fraction
                recent = [row for ts, row in stamped if ts >= cut_ts]
                earlier = [row for ts, row in stamped if ts < cut_ts]
                return recent, earlier, SPLIT_BY_DATE
            logger.info(f"Fewer than 2 parseable dates in '{date_column}', splitting by row order")

        recent_count = self.recent_row_count(len(table))
        return list(table[:recent_count]), list(table[recent_count:]), SPLIT_BY_ROW_ORDER

    def recent_row_count(self, total_rows: int) -> int:
        """Ceiling of the recent fraction of rows, at least 1."""
        # round() first so 10 * 0.3 gives 3, not 4
        return max(1, math.ceil(round(total_rows * self.config.recent_fraction, 9)))

    def _tally(
        self,
        rows: Sequence[Row],
        product_column: str,
        value_column: str,
    ) -> Tuple[Dict[str, float], Dict[str, int]]:
        sales: Dict[str, float] = {}
        orders: Dict[str, int] = {}
        for row in rows:
            product = group_key(row.get(product_column), self.labels.unnamed)
            sales[product] = sales.get(product, 0) + number_or_zero(row.get(value_column))
            orders[product] = orders.get(product, 0) + 1
        return sales, orders

    def _score_product(
        self,
        name: str,
        recent: float,
        earlier: float,
        recent_orders: int,
        earlier_orders: int,
        all_sales: float,
    ) -> HotProductScore:
        total = recent + earlier
        sales_share = total / all_sales * 100 if all_sales > 0 else 0.0
        share_norm = min(self.config.share_cap, sales_share / 10)
        # sqrt of a negative net recent amount is undefined; such products score 0
        recent_norm = math.sqrt(recent + 1) if recent > -1 else 0.0
        hot_score = share_norm * recent_norm
        unit_price = recent / recent_orders if recent_orders > 0 else 0.0
        return HotProductScore(
            name=name,
            total_sales=round2(total),
            recent_sales=round2(recent),
            earlier_sales=round2(earlier),
            recent_unit_price=round2(unit_price),
            sales_share=round2(sales_share),
            hot_score=round2(hot_score),
            total_orders=recent_orders + earlier_orders,
            recent_orders=recent_orders,
            earlier_orders=earlier_orders,
        )


def score_hot_products(
    table: Table,
    product_column: Optional[str],
    value_column: Optional[str],
    date_column: Optional[str] = None,
) -> HotProductRanking:
    return HotProductScorer().score(table, product_column, value_column, date_column)
