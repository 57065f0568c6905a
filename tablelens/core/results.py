"""
Result Entities

Data structures produced by the analytics engine. Field names emitted by
``to_dict`` are the contract consumed by chart and table renderers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
import json


class ColumnType(Enum):
    """Value-based column classification."""
    NUMERIC = "numeric"             # Mostly parseable numbers
    CATEGORICAL = "categorical"     # Few distinct values
    TEXT = "text"                   # Anything else


@dataclass(frozen=True)
class AggregatedBucket:
    """A named aggregate produced by grouping."""
    name: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class Finding:
    """PII matches of one detector in one cell."""
    type: str
    description: str
    values: List[str]
    count: int
    sample_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "values": list(self.values),
            "count": self.count,
            "sampleValue": self.sample_value,
        }


@dataclass
class ColumnFindings:
    """All findings of one column."""
    column: str
    findings: List[Finding] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return sum(f.count for f in self.findings)

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "findings": [f.to_dict() for f in self.findings]}


@dataclass
class PIIScanResult:
    """Outcome of scanning a whole table for PII."""
    by_column: Dict[str, ColumnFindings] = field(default_factory=dict)
    summary: List[AggregatedBucket] = field(default_factory=list)
    total_count: int = 0

    @property
    def flagged_columns(self) -> List[str]:
        """Columns with at least one finding, in schema order."""
        return [name for name, col in self.by_column.items() if col.findings]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "byColumn": {name: col.to_dict() for name, col in self.by_column.items()},
            "summary": [{"type": b.name, "count": int(b.value)} for b in self.summary],
            "totalCount": self.total_count,
        }


@dataclass(frozen=True)
class RegionShare:
    """Orders of one product in one region."""
    region: str
    count: int
    percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {"region": self.region, "count": self.count, "percent": self.percent}


@dataclass
class ProductRegionProfile:
    """Regional distribution of one product's orders."""
    product: str
    total_orders: int
    top_region: str
    top_region_share: float
    regions: List[RegionShare] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product": self.product,
            "totalOrders": self.total_orders,
            "regions": [r.to_dict() for r in self.regions],
            "topRegion": self.top_region,
            "topRegionShare": self.top_region_share,
        }


@dataclass
class HotProductScore:
    """Recent-vs-earlier sales profile and hot score of one product."""
    name: str
    total_sales: float
    recent_sales: float
    earlier_sales: float
    recent_unit_price: float
    sales_share: float
    hot_score: float
    total_orders: int
    recent_orders: int
    earlier_orders: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "totalSales": self.total_sales,
            "recentSales": self.recent_sales,
            "earlierSales": self.earlier_sales,
            "recentUnitPrice": self.recent_unit_price,
            "salesShare": self.sales_share,
            "hotScore": self.hot_score,
            "totalOrders": self.total_orders,
            "recentOrders": self.recent_orders,
            "earlierOrders": self.earlier_orders,
        }


@dataclass
class HotProductRanking:
    """Hot products plus the policy used to split recent from earlier rows."""
    products: List[HotProductScore] = field(default_factory=list)
    split_mode: str = "row_order"  # "date" or "row_order"
    recent_rows: int = 0
    earlier_rows: int = 0

    def __len__(self) -> int:
        return len(self.products)

    def __iter__(self):
        return iter(self.products)

    def __getitem__(self, index):
        return self.products[index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "products": [p.to_dict() for p in self.products],
            "splitMode": self.split_mode,
            "recentRows": self.recent_rows,
            "earlierRows": self.earlier_rows,
        }


@dataclass
class StackRow:
    """One region of the stacked view: that region's value per top product."""
    name: str
    values: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"name": self.name}
        record.update(self.values)
        return record


@dataclass
class GroupRow:
    """One top product of the grouped view, with its own top regions."""
    product: str
    regions: Dict[str, float] = field(default_factory=dict)
    total: float = 0.0

    @property
    def region_order(self) -> List[str]:
        return list(self.regions.keys())

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"product": self.product, "regionOrder": self.region_order}
        record.update(self.regions)
        record["total"] = self.total
        return record


@dataclass
class TopProductsRegionBundle:
    """Top products cross-tabulated against top regions."""
    top_products: List[str] = field(default_factory=list)
    top_regions: List[str] = field(default_factory=list)
    product_sales: Dict[str, float] = field(default_factory=dict)
    stack_data: List[StackRow] = field(default_factory=list)
    group_data: List[GroupRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topProducts": list(self.top_products),
            "topRegions": list(self.top_regions),
            "productSales": dict(self.product_sales),
            "stackData": [r.to_dict() for r in self.stack_data],
            "groupData": [r.to_dict() for r in self.group_data],
        }


@dataclass
class ColumnSelection:
    """Columns picked for each analytical role."""
    region: Optional[str] = None
    product: Optional[str] = None
    value: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None
    other_dimension: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "product": self.product,
            "value": self.value,
            "date": self.date,
            "category": self.category,
            "otherDimension": self.other_dimension,
        }


@dataclass
class DashboardReport:
    """Every view derived from one uploaded table."""
    source: Optional[str] = None
    row_count: int = 0
    columns: List[str] = field(default_factory=list)
    column_types: Dict[str, ColumnType] = field(default_factory=dict)
    selection: ColumnSelection = field(default_factory=ColumnSelection)
    pii: PIIScanResult = field(default_factory=PIIScanResult)
    region_counts: List[AggregatedBucket] = field(default_factory=list)
    amount_by_region: List[AggregatedBucket] = field(default_factory=list)
    category_counts: List[AggregatedBucket] = field(default_factory=list)
    other_counts: List[AggregatedBucket] = field(default_factory=list)
    hot_products: HotProductRanking = field(default_factory=HotProductRanking)
    product_regions: List[ProductRegionProfile] = field(default_factory=list)
    top_products: Optional[TopProductsRegionBundle] = None

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def get_statistics(self) -> Dict[str, Any]:
        """Overview counters shown above the charts."""
        return {
            "total_rows": self.row_count,
            "total_columns": self.column_count,
            "pii_matches": self.pii.total_count,
            "pii_columns": len(self.pii.flagged_columns),
            "hot_products": len(self.hot_products),
            "profiled_products": len(self.product_regions),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "columns": list(self.columns),
            "columnTypes": {k: v.value for k, v in self.column_types.items()},
            "selection": self.selection.to_dict(),
            "sensitive": self.pii.to_dict(),
            "regionCounts": [b.to_dict() for b in self.region_counts],
            "amountByRegion": [b.to_dict() for b in self.amount_by_region],
            "categoryCounts": [b.to_dict() for b in self.category_counts],
            "otherCounts": [b.to_dict() for b in self.other_counts],
            "hotProducts": self.hot_products.to_dict(),
            "productRegions": [p.to_dict() for p in self.product_regions],
            "topProductsRegion": self.top_products.to_dict() if self.top_products else None,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, default=str)
