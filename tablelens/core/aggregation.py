"""
Aggregation Primitives

Group-by-count and group-by-sum over row records. Each call builds a fresh
mapping keyed by the normalized group key.
"""

from typing import Dict, List

from tablelens.core.cells import Table, group_key, to_number
from tablelens.core.results import AggregatedBucket

EMPTY_LABEL = "(empty)"


def sort_buckets(totals: Dict[str, float]) -> List[AggregatedBucket]:
    """Buckets descending by value; ties keep encounter order."""
    buckets = [AggregatedBucket(name=k, value=v) for k, v in totals.items()]
    return sorted(buckets, key=lambda b: -b.value)


def count_by_column(table: Table, column: str, empty_label: str = EMPTY_LABEL) -> List[AggregatedBucket]:
    """Count rows per trimmed value of column."""
    counts: Dict[str, float] = {}
    for row in table:
        key = group_key(row.get(column), empty_label)
        counts[key] = counts.get(key, 0) + 1
    return sort_buckets(counts)


def sum_by_group(
    table: Table,
    group_column: str,
    value_column: str,
    empty_label: str = EMPTY_LABEL,
) -> List[AggregatedBucket]:
    """
    Sum value_column per trimmed value of group_column.

    Rows whose value does not parse as a number are skipped; a group only
    exists if at least one of its rows contributes.
    """
    sums: Dict[str, float] = {}
    for row in table:
        number = to_number(row.get(value_column))
        if number is None:
            continue
        key = group_key(row.get(group_column), empty_label)
        sums[key] = sums.get(key, 0) + number
    return sort_buckets(sums)
