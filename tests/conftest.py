"""Shared fixtures for TableLens tests."""

from datetime import date, timedelta

import pytest

PRODUCTS = ["手机", "耳机", "平板", "手表"]
REGIONS = ["北京", "上海", "广州"]


@pytest.fixture
def sales_rows():
    """25 orders with a date, product, region, amount and phone column."""
    start = date(2024, 1, 1)
    rows = []
    for i in range(25):
        rows.append({
            "订单号": f"SO-{i:04d}",
            "下单日期": (start + timedelta(days=i)).isoformat(),
            "产品名称": PRODUCTS[i % len(PRODUCTS)],
            "地区": REGIONS[i % len(REGIONS)],
            "销售额": 100 + i * 10,
            "联系电话": f"138{i:08d}",
        })
    return rows


@pytest.fixture
def cross_tab_rows():
    """Four products; D has the fourth-highest total."""
    return [
        {"product": "A", "region": "北京", "amount": 60},
        {"product": "A", "region": "上海", "amount": 40},
        {"product": "B", "region": "上海", "amount": 50},
        {"product": "B", "region": "广州", "amount": 30},
        {"product": "C", "region": "深圳", "amount": 60},
        {"product": "D", "region": "北京", "amount": 10},
    ]
