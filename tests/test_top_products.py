"""Tests for the top products by region cross-tab."""

from tablelens.config import AnalysisConfig
from tablelens.core.top_products import TopProductsRegionBuilder, build_top_products_by_region


def test_top_three_products(cross_tab_rows):
    bundle = build_top_products_by_region(cross_tab_rows, "product", "region", "amount")
    assert bundle.top_products == ["A", "B", "C"]
    assert bundle.product_sales == {"A": 100, "B": 80, "C": 60, "D": 10}


def test_fourth_product_never_appears(cross_tab_rows):
    bundle = build_top_products_by_region(cross_tab_rows, "product", "region", "amount")
    assert "D" not in bundle.top_products
    assert all("D" not in row.values for row in bundle.stack_data)
    assert all(row.product != "D" for row in bundle.group_data)
    # D's sale in 北京 is not part of the regional totals
    beijing = next(row for row in bundle.stack_data if row.name == "北京")
    assert beijing.values == {"A": 60, "B": 0, "C": 0}


def test_shared_top_regions_ranked_by_combined_volume(cross_tab_rows):
    bundle = build_top_products_by_region(cross_tab_rows, "product", "region", "amount")
    assert bundle.top_regions == ["上海", "北京", "深圳", "广州"]
    assert [row.name for row in bundle.stack_data] == bundle.top_regions
    shanghai = bundle.stack_data[0]
    assert shanghai.to_dict() == {"name": "上海", "A": 40, "B": 50, "C": 0}


def test_group_view_ranks_regions_per_product(cross_tab_rows):
    bundle = build_top_products_by_region(cross_tab_rows, "product", "region", "amount")
    a, b, c = bundle.group_data
    assert a.region_order == ["北京", "上海"]
    assert b.region_order == ["上海", "广州"]
    assert c.region_order == ["深圳"]
    assert a.to_dict() == {
        "product": "A",
        "regionOrder": ["北京", "上海"],
        "北京": 60,
        "上海": 40,
        "total": 100,
    }


def test_top_regions_capped_at_ten():
    rows = [{"p": "A", "r": f"R{i}", "v": i + 1} for i in range(12)]
    bundle = build_top_products_by_region(rows, "p", "r", "v")
    assert len(bundle.top_regions) == 10
    assert bundle.top_regions[0] == "R11"
    assert len(bundle.group_data[0].regions) == 10


def test_fewer_than_three_products():
    rows = [{"p": "A", "r": "x", "v": 1}, {"p": "B", "r": "y", "v": 2}]
    bundle = build_top_products_by_region(rows, "p", "r", "v")
    assert bundle.top_products == ["B", "A"]


def test_non_numeric_values_count_as_zero():
    rows = [{"p": "A", "r": "x", "v": "n/a"}, {"p": "B", "r": "x", "v": 5}]
    bundle = build_top_products_by_region(rows, "p", "r", "v")
    assert bundle.top_products == ["B", "A"]
    assert bundle.product_sales["A"] == 0


def test_limits_from_config(cross_tab_rows):
    builder = TopProductsRegionBuilder(AnalysisConfig(top_products=2, top_regions=1))
    bundle = builder.build(cross_tab_rows, "product", "region", "amount")
    assert bundle.top_products == ["A", "B"]
    assert bundle.top_regions == ["上海"]


def test_missing_columns_or_empty_table(cross_tab_rows):
    assert build_top_products_by_region([], "product", "region", "amount") is None
    assert build_top_products_by_region(cross_tab_rows, None, "region", "amount") is None
    assert build_top_products_by_region(cross_tab_rows, "product", None, "amount") is None
    assert build_top_products_by_region(cross_tab_rows, "product", "region", None) is None
