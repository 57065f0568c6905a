"""Tests for the PII scanner."""

from tablelens.core.pii_scanner import PIIScanner, detect_pii_in_value, scan_pii


def _types(findings):
    return [f.type for f in findings]


class TestDetectors:
    def test_mobile_number(self):
        findings = detect_pii_in_value("13800001234")
        assert _types(findings) == ["手机号"]
        assert findings[0].count == 1
        assert findings[0].values == ["13800001234"]

    def test_duplicate_email_in_one_cell_counts_once(self):
        findings = detect_pii_in_value("test@x.com, test@x.com")
        emails = [f for f in findings if f.type == "邮箱"]
        assert len(emails) == 1
        assert emails[0].values == ["test@x.com"]
        assert emails[0].count == 1

    def test_national_id(self):
        findings = detect_pii_in_value("11010519491231002X")
        ids = [f for f in findings if f.type == "身份证号"]
        assert ids and ids[0].values == ["11010519491231002X"]

    def test_bank_card(self):
        findings = detect_pii_in_value("6222021234567890")
        assert _types(findings) == ["银行卡号"]

    def test_bank_card_needs_word_boundary(self):
        assert detect_pii_in_value("A6222021234567890") == []

    def test_chinese_names_bounded_by_separators(self):
        findings = detect_pii_in_value("客户 李四，王五")
        names = [f for f in findings if f.type == "姓名（中文）"]
        assert names[0].values == ["客户", "李四", "王五"]
        assert names[0].count == 3

    def test_one_cell_can_trigger_several_types(self):
        findings = detect_pii_in_value("张三 13800001234")
        assert set(_types(findings)) == {"手机号", "姓名（中文）"}

    def test_non_string_cells_are_ignored(self):
        assert detect_pii_in_value(13800001234) == []
        assert detect_pii_in_value(None) == []

    def test_finding_keeps_original_cell(self):
        findings = detect_pii_in_value("  13800001234  ")
        assert findings[0].sample_value == "  13800001234  "


class TestScanner:
    def test_phone_column_finding(self):
        result = scan_pii([{"phone": "13800001234"}])
        col = result.by_column["phone"]
        assert len(col.findings) == 1
        assert col.findings[0].type == "手机号"
        assert col.findings[0].count == 1
        assert result.total_count == 1

    def test_summary_accumulates_across_rows(self):
        rows = [
            {"a": "plain", "b": "13800001234 13800001234"},
            {"a": "x@y.cn", "b": "13900001234"},
        ]
        result = PIIScanner().scan(rows)
        summary = {b.name: b.value for b in result.summary}
        assert summary == {"手机号": 2, "邮箱": 1}
        assert result.total_count == 3
        assert len(result.by_column["b"].findings) == 2

    def test_every_column_is_listed(self):
        result = scan_pii([{"a": "x", "b": "13800001234"}])
        assert list(result.by_column) == ["a", "b"]
        assert result.flagged_columns == ["b"]

    def test_total_is_sum_of_summary(self, sales_rows):
        result = scan_pii(sales_rows)
        assert result.total_count == sum(b.value for b in result.summary)
        phone = next(b for b in result.summary if b.name == "手机号")
        assert phone.value == 25
        assert "联系电话" in result.flagged_columns

    def test_empty_table(self):
        result = scan_pii([])
        assert result.by_column == {}
        assert result.summary == []
        assert result.total_count == 0

    def test_to_dict_shape(self):
        data = scan_pii([{"phone": "13800001234"}]).to_dict()
        assert data["totalCount"] == 1
        assert data["summary"] == [{"type": "手机号", "count": 1}]
        assert data["byColumn"]["phone"]["findings"][0]["sampleValue"] == "13800001234"
