"""
PII Scanner

Scans string cells for personal information: mobile numbers, national
ID numbers, e-mail addresses, bank card numbers and Chinese personal names.
"""

from dataclasses import dataclass
from typing import Dict, List
import logging
import re

from tablelens.core.cells import Table
from tablelens.core.results import (
    AggregatedBucket,
    ColumnFindings,
    Finding,
    PIIScanResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PIIDetector:
    """A named regex detector."""
    type: str
    pattern: re.Pattern
    description: str

    def find(self, text: str) -> List[str]:
        """Unique matches in text, in order of first appearance."""
        return list(dict.fromkeys(m.group(0) for m in self.pattern.finditer(text)))


# Digit classes and word boundaries are ASCII-only so that a number glued
# to CJK text still counts as bounded.
PII_DETECTORS = (
    PIIDetector(
        type="手机号",
        pattern=re.compile(r'1[3-9]\d{9}', re.ASCII),
        description="11 位中国大陆手机号",
    ),
    PIIDetector(
        type="身份证号",
        pattern=re.compile(
            r'\b[1-9]\d{5}(?:19|20)\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])\d{3}[\dXx]\b',
            re.ASCII,
        ),
        description="18 位身份证号",
    ),
    PIIDetector(
        type="邮箱",
        pattern=re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}'),
        description="电子邮箱地址",
    ),
    PIIDetector(
        type="银行卡号",
        pattern=re.compile(r'\b\d{16,19}\b', re.ASCII),
        description="16–19 位银行卡号",
    ),
    PIIDetector(
        type="姓名（中文）",
        pattern=re.compile(r'[\u4e00-\u9fa5]{2,4}(?=\s|$|,|，)'),
        description="2–4 个中文字符（可能为姓名）",
    ),
)


def detect_pii_in_value(value, detectors=PII_DETECTORS) -> List[Finding]:
    """
    Run every detector over one cell.

    Only string cells are scanned. Each detector that matches yields one
    Finding with its de-duplicated matches.
    """
    if not isinstance(value, str):
        return []
    text = value.strip()
    findings = []
    for detector in detectors:
        matches = detector.find(text)
        if matches:
            findings.append(Finding(
                type=detector.type,
                description=detector.description,
                values=matches,
                count=len(matches),
                sample_value=value,
            ))
    return findings


class PIIScanner:
    """
    Aggregates PII findings per column and for the whole table.
    """

    def __init__(self, detectors=PII_DETECTORS):
        self.detectors = detectors

    def scan(self, table: Table) -> PIIScanResult:
        """
        Scan every cell of the table.

        Args:
            table: Parsed rows

        Returns:
            Findings per column, per-type totals and the grand total
        """
        if not table:
            return PIIScanResult()

        by_column: Dict[str, ColumnFindings] = {}
        summary: Dict[str, int] = {}

        for row in table:
            for col_name, value in row.items():
                if col_name not in by_column:
                    by_column[col_name] = ColumnFindings(column=col_name)
                for finding in detect_pii_in_value(value, self.detectors):
                    by_column[col_name].findings.append(finding)
                    summary[finding.type] = summary.get(finding.type, 0) + finding.count

        total = sum(summary.values())
        if total:
            logger.info(f"PII scan found {total} matches across {len(summary)} types")
        else:
            logger.debug("PII scan found no matches")

        return PIIScanResult(
            by_column=by_column,
            summary=[AggregatedBucket(name=t, value=c) for t, c in summary.items()],
            total_count=total,
        )


def scan_pii(table: Table) -> PIIScanResult:
    """Scan a table with the default detectors."""
    return PIIScanner().scan(table)
