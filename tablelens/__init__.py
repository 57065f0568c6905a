"""
TableLens - Spreadsheet Sensitive-Data Detection and Sales Analytics

Detects personal information in uploaded spreadsheets, infers what each
column means and derives regional, categorical and hot-product views.
"""

__version__ = "1.0.0"
__author__ = "TableLens Team"

from tablelens.config import TableLensConfig
from tablelens.analyzer import DashboardAnalyzer, analyze_table

__all__ = ["TableLensConfig", "DashboardAnalyzer", "analyze_table", "__version__"]
