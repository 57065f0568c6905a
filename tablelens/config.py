"""
Configuration management for TableLens.

Holds the fixed analysis thresholds, placeholder labels and output
preferences. Everything has a working default; a YAML file can override
individual values.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum

import yaml


class OutputFormat(Enum):
    """Supported output formats."""
    TABLE = "table"
    JSON = "json"


@dataclass
class AnalysisConfig:
    """Thresholds used by the analytics engine."""
    numeric_ratio: float = 0.8  # share of parseable values for a numeric column
    categorical_max_distinct: int = 20
    top_products: int = 3
    top_regions: int = 10
    product_region_limit: int = 20
    hot_product_limit: int = 15
    recent_fraction: float = 0.3
    share_cap: float = 5.0


@dataclass
class LabelConfig:
    """Placeholder labels for blank values."""
    empty: str = "(empty)"
    unnamed: str = "(unnamed)"
    unnamed_column: str = "未命名列"


@dataclass
class OutputConfig:
    """Output configuration."""
    format: OutputFormat = OutputFormat.TABLE
    output_dir: Optional[str] = None
    max_rows: int = 10  # Rows shown per view in terminal output


@dataclass
class TableLensConfig:
    """Main configuration container."""
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> "TableLensConfig":
        """Load configuration from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "TableLensConfig":
        """Create config from dictionary."""
        defaults = AnalysisConfig()
        analysis_data = data.get("analysis", {}) or {}
        analysis = AnalysisConfig(
            numeric_ratio=float(analysis_data.get("numeric_ratio", defaults.numeric_ratio)),
            categorical_max_distinct=int(analysis_data.get(
                "categorical_max_distinct", defaults.categorical_max_distinct
            )),
            top_products=int(analysis_data.get("top_products", defaults.top_products)),
            top_regions=int(analysis_data.get("top_regions", defaults.top_regions)),
            product_region_limit=int(analysis_data.get(
                "product_region_limit", defaults.product_region_limit
            )),
            hot_product_limit=int(analysis_data.get("hot_product_limit", defaults.hot_product_limit)),
            recent_fraction=float(analysis_data.get("recent_fraction", defaults.recent_fraction)),
            share_cap=float(analysis_data.get("share_cap", defaults.share_cap)),
        )

        label_data = data.get("labels", {}) or {}
        labels = LabelConfig(**{
            k: str(v) for k, v in label_data.items() if k in LabelConfig.__dataclass_fields__
        })

        output_data = data.get("output", {}) or {}
        output = OutputConfig(
            format=OutputFormat(output_data.get("format", "table")),
            output_dir=output_data.get("output_dir"),
            max_rows=int(output_data.get("max_rows", 10)),
        )

        return cls(
            analysis=analysis,
            labels=labels,
            output=output,
            verbose=bool(data.get("verbose", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "analysis": {
                "numeric_ratio": self.analysis.numeric_ratio,
                "categorical_max_distinct": self.analysis.categorical_max_distinct,
                "top_products": self.analysis.top_products,
                "top_regions": self.analysis.top_regions,
                "product_region_limit": self.analysis.product_region_limit,
                "hot_product_limit": self.analysis.hot_product_limit,
                "recent_fraction": self.analysis.recent_fraction,
                "share_cap": self.analysis.share_cap,
            },
            "labels": {
                "empty": self.labels.empty,
                "unnamed": self.labels.unnamed,
                "unnamed_column": self.labels.unnamed_column,
            },
            "output": {
                "format": self.output.format.value,
                "output_dir": self.output.output_dir,
                "max_rows": self.output.max_rows,
            },
            "verbose": self.verbose,
        }


def create_default_config(
    output_format: str = "table",
    output_dir: Optional[str] = None,
    verbose: bool = False,
) -> TableLensConfig:
    """Factory function to create a default configuration."""
    return TableLensConfig(
        analysis=AnalysisConfig(),
        labels=LabelConfig(),
        output=OutputConfig(format=OutputFormat(output_format), output_dir=output_dir),
        verbose=verbose,
    )
