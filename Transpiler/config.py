"""Configuration loader for the condition transpiler."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml


@dataclass
class TranspilerConfig:
    function_prefix: str = ""  # "" -> min(...), "T(Math)." -> T(Math).min(...)
    binary_calls: bool = False
    nested: bool = False
    progress_field: str = "progressField"
    interpretation_separator: str = ", "
    check_consistency: bool = False  # builds a z3 Solver per edit


@dataclass
class CatalogConfig:
    path: Optional[str] = None


@dataclass
class Config:
    transpiler: TranspilerConfig = field(default_factory=TranspilerConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


def _merge_defaults(data: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    merged = defaults.copy()
    merged.update({k: v for k, v in data.items() if v is not None})
    return merged


def default_config() -> Config:
    return Config()


def load_config(path: str) -> Config:
    """Load YAML config into typed Config."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    transpiler_defaults = {
        "function_prefix": "",
        "binary_calls": False,
        "nested": False,
        "progress_field": "progressField",
        "interpretation_separator": ", ",
        "check_consistency": False,
    }
    catalog_defaults = {"path": None}

    transpiler_cfg = TranspilerConfig(
        **_merge_defaults(raw.get("transpiler") or {}, transpiler_defaults)
    )
    catalog_cfg = CatalogConfig(**_merge_defaults(raw.get("catalog") or {}, catalog_defaults))

    return Config(transpiler=transpiler_cfg, catalog=catalog_cfg)
