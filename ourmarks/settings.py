"""
Settings - Environment-driven configuration for the marks pipeline.

Every knob has a default that reproduces the reference behaviour; invalid
values fall back to the default instead of failing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_MERGE_TOLERANCE_RATIO = 0.1
DEFAULT_MAX_TOKEN_LENGTH = 255
DEFAULT_RTL_RATIO = 0.3
DEFAULT_DEBUG_DPI = 144


def _env_int(key: str, default: int) -> int:
    try:
        return int(float(str(os.environ.get(key, str(default)) or str(default)).strip()))
    except Exception:
        return int(default)


def _env_float(key: str, default: float) -> float:
    try:
        return float(str(os.environ.get(key, str(default)) or str(default)).strip())
    except Exception:
        return float(default)


def _env_bool(key: str, default: bool) -> bool:
    raw = str(os.environ.get(key, "1" if default else "0") or "").strip().lower()
    if raw in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "f", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class PipelineSettings:
    merge_tolerance_ratio: float = DEFAULT_MERGE_TOLERANCE_RATIO
    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH
    rtl_ratio: float = DEFAULT_RTL_RATIO
    debug_dpi: int = DEFAULT_DEBUG_DPI
    export_xlsx: bool = False


def load_settings() -> PipelineSettings:
    """Read OURMARKS_* environment variables into a PipelineSettings."""
    ratio = _env_float("OURMARKS_MERGE_TOLERANCE_RATIO", DEFAULT_MERGE_TOLERANCE_RATIO)
    if ratio < 0:
        ratio = DEFAULT_MERGE_TOLERANCE_RATIO

    max_len = _env_int("OURMARKS_MAX_TOKEN_LENGTH", DEFAULT_MAX_TOKEN_LENGTH)
    if max_len <= 0:
        max_len = DEFAULT_MAX_TOKEN_LENGTH

    rtl_ratio = _env_float("OURMARKS_RTL_RATIO", DEFAULT_RTL_RATIO)
    if not 0.0 <= rtl_ratio <= 1.0:
        rtl_ratio = DEFAULT_RTL_RATIO

    dpi = _env_int("OURMARKS_DEBUG_DPI", DEFAULT_DEBUG_DPI)
    if dpi <= 0:
        dpi = DEFAULT_DEBUG_DPI

    return PipelineSettings(
        merge_tolerance_ratio=ratio,
        max_token_length=max_len,
        rtl_ratio=rtl_ratio,
        debug_dpi=dpi,
        export_xlsx=_env_bool("OURMARKS_EXPORT_XLSX", False),
    )
