from __future__ import annotations

import io
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import yaml

from .errors import InputError
from .finance.daycount import DEFAULT_BASIS, normalize_basis
from .validate import to_numbers

logger = logging.getLogger(__name__)

ENV_BASIS = "FINCALC_BASIS"
ENV_LOG_LEVEL = "FINCALC_LOG_LEVEL"

_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml", ".csv": "csv"}


def default_basis() -> str:
    """Day-count basis from FINCALC_BASIS, else ACT/365."""
    raw = os.environ.get(ENV_BASIS)
    return normalize_basis(raw) if raw else DEFAULT_BASIS


def log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = (os.environ.get(ENV_LOG_LEVEL) or "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _flatten_grouped(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten shallow groups like {'bond': {...}, 'cashflows': [...]} into one level.
    Prefers top-level keys if collisions occur.
    """
    flat: Dict[str, Any] = dict(cfg)
    for k, v in list(cfg.items()):
        if isinstance(v, dict):
            flat.pop(k)
            for sk, sv in v.items():
                flat.setdefault(sk, sv)
    return flat


def _read_csv(source: Any) -> Dict[str, Any]:
    """cashflow,date columns (headers case-insensitive); blank cells skipped."""
    try:
        df = pd.read_csv(source, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        return {}
    df.columns = [str(c).strip().lower() for c in df.columns]
    out: Dict[str, Any] = {}
    if "cashflow" in df.columns:
        col = df["cashflow"].dropna().str.strip()
        cfs = to_numbers(col[col != ""].tolist(), "cashflow")
        if cfs:
            out["cashflows"] = cfs
    if "date" in df.columns:
        col = df["date"].dropna().str.strip()
        dates = col[col != ""].tolist()
        if dates:
            out["dates"] = dates
    return out


def load_inputs(
    source: str | os.PathLike | io.StringIO,
    fmt: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load model inputs from a .json, .yaml/.yml or .csv path (or a text stream
    with an explicit *fmt*). Returns a flat dict of parameters.
    """
    if hasattr(source, "read"):
        kind = fmt
        stream: Any = source
    else:
        p = Path(os.fspath(source))
        kind = fmt or _FORMATS.get(p.suffix.lower())
        if kind is None:
            raise InputError(f"Unsupported file type: {p.name}; use .json, .yaml or .csv")
        if not p.is_file():
            raise InputError(f"input file not found: {p}")
        stream = p

    logger.debug("loading %s inputs from %s", kind, source)
    if kind == "csv":
        return _read_csv(stream)

    text = stream.read() if hasattr(stream, "read") else stream.read_text(encoding="utf-8")
    try:
        if kind == "json":
            data = json.loads(text or "{}")
        elif kind == "yaml":
            data = yaml.safe_load(text) or {}
        else:
            raise InputError(f"Unsupported input format: {kind!r}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InputError(f"could not parse {kind} input: {e}") from e

    if not isinstance(data, dict):
        raise InputError(f"{kind} input must be a mapping of parameter names to values")
    return _flatten_grouped(data)


__all__ = ["ENV_BASIS", "ENV_LOG_LEVEL", "default_basis", "log_level", "load_inputs"]
