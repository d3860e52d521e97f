"""Configuration for the Pando tools.

Settings come from three places, later ones winning:

- built-in defaults,
- ``PANDO_*`` environment variables,
- inline directives in the first lines of a ``.pd`` file::

    # @pando: rustc=/opt/rust/bin/rustc; keep_rust=true

Boolean settings accept true/false, yes/no, on/off or 1/0; everything else
is taken as a string, with surrounding quotes removed.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

_MAX_SCAN_LINES = 25
_DIRECTIVE = "@pando"


@dataclass(frozen=True)
class ServerConfig:
    log_level: str = "WARNING"
    translator: Optional[str] = None
    translator_project: Optional[str] = None
    rustc: str = "rustc"
    keep_rust: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(f"PANDO_{f.name.upper()}")
            if raw is None:
                continue
            value = _coerce(f.name, raw)
            if value is not None:
                overrides[f.name] = value
        return cls(**overrides)

    def with_overrides(self, **values: Any) -> "ServerConfig":
        """Return a copy with every non-``None`` known setting applied."""
        known = {f.name for f in fields(self)}
        applied = {k: v for k, v in values.items() if k in known and v is not None}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning("ignoring unknown settings: %s", ", ".join(unknown))
        return replace(self, **applied)


def parse_file_flags(source: str) -> Dict[str, Any]:
    """Collect ``# @pando: key=value`` directives from the top of *source*."""
    flags: Dict[str, Any] = {}
    if not source:
        return flags

    for line in source.splitlines()[:_MAX_SCAN_LINES]:
        stripped = line.strip()
        if not stripped.startswith("#") or _DIRECTIVE not in stripped:
            continue

        directive = stripped.lstrip("#").strip()
        if not directive.lower().startswith(_DIRECTIVE):
            continue
        directive = directive[len(_DIRECTIVE):].strip()
        if directive.startswith(":"):
            directive = directive[1:].strip()

        # key=value form (semicolon or comma separated)
        for part in re.split(r"[;,]", directive):
            part = part.strip()
            if "=" not in part:
                continue
            key, raw_val = part.split("=", 1)
            key = key.strip()
            value = _coerce(key, raw_val.strip().strip("\"'"))
            if value is not None:
                flags[key] = value

    return flags


_BOOL_FIELDS = frozenset(f.name for f in fields(ServerConfig) if f.type in ("bool", bool))


def _coerce(key: str, raw: str) -> Any:
    if key not in _BOOL_FIELDS:
        return raw
    lowered = raw.strip().lower()
    if lowered in ("true", "yes", "on", "1"):
        return True
    if lowered in ("false", "no", "off", "0"):
        return False
    logger.warning("ignoring %s=%r: expected a boolean", key, raw)
    return None
