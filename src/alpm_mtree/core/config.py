"""
Configuration loaded from ``mtree.toml``.

Example::

    [report]
    color = true
    context = 1
    max_diagnostics = 0   # 0 = unlimited

    [check]
    strict = false        # recoverable diagnostics also fail `check`

Every key is optional; a missing file means all defaults.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mtree.toml"


@dataclass
class ReportConfig:
    """How diagnostics are shown."""

    color: bool = True
    context: int = 1  # source lines around a diagnostic
    max_diagnostics: int = 0  # 0 = unlimited


@dataclass
class CheckConfig:
    """Exit-code policy of ``alpm-mtree check``."""

    strict: bool = False


@dataclass
class MtreeConfig:
    """Top-level configuration."""

    report: ReportConfig = field(default_factory=ReportConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    path: Path | None = None


def _get(table: dict[str, Any], key: str, expected: type, default: Any, section: str) -> Any:
    value = table.get(key, default)
    # bool is an int subclass; don't let `context = true` through
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(
            f"[{section}] {key} must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _non_negative(value: int, key: str, section: str) -> int:
    if value < 0:
        raise ConfigError(f"[{section}] {key} must be >= 0, got {value}")
    return value


def parse_config(data: dict[str, Any], path: Path | None = None) -> MtreeConfig:
    report_data = data.get("report", {})
    check_data = data.get("check", {})
    for section, table in (("report", report_data), ("check", check_data)):
        if not isinstance(table, dict):
            raise ConfigError(f"[{section}] must be a table")

    report_config = ReportConfig(
        color=_get(report_data, "color", bool, True, "report"),
        context=_non_negative(
            _get(report_data, "context", int, 1, "report"), "context", "report"
        ),
        max_diagnostics=_non_negative(
            _get(report_data, "max_diagnostics", int, 0, "report"), "max_diagnostics", "report"
        ),
    )

    check_config = CheckConfig(
        strict=_get(check_data, "strict", bool, False, "check"),
    )

    return MtreeConfig(report=report_config, check=check_config, path=path)


def load_config(path: Path | None = None) -> MtreeConfig:
    """
    Load configuration.

    Args:
        path: Explicit config file; when None, ``mtree.toml`` in the current
            directory is used if it exists

    Returns:
        MtreeConfig (defaults when no file is found)

    Raises:
        ConfigError: If the file is unreadable, not TOML, or has bad values
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.exists():
            return MtreeConfig()
        path = candidate

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return parse_config(data, path)
