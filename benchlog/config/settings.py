"""
Application Settings

Defaults, environment variables and an optional YAML file.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from benchlog.domain.exceptions import BenchlogError


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings."""

    # Comparison
    threshold: float = 5.0

    # HTML report
    report_path: str = "bench-report.html"
    open_browser: bool = False

    # Parser
    max_line_length: int = 4096

    # Terminal
    terminal_width: int = 100

    def __post_init__(self):
        for name in ("max_line_length", "terminal_width"):
            if getattr(self, name) <= 0:
                raise BenchlogError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        try:
            return cls(
                threshold=float(os.getenv("BENCHLOG_THRESHOLD", "5.0")),
                report_path=os.getenv("BENCHLOG_REPORT_PATH", "bench-report.html"),
                max_line_length=int(os.getenv("BENCHLOG_MAX_LINE_LENGTH", "4096")),
                open_browser=_env_bool(os.getenv("BENCHLOG_OPEN_BROWSER", "false")),
                terminal_width=int(os.getenv("BENCHLOG_TERMINAL_WIDTH", "100")),
            )
        except ValueError as e:
            raise BenchlogError(f"invalid BENCHLOG_* environment value: {e}") from e

    def with_overrides(self, values: Dict[str, Any]) -> "Settings":
        """Copy with known keys replaced; unknown keys raise BenchlogError."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise BenchlogError(f"unknown settings: {', '.join(unknown)}")

        converted: Dict[str, Any] = {}
        for name, value in values.items():
            current = getattr(self, name)
            if isinstance(current, bool):
                converted[name] = value if isinstance(value, bool) else _env_bool(str(value))
            else:
                converted[name] = type(current)(value)
        return replace(self, **converted)

    def from_yaml(self, path: Union[str, Path]) -> "Settings":
        """Overlay the mapping stored in a YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise BenchlogError(f"cannot read config file {path}: {e.strerror or e}") from e
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise BenchlogError(f"invalid config file {path}: {e}") from e

        if data is None:
            return self
        if not isinstance(data, dict):
            raise BenchlogError(f"invalid config file {path}: expected a mapping")
        try:
            return self.with_overrides(data)
        except (TypeError, ValueError) as e:
            raise BenchlogError(f"invalid config file {path}: {e}") from e

    @classmethod
    def load(cls, config_path: Union[str, Path, None] = None) -> "Settings":
        """Environment settings, overlaid with ``config_path`` when given."""
        settings = cls.from_env()
        if config_path:
            settings = settings.from_yaml(config_path)
        return settings
