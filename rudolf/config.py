"""Persistent editor settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1
ENV_CONFIG_PATH = "RUDOLF_CONFIG"


@dataclass
class InputConfig:
    poll_ms: int = 500


@dataclass
class DisplayConfig:
    marker: str = "~"
    welcome: str = "Welcome to Rudolf"


@dataclass
class LoggingConfig:
    enabled: bool = True
    level: str = "INFO"
    keep_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    input: InputConfig = field(default_factory=InputConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Rudolf"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Rudolf"
    return Path.home() / ".config" / "rudolf"


def config_path() -> Path:
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    return config_root() / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_input(cfg: AppConfig) -> None:
    try:
        poll_ms = int(cfg.input.poll_ms)
    except (TypeError, ValueError):
        poll_ms = InputConfig.poll_ms
    cfg.input.poll_ms = max(50, min(2000, poll_ms))


def _normalize_display(cfg: AppConfig) -> None:
    marker = cfg.display.marker
    if not isinstance(marker, str) or len(marker) != 1 or not marker.isprintable():
        cfg.display.marker = DisplayConfig.marker
    if not isinstance(cfg.display.welcome, str):
        cfg.display.welcome = DisplayConfig.welcome


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = LoggingConfig.level
    cfg.logging.level = level
    cfg.logging.enabled = bool(cfg.logging.enabled)
    try:
        cfg.logging.keep_files = max(1, int(cfg.logging.keep_files))
    except (TypeError, ValueError):
        cfg.logging.keep_files = LoggingConfig.keep_files


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        input=_merge(InputConfig, raw.get("input", {})),
        display=_merge(DisplayConfig, raw.get("display", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_input(cfg)
    _normalize_display(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
