"""Installer settings schema and lenient loading."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class InstallConfig:
    bin_dir: str | None = None


@dataclass
class ReleaseConfig:
    repo: str = "cloudmanic/tradier"
    tag: str = "latest"


@dataclass
class NetworkConfig:
    timeout_s: int = 180
    ca_bundle: str | None = None


@dataclass
class VerifyConfig:
    enabled: bool = True
    timeout_s: int = 30


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    level: str = "INFO"


@dataclass
class FormulaConfig:
    config_version: int = CONFIG_VERSION
    install: InstallConfig = field(default_factory=InstallConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    verify: VerifyConfig = field(default_factory=VerifyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "TradierFormula"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "TradierFormula"
    return Path.home() / ".config" / "tradier-formula"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_path(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _normalize_install(cfg: FormulaConfig) -> None:
    cfg.install.bin_dir = _as_path(cfg.install.bin_dir)


def _normalize_release(cfg: FormulaConfig) -> None:
    cfg.release.repo = str(cfg.release.repo or "").strip().strip("/") or "cloudmanic/tradier"
    cfg.release.tag = str(cfg.release.tag or "").strip() or "latest"


def _normalize_network(cfg: FormulaConfig) -> None:
    cfg.network.timeout_s = max(5, min(900, _as_int(cfg.network.timeout_s, NetworkConfig.timeout_s)))
    cfg.network.ca_bundle = _as_path(cfg.network.ca_bundle)


def _normalize_verify(cfg: FormulaConfig) -> None:
    enabled = cfg.verify.enabled
    if isinstance(enabled, str):
        enabled = enabled.strip().lower() in ("1", "true", "yes", "on")
    cfg.verify.enabled = bool(enabled)
    cfg.verify.timeout_s = max(1, min(300, _as_int(cfg.verify.timeout_s, VerifyConfig.timeout_s)))


def _normalize_logging(cfg: FormulaConfig) -> None:
    cfg.logging.keep_log_files = max(2, _as_int(cfg.logging.keep_log_files, LoggingConfig.keep_log_files))
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "INFO"


def _apply_env(cfg: FormulaConfig) -> None:
    bin_dir = os.environ.get("TRADIER_FORMULA_BIN_DIR", "").strip()
    if bin_dir:
        cfg.install.bin_dir = bin_dir
    ca_bundle = os.environ.get("TRADIER_CA_BUNDLE", "").strip()
    if ca_bundle:
        cfg.network.ca_bundle = ca_bundle


def load_config(path: Path | None = None, apply_env: bool = True) -> FormulaConfig:
    path = path or config_path()
    cfg = FormulaConfig()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logging.getLogger(__name__).warning("ignoring unreadable config %s: %s", path, exc)
            data = {}
        if isinstance(data, dict):
            cfg = FormulaConfig(
                config_version=CONFIG_VERSION,
                install=_merge(InstallConfig, data.get("install", {})),
                release=_merge(ReleaseConfig, data.get("release", {})),
                network=_merge(NetworkConfig, data.get("network", {})),
                verify=_merge(VerifyConfig, data.get("verify", {})),
                logging=_merge(LoggingConfig, data.get("logging", {})),
            )

    if apply_env:
        _apply_env(cfg)

    _normalize_install(cfg)
    _normalize_release(cfg)
    _normalize_network(cfg)
    _normalize_verify(cfg)
    _normalize_logging(cfg)
    return cfg
