from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from extractors.exceptions import ConfigurationError


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    log_max_mb: int = 10
    log_backup_count: int = 5

    @property
    def level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass(slots=True)
class DecodingConfig:
    """Decoder settings from config.yml."""

    # Code page of ANSI strings inside Shell Link files (system default code page)
    ansi_codepage: str = "cp1252"
    # Additional known-folder GUID -> name mappings
    known_folders: Dict[str, str] = field(default_factory=dict)
    # Optional replacement for the bundled AppID CSV
    appid_csv: Optional[Path] = None


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    base_dir: Path
    logs_dir: Optional[Path] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    decoding: DecodingConfig = field(default_factory=DecodingConfig)

    def to_json(self) -> str:
        """Serialize the configuration into a JSON string for report headers."""
        data = {
            "logs_dir": str(self.logs_dir) if self.logs_dir else None,
            "log_level": self.logging.level,
            "ansi_codepage": self.decoding.ansi_codepage,
            "known_folder_overrides": len(self.decoding.known_folders),
            "appid_csv": str(self.decoding.appid_csv) if self.decoding.appid_csv else None,
        }
        return json.dumps(data, indent=2, sort_keys=True)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            content = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(content, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level.")
        return content


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_yaml = base_dir / "config" / "config.yml"
    config_overrides = _load_yaml(config_yaml)

    logs_dir_cfg = config_overrides.get("logs_dir")
    logs_dir = (base_dir / logs_dir_cfg) if logs_dir_cfg else None

    logging_cfg = config_overrides.get("logging", {}) or {}
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", "INFO")),
        log_max_mb=int(logging_cfg.get("log_max_mb", 10)),
        log_backup_count=int(logging_cfg.get("log_backup_count", 5)),
    )

    decoding_cfg = config_overrides.get("decoding", {}) or {}
    known_folders = decoding_cfg.get("known_folders", {}) or {}
    if not isinstance(known_folders, dict):
        raise ConfigurationError("decoding.known_folders must be a mapping of GUID to folder name.")

    ansi_codepage = str(decoding_cfg.get("ansi_codepage", "cp1252"))
    try:
        codecs.lookup(ansi_codepage)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown ANSI code page: {ansi_codepage}") from exc

    appid_csv_cfg = decoding_cfg.get("appid_csv")
    decoding_config = DecodingConfig(
        ansi_codepage=ansi_codepage,
        known_folders={str(guid): str(name) for guid, name in known_folders.items()},
        appid_csv=(base_dir / appid_csv_cfg) if appid_csv_cfg else None,
    )

    return AppConfig(
        base_dir=base_dir,
        logs_dir=logs_dir,
        logging=logging_config,
        decoding=decoding_config,
    )
