from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import yaml

from ledgerlite.core.errors import ConfigError

STORAGE_ENV_VAR = "LEDGERLITE_STORAGE"

DEFAULT_CONFIG: Dict[str, object] = {
    "storage": "sqlite",
    "data_dir": "data",
    "export_dir": "exports",
    "store_modules": {
        "json": "ledgerlite.stores.json_store.JsonTransactionStore",
        "sqlite": "ledgerlite.stores.sqlite_store.SqliteTransactionStore",
    },
    "output_modules": {
        "csv": "ledgerlite.outputs.csv_output.CSVOutput",
        "excel": "ledgerlite.outputs.excel_output.ExcelOutput",
    },
}


@dataclass(frozen=True)
class StorageConfig:
    """Directories the stores and outputs write into."""

    data_dir: Path = Path("data")
    export_dir: Path = Path("exports")

    def ensure_directories(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | os.PathLike | None = None) -> Dict[str, object]:
    """Load a YAML config file and fill in defaults.

    Parameters
    ----------
    path:
        Optional path to a YAML mapping. When omitted only the defaults are
        used.

    The ``LEDGERLITE_STORAGE`` environment variable, when set, overrides the
    ``storage`` key.
    """
    config: Dict[str, object] = {}
    if path is not None:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        config = data

    config = _merge_defaults(config, DEFAULT_CONFIG)

    env_storage = os.getenv(STORAGE_ENV_VAR)
    if env_storage:
        config["storage"] = env_storage
    config["storage"] = str(config["storage"]).strip().lower()

    if config["storage"] not in config["store_modules"]:
        raise ConfigError(
            f"Unknown storage backend '{config['storage']}'. "
            f"Choose one of: {', '.join(sorted(config['store_modules']))}"
        )
    return config


def storage_config(config: Dict[str, object]) -> StorageConfig:
    return StorageConfig(
        data_dir=Path(config["data_dir"]),
        export_dir=Path(config["export_dir"]),
    )
