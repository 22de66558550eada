from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def load_config(path: str) -> dict[str, Any]:
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as handle:
        if cfg_path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(handle)
        elif cfg_path.suffix.lower() == ".json":
            data = json.load(handle)
        else:
            raise ValueError(f"Unsupported config extension: {cfg_path.suffix}")
    if not isinstance(data, dict):
        raise ValueError("Config must resolve to an object at root level.")
    return data


def provider_config(config: dict[str, Any], name: str) -> dict[str, Any]:
    cfg = (config.get("providers") or {}).get(name) or {}
    return cfg if isinstance(cfg, dict) else {}


def write_json(path: Path, payload: dict[str, Any]) -> None:
    ensure_parent(path)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=True)
