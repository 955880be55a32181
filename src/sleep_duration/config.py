"""Calculator settings read from YAML, with ``SDC_`` environment overrides layered on top."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

SETTINGS_PATH = Path("config/settings.yaml")
ENV_PREFIX = "SDC_"
ENV_SEPARATOR = "__"


@dataclass
class Settings:
    raw: Dict[str, Any] = field(default_factory=dict)

    def section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name)
        return dict(value) if isinstance(value, dict) else {}

    def get(self, *keys: str, default: Any = None) -> Any:
        """Look up a nested value, e.g. ``settings.get("defaults", "timezone")``."""
        if not keys:
            return self.raw
        head, *rest = keys
        node: Any = self.section(head) if rest else self.raw.get(head, default)
        for key in rest:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    @property
    def guidelines(self) -> Dict[str, Any]:
        return self.section("guidelines")

    @property
    def default_timezone(self) -> Optional[str]:
        return self.get("defaults", "timezone")

    @property
    def default_date(self) -> Any:
        return self.get("defaults", "date")

    @property
    def telemetry_enabled(self) -> bool:
        return bool(self.get("telemetry", "enabled", default=False))

    @property
    def telemetry_output_dir(self) -> Path:
        return Path(self.get("telemetry", "output_dir", default="analysis_output"))


def _load_document(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    document = yaml.safe_load(text)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Settings file {path} must contain a mapping at the top level")
    return document


def _parse_scalar(text: str) -> Any:
    """Read an environment value with YAML scalar rules; anything else stays a string."""
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    if value is None or isinstance(value, (dict, list)):
        return text
    return value


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """``SDC_DEFAULTS__TIMEZONE=Asia/Tokyo`` becomes ``{"defaults": {"timezone": "Asia/Tokyo"}}``."""
    overrides: Dict[str, Any] = {}
    for name in sorted(environ):
        if not name.startswith(ENV_PREFIX):
            continue
        segments = [part for part in name[len(ENV_PREFIX) :].lower().split(ENV_SEPARATOR) if part]
        if not segments:
            continue
        *parents, leaf = segments
        node = overrides
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = _parse_scalar(environ[name])
    return overrides


def _deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_settings(path: Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    document = _load_document(path or SETTINGS_PATH)
    overrides = _env_overrides(os.environ if environ is None else environ)
    return Settings(raw=_deep_merge(document, overrides))
