"""Engine settings and the layered loader that produces them.

Every :class:`EngineSettings` field maps to one ``RIGCHECK_<FIELD>`` key.
Later layers win::

    field defaults -> RIGCHECK_ENV profile -> .rigcheck/config.json
                   -> .env -> process environment
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from rigcheck.config import (
    BASELINE_OVERHEAD_W,
    DEFAULT_HEADROOM_THRESHOLD_PCT,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "RIGCHECK_"

# Profile overrides, keyed by settings field name
_PROFILES: dict[str, dict[str, str]] = {
    "development": {"log_level": "DEBUG"},
    "production": {"log_level": "WARNING"},
    "testing": {"log_level": "DEBUG", "rules_db": ":memory:"},
}

_NUMERIC_FIELDS = frozenset({"baseline_overhead_w", "headroom_threshold_pct"})


class EngineSettings(BaseModel):
    """Typed view of the configuration consumed by the engines."""

    env: str = "development"
    log_level: str = "INFO"
    rules_db: str = ":memory:"
    baseline_overhead_w: float = Field(default=BASELINE_OVERHEAD_W, ge=0)
    headroom_threshold_pct: float = Field(default=DEFAULT_HEADROOM_THRESHOLD_PCT, ge=0)
    use_case: str = "balanced"
    target_resolution: str = "unknown"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def config_key(cls, field_name: str) -> str:
        """``headroom_threshold_pct`` -> ``RIGCHECK_HEADROOM_THRESHOLD_PCT``."""
        return ENV_PREFIX + field_name.upper()

    @classmethod
    def config_keys(cls) -> dict[str, str]:
        """Map every ``RIGCHECK_*`` key to its field name."""
        return {cls.config_key(name): name for name in cls.model_fields}

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> EngineSettings:
        """Build settings from a flat ``RIGCHECK_*`` mapping.

        Empty values keep the field default.  A non-numeric value for a
        numeric field is logged and ignored.
        """
        values: dict[str, object] = {}
        for key, name in cls.config_keys().items():
            raw = config.get(key)
            if raw is None or raw == "":
                continue
            if name in _NUMERIC_FIELDS:
                try:
                    values[name] = float(raw)
                except ValueError:
                    logger.warning("Ignoring non-numeric setting %s=%r", key, raw)
                continue
            values[name] = raw
        return cls(**values)


def _normalise_keys(data: Mapping[str, object], source: str) -> dict[str, str]:
    """Accept field names or ``RIGCHECK_*`` keys; drop anything else."""
    known = EngineSettings.config_keys()
    out: dict[str, str] = {}
    for key, value in data.items():
        if key in known:
            out[key] = str(value)
        elif EngineSettings.config_key(key) in known:
            out[EngineSettings.config_key(key)] = str(value)
        else:
            logger.debug("Ignoring unknown setting %r in %s", key, source)
    return out


def _read_config_json(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.debug("Could not read %s", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logger.debug("Ignoring %s: top level is not an object", path)
        return {}
    return _normalise_keys(data, str(path))


def _read_env_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        logger.debug("Could not read %s", path, exc_info=True)
        return {}
    pairs: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        pairs[key.strip()] = value.strip()
    return _normalise_keys(pairs, str(path))


class ConfigManager:
    """Resolve rigcheck configuration for a project directory."""

    def load_config(self, project_path: str | Path | None = None) -> dict[str, str]:
        """Return the merged flat ``RIGCHECK_*`` configuration."""
        keys = EngineSettings.config_keys()
        defaults = EngineSettings()
        config = {key: str(getattr(defaults, name)) for key, name in keys.items()}

        env_name = os.environ.get(EngineSettings.config_key("env"), defaults.env)
        profile = _PROFILES.get(env_name)
        if profile is None:
            logger.warning("Unknown environment profile %r; using defaults", env_name)
        else:
            config[EngineSettings.config_key("env")] = env_name
            config.update({EngineSettings.config_key(k): v for k, v in profile.items()})

        if project_path is not None:
            root = Path(project_path)
            config.update(_read_config_json(root / ".rigcheck" / "config.json"))
            config.update(_read_env_file(root / ".env"))

        config.update({key: os.environ[key] for key in keys if key in os.environ})
        return config

    def load_settings(self, project_path: str | Path | None = None) -> EngineSettings:
        """Load the merged config and return it as :class:`EngineSettings`."""
        return EngineSettings.from_config(self.load_config(project_path))
