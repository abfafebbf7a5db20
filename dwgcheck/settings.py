"""ConfigManager — environment profiles, rule defaults and log level."""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Any

from dwgcheck.config import DEFAULT_FIELD, DEFAULT_FILTER, DEFAULT_LOCALE, DEFAULT_TOLERANCE
from dwgcheck.i18n import Translator
from dwgcheck.validation.rules.base import RuleConfig

logger = logging.getLogger(__name__)

# All known configuration keys with defaults
_CONFIG_KEYS: dict[str, dict[str, Any]] = {
    "DWGCHECK_ENV": {"default": "development", "description": "Environment profile"},
    "DWGCHECK_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "DWGCHECK_LOCALE": {"default": DEFAULT_LOCALE, "description": "Message locale (en, ru)"},
    "DWGCHECK_DEFAULT_FILTER": {"default": DEFAULT_FILTER, "description": "Default layer filter"},
    "DWGCHECK_DEFAULT_FIELD": {"default": DEFAULT_FIELD, "description": "Default volume property"},
    "DWGCHECK_DEFAULT_TOLERANCE": {
        "default": str(DEFAULT_TOLERANCE),
        "description": "Default tolerance, percent",
    },
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "DWGCHECK_ENV": "development",
        "DWGCHECK_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "DWGCHECK_ENV": "production",
        "DWGCHECK_LOG_LEVEL": "WARNING",
    },
    "testing": {
        "DWGCHECK_ENV": "testing",
        "DWGCHECK_LOG_LEVEL": "DEBUG",
        "DWGCHECK_LOCALE": "en",
    },
}


class ConfigManager:
    """Load dwgcheck configuration for a project directory."""

    def __init__(self, project_path: str | Path = ".") -> None:
        self.root = Path(project_path)

    def generate_env_template(self) -> Path:
        """Create .env.example with all config keys.

        Returns the path to the generated file.
        """
        env_path = self.root / ".env.example"

        lines = ["# dwgcheck configuration template", "# Copy to .env and fill in values", ""]
        for key, info in _CONFIG_KEYS.items():
            lines.append(f"# {info['description']}")
            lines.append(f"{key}={info['default']}")
            lines.append("")

        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self) -> dict[str, str]:
        """Load merged config: defaults -> profile -> config.json -> .env -> env vars."""
        config: dict[str, str] = {}

        # 1. Defaults
        for key, info in _CONFIG_KEYS.items():
            config[key] = str(info["default"])

        # 2. Profile overrides
        env_name = os.environ.get("DWGCHECK_ENV", config["DWGCHECK_ENV"])
        config.update(_PROFILES.get(env_name, {}))

        # 3. .dwgcheck/config.json
        config_json = self.root / ".dwgcheck" / "config.json"
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
                for k, v in data.items():
                    config[k] = str(v)
            except (json.JSONDecodeError, OSError, AttributeError):
                logger.debug("Could not read %s", config_json, exc_info=True)

        # 4. .env file
        env_file = self.root / ".env"
        if env_file.is_file():
            try:
                for line in env_file.read_text(encoding="utf-8").splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        config[k.strip()] = v.strip()
            except OSError:
                logger.debug("Could not read %s", env_file, exc_info=True)

        # 5. Environment variables override all
        for key in _CONFIG_KEYS:
            env_val = os.environ.get(key)
            if env_val is not None:
                config[key] = env_val

        return config

    def rule_defaults(self, config: dict[str, str] | None = None) -> RuleConfig:
        """Default rule configuration from the merged settings.

        An unparsable, non-finite or negative tolerance falls back to the
        built-in default.  Pass the result to
        :class:`~dwgcheck.validation.RuleEngine` as its ``defaults``.
        """
        config = config or self.load_config()
        try:
            tolerance = float(config["DWGCHECK_DEFAULT_TOLERANCE"])
        except ValueError:
            logger.warning(
                "Invalid DWGCHECK_DEFAULT_TOLERANCE %r, using %s",
                config["DWGCHECK_DEFAULT_TOLERANCE"], DEFAULT_TOLERANCE,
            )
            tolerance = DEFAULT_TOLERANCE
        if not math.isfinite(tolerance) or tolerance < 0:
            logger.warning(
                "Out-of-range DWGCHECK_DEFAULT_TOLERANCE %s, using %s", tolerance, DEFAULT_TOLERANCE
            )
            tolerance = DEFAULT_TOLERANCE
        return RuleConfig(
            filter=config["DWGCHECK_DEFAULT_FILTER"],
            field=config["DWGCHECK_DEFAULT_FIELD"],
            tolerance=tolerance,
        )

    def translator(self, config: dict[str, str] | None = None) -> Translator:
        config = config or self.load_config()
        return Translator(config["DWGCHECK_LOCALE"])

    def apply_logging(self, config: dict[str, str] | None = None) -> int:
        """Set the ``dwgcheck`` logger level.  Returns the level applied."""
        config = config or self.load_config()
        name = config["DWGCHECK_LOG_LEVEL"].upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning("Unknown log level %s, using INFO", name)
            level = logging.INFO
        logging.getLogger("dwgcheck").setLevel(level)
        return level
