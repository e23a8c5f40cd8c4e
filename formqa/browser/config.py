import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG = {
    "base_url": "https://the-internet.herokuapp.com",
    "headless": True,
    "viewport": {"width": 1280, "height": 720},
    "language": "en-US",
    "timeouts": {
        "command": 10000,
        "request": 10000,
        "response": 10000,
        "page_load": 30000,
    },
    "spec_pattern": "tests/e2e/**/test_*.py",
    "grep_tags": "",
    "grep_omit_filtered": True,
    "video": True,
    "screenshot_on_failure": True,
    "log": {"level": "info"},
}

# Explicit config file path, used when no path is passed in
CONFIG_ENV = "FORMQA_CONFIG"

# Environment variables that take priority over the config file
ENV_OVERRIDES = {
    "FORMQA_BASE_URL": "base_url",
    "FORMQA_HEADLESS": "headless",
    "FORMQA_GREP_TAGS": "grep_tags",
}


class Viewport(BaseModel):
    width: int = 1280
    height: int = 720


class Timeouts(BaseModel):
    """Independent budgets, in milliseconds, for distinct operation classes."""

    command: float = 10000
    request: float = 10000
    response: float = 10000
    page_load: float = 30000

    @field_validator("command", "request", "response", "page_load")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeouts must be positive milliseconds")
        return value


class RunConfig(BaseModel):
    base_url: str = DEFAULT_CONFIG["base_url"]
    headless: bool = True
    viewport: Viewport = Field(default_factory=Viewport)
    language: str = "en-US"
    timeouts: Timeouts = Field(default_factory=Timeouts)
    spec_pattern: str = DEFAULT_CONFIG["spec_pattern"]
    grep_tags: str = ""
    grep_omit_filtered: bool = True
    video: bool = True
    screenshot_on_failure: bool = True
    log: Dict[str, Any] = Field(default_factory=lambda: {"level": "info"})

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    def url_for(self, path: str) -> str:
        """Join the base URL and a path, tolerating a missing leading slash."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def browser_config(self) -> Dict[str, Any]:
        """Browser options in the dict shape the Driver consumes."""
        return {
            "headless": self.headless,
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "language": self.language,
        }


def find_config_file(args_config=None) -> Optional[str]:
    """Locate the run configuration file.

    An explicitly given path, or one named by FORMQA_CONFIG, must exist.
    Otherwise the default locations are searched in order and None is
    returned when nothing is found, in which case DEFAULT_CONFIG applies.
    """
    args_config = args_config or os.getenv(CONFIG_ENV)
    if args_config:
        if os.path.isfile(args_config):
            logging.info(f"Using specified config file: {args_config}")
            return args_config
        raise FileNotFoundError(f"Specified config file not found: {args_config}")

    current_dir = os.getcwd()
    default_paths = [
        os.path.join(current_dir, "config", "config.yaml"),
        os.path.join(current_dir, "config.yaml"),
    ]
    for path in default_paths:
        if os.path.isfile(path):
            logging.debug(f"Auto-discovered config file: {path}")
            return path
    return None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_run_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> RunConfig:
    """Build the RunConfig from defaults, the YAML file, the environment and
    explicit overrides, in increasing priority."""
    load_dotenv()

    raw = dict(DEFAULT_CONFIG)
    config_path = find_config_file(path)
    if config_path:
        with open(config_path, "r", encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
        if not isinstance(file_cfg, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        raw = _merge(raw, file_cfg)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        raw[key] = _as_bool(value) if key == "headless" else value

    if overrides:
        raw = _merge(raw, {k: v for k, v in overrides.items() if v is not None})

    # Docker environment detection: force headless mode
    if os.getenv("DOCKER_ENV") == "true" and not raw.get("headless", True):
        logging.warning("Docker environment detected, forcing headless mode")
        raw["headless"] = True

    return RunConfig(**raw)
