import logging
import os

import yaml

from settings_schema import AnalyticsSettings, validate_settings

SETTINGS_ENV = "ANALYTICS_SETTINGS"
TREND_MODE_ENV = "ANALYTICS_TREND_MODE"

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save analytics settings to a YAML file."""

    def __init__(self, path: str = "analytics.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)


def load_settings(path: str | None = None) -> AnalyticsSettings:
    """Return validated settings from ``path`` or ``$ANALYTICS_SETTINGS``."""
    path = path or os.environ.get(SETTINGS_ENV, "analytics.yaml")
    data = YamlConfig(path).load()
    mode = os.environ.get(TREND_MODE_ENV)
    if mode:
        trend = dict(data.get("trend") or {})
        trend["mode"] = mode
        data["trend"] = trend
    settings = validate_settings(data)
    logger.info("loaded analytics settings from %s", path)
    return settings
