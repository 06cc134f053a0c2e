import logging
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "FilterGrid"
APPLICATION = "Filters"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

@dataclass
class FilterConfig:
    """Application settings persisted through QSettings."""
    log_level: str = "INFO"
    filters_file: str = ""  # JSON term set loaded at start-up, empty for none

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

def load_config(settings: Optional[QSettings] = None) -> FilterConfig:
    """Read FilterConfig, falling back to defaults for missing or invalid values."""
    settings = settings or QSettings(ORGANIZATION, APPLICATION)
    defaults = FilterConfig()

    level = str(settings.value("log_level", defaults.log_level)).upper()
    if level not in _LOG_LEVELS:
        logger.warning(f"Ignoring unknown log level '{level}', using {defaults.log_level}")
        level = defaults.log_level

    return FilterConfig(
        log_level=level,
        filters_file=str(settings.value("filters_file", defaults.filters_file) or ""),
    )

def save_config(config: FilterConfig, settings: Optional[QSettings] = None):
    settings = settings or QSettings(ORGANIZATION, APPLICATION)
    settings.setValue("log_level", config.log_level)
    settings.setValue("filters_file", config.filters_file)
    settings.sync()
