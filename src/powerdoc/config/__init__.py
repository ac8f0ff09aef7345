"""Configuration module for powerdoc."""

from powerdoc.config.conf import (
    DEFAULT_TEMPLATE_PATH,
    DefaultTemplateConfig,
    PublishConf,
    PublishOptions,
    StaticFilesConfig,
    TemplatesConfig,
    load_conf,
    parse_conf,
)
from powerdoc.config.power_mode import PowerModeConfig, load_from_conf, parse

__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "DefaultTemplateConfig",
    "PowerModeConfig",
    "PublishConf",
    "PublishOptions",
    "StaticFilesConfig",
    "TemplatesConfig",
    "load_conf",
    "load_from_conf",
    "parse",
    "parse_conf",
]
