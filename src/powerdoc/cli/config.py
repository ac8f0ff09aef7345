"""Configuration discovery and logging setup for the powerdoc CLI."""

from __future__ import annotations

from pathlib import Path

import logfire

from powerdoc.config.conf import PublishConf, load_conf
from powerdoc.core.config import get_settings

# Looked up in the working directory when no --configure is given
PROJECT_CONFIG_FILES = ("powerdoc.yml", "powerdoc.yaml", "conf.json")


def find_project_config(directory: Path | None = None) -> Path | None:
    """Find a project configuration file.

    Args:
        directory: Directory to search (defaults to the working directory)

    Returns:
        Path of the first configuration file found, or None
    """
    directory = directory or Path.cwd()
    for name in PROJECT_CONFIG_FILES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_project_config(path: Path | None = None) -> PublishConf:
    """Load the given configuration file, or the project one, or defaults."""
    path = path or find_project_config()
    if path is None:
        return PublishConf()
    return load_conf(path)


def configure_logging(verbose: bool = False) -> None:
    """Configure logfire for a CLI run.

    Args:
        verbose: Show debug output regardless of the configured level
    """
    settings = get_settings()
    level = "debug" if verbose or settings.debug else settings.log_level

    logfire.configure(
        service_name="powerdoc",
        environment=settings.environment,
        send_to_logfire=settings.send_to_logfire,
        console=logfire.ConsoleOptions(min_log_level=level),
    )


__all__ = [
    "configure_logging",
    "find_project_config",
    "load_project_config",
]
