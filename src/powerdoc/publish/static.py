"""Copy static assets into the output directory."""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path

import logfire
from pygments.formatters import HtmlFormatter

from powerdoc.config.conf import PublishConf, StaticFilesConfig
from powerdoc.core.files import list_files

# Directory levels scanned below a static directory (1 = top level only)
TEMPLATE_STATIC_DEPTH = 3
USER_STATIC_DEPTH = 10

PYGMENTS_STYLESHEET = Path("styles") / "pygments.css"


@dataclass
class StaticFileFilter:
    """Decides which user static files get copied.

    Mirrors the source filter of the documentation host: ``exclude`` holds
    paths whose contents are never copied, ``include_pattern`` must match and
    ``exclude_pattern`` must not.
    """

    exclude: list[Path] = field(default_factory=list)
    include_pattern: re.Pattern[str] | None = None
    exclude_pattern: re.Pattern[str] | None = None

    @classmethod
    def from_config(cls, conf: StaticFilesConfig, base: PublishConf) -> StaticFileFilter:
        """Build a filter from the ``staticFiles`` section.

        Raises:
            ValueError: If a pattern is not a valid regular expression
        """
        try:
            include_pattern = re.compile(conf.include_pattern) if conf.include_pattern else None
            exclude_pattern = re.compile(conf.exclude_pattern) if conf.exclude_pattern else None
        except re.error as e:
            raise ValueError(f"Invalid static file pattern: {e}") from e

        return cls(
            exclude=[base.resolve_path(p).resolve() for p in conf.exclude or []],
            include_pattern=include_pattern,
            exclude_pattern=exclude_pattern,
        )

    def is_included(self, path: Path) -> bool:
        """Check if a file should be copied.

        Args:
            path: Absolute path of the candidate file

        Returns:
            True if the file passes every rule
        """
        posix = path.as_posix()

        if self.include_pattern and not self.include_pattern.search(posix):
            return False

        if self.exclude_pattern and self.exclude_pattern.search(posix):
            return False

        return not any(path == excluded or excluded in path.parents for excluded in self.exclude)


def _copy(source: Path, target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return target


def copy_template_static(template_path: Path, outdir: Path) -> list[Path]:
    """Copy the template's ``static/`` tree into the output directory."""
    from_dir = template_path / "static"
    if not from_dir.is_dir():
        return []

    copied = [
        _copy(source, outdir / source.relative_to(from_dir))
        for source in list_files(from_dir, TEMPLATE_STATIC_DEPTH)
    ]
    logfire.debug("Copied template static files", source=str(from_dir), count=len(copied))
    return copied


def copy_user_static(conf: PublishConf, outdir: Path) -> list[Path]:
    """Copy the files listed under ``templates.default.staticFiles``.

    A directory's contents land directly in the output directory; a single
    file is copied next to the pages.
    """
    static_conf = conf.templates.default.static_files
    if static_conf is None:
        return []

    file_filter = StaticFileFilter.from_config(static_conf, conf)
    copied: list[Path] = []

    for include in static_conf.include_paths():
        source_path = conf.resolve_path(include).resolve()

        if source_path.is_file():
            if file_filter.is_included(source_path):
                copied.append(_copy(source_path, outdir / source_path.name))
            continue

        if not source_path.is_dir():
            logfire.warn("Static file path does not exist", path=str(source_path))
            continue

        for source in list_files(source_path, USER_STATIC_DEPTH):
            if file_filter.is_included(source):
                copied.append(_copy(source, outdir / source.relative_to(source_path)))

    logfire.debug("Copied user static files", count=len(copied))
    return copied


def write_pygments_stylesheet(outdir: Path, style: str = "default") -> Path:
    """Write the stylesheet used by pretty-printed source listings."""
    path = outdir / PYGMENTS_STYLESHEET
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(HtmlFormatter(style=style).get_style_defs(".highlight"), encoding="utf-8")
    return path
