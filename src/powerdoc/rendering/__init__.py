"""Signature formatting and source-path helpers for page rendering."""

from powerdoc.rendering.helper import PowerTemplateHelper
from powerdoc.rendering.paths import SourceFile, common_prefix

__all__ = [
    "PowerTemplateHelper",
    "SourceFile",
    "common_prefix",
]
