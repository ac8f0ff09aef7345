"""Site generation: navigation, page writers, static assets and the entry point."""

from powerdoc.publish.navigation import NavBuilder
from powerdoc.publish.pages import PageWriter, highlight_source
from powerdoc.publish.publisher import (
    PublishResult,
    attach_module_symbols,
    publish,
    split_example,
)
from powerdoc.publish.static import (
    StaticFileFilter,
    copy_template_static,
    copy_user_static,
    write_pygments_stylesheet,
)

__all__ = [
    "NavBuilder",
    "PageWriter",
    "PublishResult",
    "StaticFileFilter",
    "attach_module_symbols",
    "copy_template_static",
    "copy_user_static",
    "highlight_source",
    "publish",
    "split_example",
    "write_pygments_stylesheet",
]
