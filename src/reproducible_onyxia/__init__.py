"""Onyxia deep-link and reproducible-environment notice for rendered documents.

The engine is a pure function of document metadata, project configuration and
built-in defaults; `host` and `cli` wrap it for file-based use.
"""

from reproducible_onyxia.engine import ENGINE_VERSION, ReproducibleResult, render_reproducible

__version__ = ENGINE_VERSION

__all__: list[str] = [
    "ENGINE_VERSION",
    "ReproducibleResult",
    "render_reproducible",
]
