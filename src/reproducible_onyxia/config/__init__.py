"""Layered configuration lookup (document > project > built-in)."""

from reproducible_onyxia.config.resolver import (
    ProjectConfig,
    get_config,
    lookup,
    parse_flag,
    resolve_field,
    resolve_flag,
    stringify,
)

__all__ = [
    "ProjectConfig",
    "get_config",
    "lookup",
    "parse_flag",
    "resolve_field",
    "resolve_flag",
    "stringify",
]
