from __future__ import annotations

import datetime as _dt
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from reproducible_onyxia.defaults import PROJECT_NAMESPACES

_EMPTY: Mapping[str, Any] = MappingProxyType({})

_TRUE_SPELLINGS = {"1", "true", "t", "yes", "y", "on"}
_FALSE_SPELLINGS = {"0", "false", "f", "no", "n", "off"}

# Pandoc AST element names and where their literal text lives.
_SPACE_ELEMENTS = {"Space", "SoftBreak", "LineBreak"}
_LITERAL_ELEMENTS = {"Code", "CodeBlock", "Math", "RawInline", "RawBlock"}
_WRAPPED_INLINE_ELEMENTS = {"Link", "Image", "Span", "Div", "Quoted", "Cite"}


def _stringify_element(element: Mapping[str, Any]) -> str:
    tag = element.get("t")
    content = element.get("c")

    if tag == "Str":
        return stringify(content)
    if tag in _SPACE_ELEMENTS:
        return " "
    if tag in _LITERAL_ELEMENTS:
        # [attr, text] for code, [format, text] for raw, [type, text] for math.
        if isinstance(content, list) and content:
            return stringify(content[-1])
        return stringify(content)
    if tag in _WRAPPED_INLINE_ELEMENTS:
        # Link/Image: [attr, inlines, target]; Span/Div: [attr, content];
        # Quoted: [quote_type, inlines]; Cite: [citations, inlines].
        if isinstance(content, list) and len(content) >= 2:
            return stringify(content[1])
        return stringify(content)
    if tag == "MetaBool":
        return "true" if content else "false"
    return stringify(content)


def stringify(value: Any) -> str:
    """Flatten a metadata value to plain text.

    Mirrors ``pandoc.utils.stringify``: markup is dropped, inline content is
    concatenated and scalars get their literal text form. Total over any tree
    built from mappings, sequences and scalars.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        if isinstance(value.get("t"), str):
            return _stringify_element(value)
        return "".join(stringify(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return "".join(stringify(v) for v in value)
    return str(value)


def parse_flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    raw_norm = stringify(value).strip().lower()
    if raw_norm in _TRUE_SPELLINGS:
        return True
    if raw_norm in _FALSE_SPELLINGS:
        return False
    return default


def lookup(mapping: Any, key: str) -> Any | None:
    """Return ``mapping[key]`` or ``None``; never raises on odd shapes."""

    if not isinstance(mapping, Mapping):
        return None
    return mapping.get(key)


def _as_readonly_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return _EMPTY


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    onyxia: Mapping[str, Any]
    ui: Mapping[str, Any]
    branding: Mapping[str, Any]
    tier_labels: Mapping[str, Any]
    defaults: Mapping[str, Any]

    def namespace(self, name: str) -> Mapping[str, Any]:
        if name not in PROJECT_NAMESPACES:
            raise KeyError(f"Unknown project config namespace: {name!r}")
        return getattr(self, name.replace("-", "_"))


def get_config(project_block: Any) -> ProjectConfig:
    """Partition the project configuration block into its five namespaces.

    Missing or malformed namespaces come back as empty read-only mappings, so
    field lookups downstream are always safe.
    """

    block = project_block if isinstance(project_block, Mapping) else _EMPTY
    return ProjectConfig(
        onyxia=_as_readonly_mapping(block.get("onyxia")),
        ui=_as_readonly_mapping(block.get("ui")),
        branding=_as_readonly_mapping(block.get("branding")),
        tier_labels=_as_readonly_mapping(block.get("tier-labels")),
        defaults=_as_readonly_mapping(block.get("defaults")),
    )


def _first_present(
    document_meta: Any, config: ProjectConfig, key: str, namespace: str
) -> Any | None:
    value = lookup(document_meta, key)
    if value is not None:
        return value
    return lookup(config.namespace(namespace), key)


def resolve_field(
    document_meta: Any,
    config: ProjectConfig,
    key: str,
    default: str,
    *,
    namespace: str = "defaults",
) -> str:
    """Resolve ``key``: document metadata, then project namespace, then ``default``.

    Pass ``document_meta=None`` for fields that only the project may set.
    """

    value = _first_present(document_meta, config, key, namespace)
    if value is None:
        return default
    return stringify(value)


def resolve_flag(
    document_meta: Any,
    config: ProjectConfig,
    key: str,
    default: bool,
    *,
    namespace: str = "defaults",
) -> bool:
    value = _first_present(document_meta, config, key, namespace)
    return parse_flag(value, default)
