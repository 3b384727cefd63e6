from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from reproducible_onyxia.config.resolver import get_config, lookup, parse_flag, resolve_field
from reproducible_onyxia.defaults import DEFAULT_TIER, DOCUMENT_BLOCK_KEY, PROJECT_CONFIG_KEY
from reproducible_onyxia.fingerprint import fingerprint_payload
from reproducible_onyxia.notice import render_notice
from reproducible_onyxia.resolved import resolve_config
from reproducible_onyxia.tiers import validate_tier
from reproducible_onyxia.url_builder import build_onyxia_url

ENGINE_VERSION = "0.1.0"


@dataclass(frozen=True, slots=True)
class ReproducibleResult:
    url: str | None
    html: str | None
    warnings: list[str] = field(default_factory=list)
    engine_version: str = ENGINE_VERSION
    inputs_fingerprint: str = ""

    @property
    def rendered(self) -> bool:
        return self.url is not None


def fingerprint_inputs(
    document_meta: Any,
    project_config: Any,
    current_file_path: str | None,
    output_format_is_html: bool,
) -> str:
    payload: dict[str, Any] = {
        "document_meta": document_meta,
        "project_config": project_config,
        "current_file_path": current_file_path,
        "output_format_is_html": output_format_is_html,
        "engine_version": ENGINE_VERSION,
    }
    return fingerprint_payload(payload)


def is_enabled(document_meta: Any) -> bool:
    """True only when ``reproducible.enabled`` is explicitly set to a true value."""

    block = lookup(document_meta, DOCUMENT_BLOCK_KEY)
    return parse_flag(lookup(block, "enabled"), False)


def render_reproducible(
    document_meta: Any,
    *,
    current_file_path: str | None = None,
    output_format_is_html: bool = True,
    project_config: Any = None,
) -> ReproducibleResult:
    """Resolve configuration and render the launch URL and notice for one document.

    ``project_config`` is the ``reproducible-config`` block; when omitted it is
    read from ``document_meta`` (hosts that merge project metadata into the
    document put it there).

    Never raises and never mutates its inputs. When the output format is not
    HTML or the feature is not enabled the result carries no URL, no HTML and
    no warnings.

    Deterministic: no timestamps, no randomness.
    """

    if project_config is None:
        project_config = lookup(document_meta, PROJECT_CONFIG_KEY)

    fingerprint = fingerprint_inputs(
        document_meta, project_config, current_file_path, output_format_is_html
    )

    if not output_format_is_html or not is_enabled(document_meta):
        return ReproducibleResult(url=None, html=None, inputs_fingerprint=fingerprint)

    warnings: list[str] = []
    config = get_config(project_config)
    block = lookup(document_meta, DOCUMENT_BLOCK_KEY)

    tier, tier_warning = validate_tier(resolve_field(block, config, "tier", DEFAULT_TIER))
    if tier_warning is not None:
        warnings.append(tier_warning)

    resolved = resolve_config(document_meta, config, tier, current_file_path)
    url = build_onyxia_url(resolved)
    html = render_notice(url, resolved)

    return ReproducibleResult(
        url=url,
        html=html,
        warnings=warnings,
        inputs_fingerprint=fingerprint,
    )
