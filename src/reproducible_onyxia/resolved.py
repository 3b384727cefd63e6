from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from reproducible_onyxia import defaults
from reproducible_onyxia.config.resolver import (
    ProjectConfig,
    lookup,
    resolve_field,
    resolve_flag,
)
from reproducible_onyxia.naming import extract_chapter_name
from reproducible_onyxia.tiers import NoticeStyle, ResourceTier, tier_label


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    tier: ResourceTier
    tier_label: str
    image_flavor: str
    data_snapshot: str
    storage_size: str
    chapter_name: str
    estimated_runtime: str
    button_text: str
    notice_title: str
    notice_style: NoticeStyle
    session_duration: str
    show_runtime: bool
    primary_color: str
    text_color: str
    background_color: str
    onyxia_base_url: str
    catalog: str
    chart: str
    auto_launch: bool


def _ui_field(block: Any, config: ProjectConfig, key: str, builtin: str) -> str:
    # document > project defaults > project ui > built-in
    ui_value = resolve_field(None, config, key, builtin, namespace="ui")
    return resolve_field(block, config, key, ui_value)


def _ui_flag(block: Any, config: ProjectConfig, key: str, builtin: bool) -> bool:
    ui_value = resolve_flag(None, config, key, builtin, namespace="ui")
    return resolve_flag(block, config, key, ui_value)


def resolve_config(
    document_meta: Any,
    config: ProjectConfig,
    validated_tier: ResourceTier,
    current_file_path: str | None = None,
) -> ResolvedConfig:
    """Resolve every configurable field for one invocation.

    ``validated_tier`` must already have gone through ``validate_tier``; it is
    taken as-is so the URL and the displayed label can never disagree.
    """

    block = lookup(document_meta, defaults.DOCUMENT_BLOCK_KEY)

    return ResolvedConfig(
        tier=validated_tier,
        tier_label=tier_label(validated_tier, config),
        image_flavor=resolve_field(block, config, "image-flavor", defaults.DEFAULT_IMAGE_FLAVOR),
        data_snapshot=resolve_field(
            block, config, "data-snapshot", defaults.DEFAULT_DATA_SNAPSHOT
        ),
        storage_size=resolve_field(block, config, "storage-size", defaults.DEFAULT_STORAGE_SIZE),
        chapter_name=extract_chapter_name(document_meta, current_file_path),
        estimated_runtime=resolve_field(
            block, config, "estimated-runtime", defaults.DEFAULT_ESTIMATED_RUNTIME
        ),
        button_text=_ui_field(block, config, "button-text", defaults.DEFAULT_BUTTON_TEXT),
        notice_title=_ui_field(block, config, "notice-title", defaults.DEFAULT_NOTICE_TITLE),
        notice_style=NoticeStyle.parse(
            _ui_field(block, config, "notice-style", defaults.DEFAULT_NOTICE_STYLE)
        ),
        session_duration=_ui_field(
            block, config, "session-duration", defaults.DEFAULT_SESSION_DURATION
        ),
        show_runtime=_ui_flag(block, config, "show-runtime", defaults.DEFAULT_SHOW_RUNTIME),
        primary_color=resolve_field(
            None, config, "primary-color", defaults.DEFAULT_PRIMARY_COLOR, namespace="branding"
        ),
        text_color=resolve_field(
            None, config, "text-color", defaults.DEFAULT_TEXT_COLOR, namespace="branding"
        ),
        background_color=resolve_field(
            None,
            config,
            "background-color",
            defaults.DEFAULT_BACKGROUND_COLOR,
            namespace="branding",
        ),
        onyxia_base_url=resolve_field(
            None, config, "base-url", defaults.DEFAULT_BASE_URL, namespace="onyxia"
        ),
        catalog=resolve_field(
            None, config, "catalog", defaults.DEFAULT_CATALOG, namespace="onyxia"
        ),
        chart=resolve_field(None, config, "chart", defaults.DEFAULT_CHART, namespace="onyxia"),
        auto_launch=resolve_flag(
            None, config, "auto-launch", defaults.DEFAULT_AUTO_LAUNCH, namespace="onyxia"
        ),
    )
