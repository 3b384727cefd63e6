from __future__ import annotations

from enum import Enum
from typing import Any

from reproducible_onyxia.config.resolver import ProjectConfig, lookup, stringify


class ResourceTier(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    GPU = "gpu"


class NoticeStyle(str, Enum):
    FULL = "full"
    MINIMAL = "minimal"
    BUTTON_ONLY = "button-only"

    @classmethod
    def parse(cls, raw: Any) -> NoticeStyle:
        """Return the matching style; anything unrecognized renders as ``full``."""
        for style in cls:
            if style.value == raw:
                return style
        return cls.FULL


FALLBACK_TIER = ResourceTier.MEDIUM

# Display only; actual CPU/RAM allocation is owned by the Helm chart.
DEFAULT_TIER_LABELS: dict[ResourceTier, str] = {
    ResourceTier.LIGHT: "Light (2 CPU, 8GB RAM)",
    ResourceTier.MEDIUM: "Medium (6 CPU, 24GB RAM)",
    ResourceTier.HEAVY: "Heavy (10 CPU, 48GB RAM)",
    ResourceTier.GPU: "GPU (8 CPU, 32GB RAM, 1 GPU)",
}


def validate_tier(resolved_tier: str) -> tuple[ResourceTier, str | None]:
    for tier in ResourceTier:
        if tier.value == resolved_tier:
            return tier, None
    return FALLBACK_TIER, f"Invalid tier: {resolved_tier}, using '{FALLBACK_TIER.value}'"


def tier_label(tier: ResourceTier | str, config: ProjectConfig) -> str:
    raw = tier.value if isinstance(tier, ResourceTier) else str(tier)

    override = lookup(config.tier_labels, raw)
    if override is not None:
        return stringify(override)

    for member, label in DEFAULT_TIER_LABELS.items():
        if member.value == raw:
            return label
    return raw
