from __future__ import annotations

from reproducible_onyxia.codec import encode_helm_value, url_encode_only
from reproducible_onyxia.defaults import DEPLOYMENT_NAME_PREFIX
from reproducible_onyxia.naming import normalize_version
from reproducible_onyxia.resolved import ResolvedConfig

# Query order is fixed.
LAUNCH_PARAMETER_ORDER = (
    "autoLaunch",
    "name",
    "tier",
    "imageFlavor",
    "chapter.name",
    "chapter.version",
    "chapter.storageSize",
)


def launcher_url(resolved: ResolvedConfig) -> str:
    base_url = resolved.onyxia_base_url.rstrip("/")
    return f"{base_url}/launcher/{resolved.catalog}/{resolved.chart}"


def launch_parameters(resolved: ResolvedConfig) -> list[tuple[str, str]]:
    """Encoded ``(key, value)`` pairs in launcher order."""

    values = {
        "autoLaunch": encode_helm_value(resolved.auto_launch),
        "name": url_encode_only(DEPLOYMENT_NAME_PREFIX + resolved.chapter_name),
        "tier": encode_helm_value(resolved.tier.value),
        "imageFlavor": encode_helm_value(resolved.image_flavor),
        "chapter.name": encode_helm_value(resolved.chapter_name),
        "chapter.version": encode_helm_value(normalize_version(resolved.data_snapshot)),
        "chapter.storageSize": encode_helm_value(resolved.storage_size),
    }
    return [(key, values[key]) for key in LAUNCH_PARAMETER_ORDER]


def build_onyxia_url(resolved: ResolvedConfig) -> str:
    query = "&".join(f"{key}={value}" for key, value in launch_parameters(resolved))
    return f"{launcher_url(resolved)}?{query}"
