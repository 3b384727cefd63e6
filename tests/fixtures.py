from __future__ import annotations

import copy

# Chapter front matter as it arrives from the document reader.
# Use meta()/project_config() to get copies; never mutate these directly.
BASIC_META: dict = {
    "title": "Basic Test",
    "reproducible": {"enabled": True},
}

FULL_METADATA_META: dict = {
    "title": "Full Metadata Test",
    "reproducible": {
        "enabled": True,
        "tier": "heavy",
        "image-flavor": "gpu",
        "data-snapshot": "sha256-abc123def456",
        "storage-size": "50Gi",
        "estimated-runtime": "45 minutes",
    },
}

DISABLED_META: dict = {
    "title": "Disabled Test",
    "reproducible": {"enabled": False},
}

INVALID_TIER_META: dict = {
    "title": "Invalid Tier Test",
    "reproducible": {"enabled": True, "tier": "super-heavy"},
}

SPECIAL_CHARS_META: dict = {
    "title": "Special Characters: Test & Validation!",
    "reproducible": {"enabled": True, "data-snapshot": "v1.2.3-beta+build.456"},
}

PROJECT_CONFIG: dict = {
    "onyxia": {
        "base-url": "https://onyxia.example.org",
        "catalog": "handbook",
        "chart": "chapter-session",
        "auto-launch": False,
    },
    "ui": {
        "button-text": "Open Session",
        "notice-title": "Run this chapter",
        "notice-style": "minimal",
        "session-duration": "4h",
        "show-runtime": False,
    },
    "branding": {
        "primary-color": "#1976d2",
        "text-color": "#222222",
        "background-color": "#e3f2fd",
    },
    "tier-labels": {"medium": "Standard (6 CPU)"},
    "defaults": {
        "tier": "light",
        "image-flavor": "geo",
        "data-snapshot": "2024.06",
        "storage-size": "10Gi",
        "estimated-runtime": "5 minutes",
    },
}


def meta(name: str) -> dict:
    """Return a deep copy of a named metadata fixture."""

    fixtures = {
        "basic": BASIC_META,
        "full-metadata": FULL_METADATA_META,
        "disabled": DISABLED_META,
        "invalid-tier": INVALID_TIER_META,
        "special-chars": SPECIAL_CHARS_META,
    }
    return copy.deepcopy(fixtures[name])


def project_config() -> dict:
    return copy.deepcopy(PROJECT_CONFIG)
