"""Built-in defaults (lowest precedence tier).

Document metadata and project configuration override every value here.
"""

from __future__ import annotations

DOCUMENT_BLOCK_KEY = "reproducible"
PROJECT_CONFIG_KEY = "reproducible-config"

PROJECT_NAMESPACES = ("onyxia", "ui", "branding", "tier-labels", "defaults")

# onyxia
DEFAULT_BASE_URL = "https://datalab.officialstatistics.org"
DEFAULT_CATALOG = "capacity"
DEFAULT_CHART = "eostat"
DEFAULT_AUTO_LAUNCH = True

# defaults
DEFAULT_TIER = "medium"
DEFAULT_IMAGE_FLAVOR = "base"
DEFAULT_DATA_SNAPSHOT = "latest"
DEFAULT_STORAGE_SIZE = "20Gi"
DEFAULT_ESTIMATED_RUNTIME = "Unknown"

# ui
DEFAULT_BUTTON_TEXT = "Launch Environment"
DEFAULT_NOTICE_TITLE = "Reproducible Environment Available"
DEFAULT_NOTICE_STYLE = "full"
DEFAULT_SESSION_DURATION = "2h"
DEFAULT_SHOW_RUNTIME = True

# branding (Onyxia palette)
DEFAULT_PRIMARY_COLOR = "rgb(255, 86, 44)"
DEFAULT_TEXT_COLOR = "rgb(44, 50, 63)"
DEFAULT_BACKGROUND_COLOR = "#fafafa"

UNKNOWN_CHAPTER = "unknown-chapter"
UNVERSIONED = "latest"
DEPLOYMENT_NAME_PREFIX = "eostat-"
