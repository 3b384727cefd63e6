from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote, unquote

OPEN_DELIMITER = "«"
CLOSE_DELIMITER = "»"

# Matches what Onyxia treats as a bare number: 12, -3, 1.5, 2.
_PURE_NUMBER_RE = re.compile(r"-?[0-9]+\.?[0-9]*")


def _percent_encode(text: str) -> str:
    # quote() leaves A-Za-z0-9 and "-._~" untouched and emits uppercase hex.
    return quote(text, safe="", encoding="utf-8", errors="surrogatepass")


def is_pure_number(text: str) -> bool:
    return _PURE_NUMBER_RE.fullmatch(text) is not None


def encode_helm_value(value: Any) -> str:
    """Encode a value for an Onyxia launcher query parameter.

    Booleans and numbers (including numeric strings) pass through unchanged,
    ``None`` becomes ``null`` and every other value is percent-encoded and
    wrapped in guillemets so the launcher reads it as a string.
    """

    if value is None:
        return "null"

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return str(value)

    text = value if isinstance(value, str) else str(value)
    if is_pure_number(text):
        return text

    return OPEN_DELIMITER + _percent_encode(text) + CLOSE_DELIMITER


def url_encode_only(value: Any) -> str:
    """Percent-encode without delimiters or the numeric bypass.

    Only the deployment ``name`` parameter uses this form.
    """

    text = "" if value is None else str(value)
    return _percent_encode(text)


def decode_helm_value(encoded: str) -> str:
    text = encoded
    if text.startswith(OPEN_DELIMITER):
        text = text[len(OPEN_DELIMITER) :]
    if text.endswith(CLOSE_DELIMITER):
        text = text[: -len(CLOSE_DELIMITER)]
    return unquote(text, encoding="utf-8", errors="surrogatepass")
