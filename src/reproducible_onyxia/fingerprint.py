from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def _canonicalize_json(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _canonicalize_json(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_canonicalize_json(v) for v in value]
    return value


def _sha256_hexdigest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def fingerprint_payload(payload: Mapping[str, Any]) -> str:
    """Deterministic sha256 of a JSON-like payload.

    Key order does not matter; values JSON cannot represent (dates from YAML
    front matter, for instance) are hashed through their ``str`` form.
    """

    canonical = _canonicalize_json(payload)
    data = json.dumps(
        canonical,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    ).encode("utf-8", errors="surrogatepass")
    return _sha256_hexdigest(data)
