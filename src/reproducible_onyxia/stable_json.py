from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: str | Path) -> Any:
    """Read JSON from disk (UTF-8) and parse."""

    p = Path(path)
    return json.loads(p.read_text(encoding="utf-8"))


def dumps_stable(data: Any, *, indent: int = 2) -> str:
    """Serialize deterministically: sorted keys, UTF-8 text, trailing newline."""

    return json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False) + "\n"


def write_json(
    path: str | Path,
    data: Any,
    *,
    make_parents: bool = False,
    indent: int = 2,
) -> None:
    p = Path(path)
    if make_parents:
        p.parent.mkdir(parents=True, exist_ok=True)

    p.write_text(dumps_stable(data, indent=indent), encoding="utf-8", newline="\n")
