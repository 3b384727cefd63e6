"""File-based host for the engine.

Plays the part of the document pipeline: reads YAML front matter and the
project file, decides whether the output format is HTML, runs the engine,
logs its warnings and can splice the notice into a rendered page.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from reproducible_onyxia.config.resolver import lookup
from reproducible_onyxia.defaults import PROJECT_CONFIG_KEY
from reproducible_onyxia.engine import ReproducibleResult, render_reproducible
from reproducible_onyxia.stable_json import read_json

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "project_config.schema.json"

FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<fm>.*?)^(?:---|\.\.\.)[ \t]*\r?$\n?",
    re.DOTALL | re.MULTILINE,
)
_BODY_OPEN_RE = re.compile(r"<body\b[^>]*>", re.IGNORECASE)

_HTML_FORMATS = {"html", "html4", "html5"}
_NUMERIC_TAGS = {"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"}


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    raw_norm = raw.strip().lower()
    if raw_norm in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw_norm in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True, slots=True)
class HostSettings:
    output_format: str
    project_file: str
    validate_config: bool


def load_host_settings_from_env() -> HostSettings:
    return HostSettings(
        output_format=str(_env("REPRODUCIBLE_OUTPUT_FORMAT", default="html")),
        project_file=str(_env("REPRODUCIBLE_PROJECT_FILE", default="_quarto.yml")),
        validate_config=_env_bool("REPRODUCIBLE_VALIDATE_CONFIG", default=True),
    )


def is_html_format(output_format: str | None) -> bool:
    # "html+smart" / "html-smart" carry pandoc extension toggles.
    if not output_format:
        return False
    base = re.split(r"[+-]", output_format.strip().lower(), maxsplit=1)[0]
    return base in _HTML_FORMATS


class _TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars as their literal text.

    ``2024.10`` stays ``"2024.10"`` instead of becoming the float ``2024.1``.
    Booleans, nulls and dates still resolve.
    """


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _safe_load_mapping(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.load(text, Loader=_TextScalarLoader)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {source}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")
    return data


def split_front_matter(text: str, *, source: str = "<front matter>") -> tuple[dict[str, Any], str]:
    """Return ``(front_matter, body)``; no front matter gives ``({}, text)``."""

    m = FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text
    return _safe_load_mapping(m.group("fm"), source), text[m.end() :]


def load_document_metadata(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    meta, _body = split_front_matter(p.read_text(encoding="utf-8"), source=str(p))
    return meta


def find_project_file(start_dir: str | Path, name: str) -> Path | None:
    candidate = Path(name)
    if candidate.is_absolute():
        return candidate if candidate.is_file() else None

    here = Path(start_dir).resolve()
    for directory in (here, *here.parents):
        path = directory / candidate
        if path.is_file():
            return path
    return None


def load_project_block(path: str | Path) -> Any:
    """Read the ``reproducible-config`` block from a YAML or JSON project file.

    A missing file or a file without the block gives ``{}``.
    """

    p = Path(path)
    if not p.exists():
        return {}

    if p.suffix.lower() == ".json":
        data = read_json(p)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {p}")
    else:
        data = _safe_load_mapping(p.read_text(encoding="utf-8"), str(p))

    block = data.get(PROJECT_CONFIG_KEY)
    return {} if block is None else block


def validate_project_config(project_block: Any) -> list[str]:
    """Check the project block against the bundled schema.

    Violations come back as warning strings; rendering still proceeds with the
    engine's fallbacks.
    """

    if project_block is None or project_block == {}:
        return []

    schema = read_json(SCHEMA_PATH)
    validator = jsonschema.Draft202012Validator(schema)

    errors = sorted(
        validator.iter_errors(project_block),
        key=lambda e: (tuple(str(p) for p in e.absolute_path), e.message),
    )
    messages: list[str] = []
    for error in errors:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        messages.append(f"{PROJECT_CONFIG_KEY}/{location}: {error.message}")
    return messages


def render_document(
    input_path: str | Path,
    *,
    project_file: str | Path | None = None,
    output_format: str | None = None,
    settings: HostSettings | None = None,
) -> ReproducibleResult:
    if settings is None:
        settings = load_host_settings_from_env()

    path = Path(input_path)
    fmt = output_format or settings.output_format
    meta = load_document_metadata(path)

    if project_file is not None:
        project_path: Path | None = Path(project_file)
    else:
        project_path = find_project_file(path.parent, settings.project_file)

    # An empty project block defers to a reproducible-config block in the document.
    project_block = load_project_block(project_path) if project_path is not None else None
    if not project_block:
        project_block = None

    result = render_reproducible(
        meta,
        current_file_path=path.as_posix(),
        output_format_is_html=is_html_format(fmt),
        project_config=project_block,
    )

    if not result.rendered:
        logger.debug("Reproducible notice skipped for %s (format=%s)", path, fmt)
        return result

    if settings.validate_config:
        effective_block = (
            project_block if project_block is not None else lookup(meta, PROJECT_CONFIG_KEY)
        )
        schema_warnings = validate_project_config(effective_block)
        if schema_warnings:
            result = dataclasses.replace(result, warnings=[*result.warnings, *schema_warnings])

    for warning in result.warnings:
        logger.warning("%s: %s", path, warning)

    return result


def inject_before_body(page_html: str, fragment: str) -> str:
    """Insert ``fragment`` right after the opening ``<body>`` tag."""

    m = _BODY_OPEN_RE.search(page_html)
    if not m:
        return fragment + page_html
    return page_html[: m.end()] + "\n" + fragment + page_html[m.end() :]


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not content.endswith("\n"):
        content += "\n"
    path.write_text(content, encoding="utf-8", newline="\n")


def inject_into_file(page_path: str | Path, fragment: str) -> Path:
    p = Path(page_path)
    page = p.read_text(encoding="utf-8").replace("\r\n", "\n").replace("\r", "\n")
    _write_text(p, inject_before_body(page, fragment))
    return p
