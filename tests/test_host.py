from __future__ import annotations

import logging
from pathlib import Path

import pytest

from reproducible_onyxia.host import (
    HostSettings,
    find_project_file,
    inject_before_body,
    inject_into_file,
    is_html_format,
    load_document_metadata,
    load_host_settings_from_env,
    load_project_block,
    render_document,
    split_front_matter,
    validate_project_config,
)
from reproducible_onyxia.stable_json import write_json
from tests.fixtures import project_config

NO_PROJECT = HostSettings(
    output_format="html", project_file="no-such-project-file.yml", validate_config=True
)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")


def _chapter(tier: str = "heavy") -> str:
    return "\n".join(
        [
            "---",
            "title: Land Cover",
            "reproducible:",
            "  enabled: true",
            f"  tier: {tier}",
            "---",
            "",
            "# Body",
            "",
        ]
    )


def test_split_front_matter() -> None:
    meta, body = split_front_matter("---\ntitle: T\nreproducible:\n  enabled: true\n---\nbody\n")
    assert meta == {"title": "T", "reproducible": {"enabled": True}}
    assert body == "body\n"


def test_split_front_matter_accepts_dots_terminator_and_empty_block() -> None:
    meta, _ = split_front_matter("---\ntitle: T\n...\nbody\n")
    assert meta == {"title": "T"}

    meta, body = split_front_matter("---\n---\nbody\n")
    assert meta == {}
    assert body == "body\n"


def test_no_front_matter() -> None:
    text = "# Just a heading\n"
    assert split_front_matter(text) == ({}, text)


def test_front_matter_must_be_a_mapping() -> None:
    with pytest.raises(ValueError, match="mapping"):
        split_front_matter("---\n- a\n- b\n---\n")


def test_front_matter_yaml_errors_are_value_errors() -> None:
    with pytest.raises(ValueError, match="Invalid YAML"):
        split_front_matter("---\ntitle: [unclosed\n---\n")


@pytest.mark.parametrize(
    ("fmt", "expected"),
    [
        ("html", True),
        ("html5", True),
        ("HTML4", True),
        ("html+smart", True),
        ("html-smart", True),
        ("pdf", False),
        ("docx", False),
        ("revealjs", False),
        ("", False),
        (None, False),
    ],
)
def test_is_html_format(fmt: str | None, expected: bool) -> None:
    assert is_html_format(fmt) is expected


def test_host_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPRODUCIBLE_OUTPUT_FORMAT", "pdf")
    monkeypatch.setenv("REPRODUCIBLE_PROJECT_FILE", "book.yml")
    monkeypatch.setenv("REPRODUCIBLE_VALIDATE_CONFIG", "off")

    settings = load_host_settings_from_env()
    assert settings == HostSettings(
        output_format="pdf", project_file="book.yml", validate_config=False
    )


def test_host_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("REPRODUCIBLE_OUTPUT_FORMAT", "REPRODUCIBLE_PROJECT_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REPRODUCIBLE_VALIDATE_CONFIG", "")

    settings = load_host_settings_from_env()
    assert settings == HostSettings(
        output_format="html", project_file="_quarto.yml", validate_config=True
    )


def test_find_project_file_walks_up(tmp_path: Path) -> None:
    project = tmp_path / "_quarto.yml"
    _write(project, "project:\n  type: book\n")
    nested = tmp_path / "chapters" / "part1"
    nested.mkdir(parents=True)

    assert find_project_file(nested, "_quarto.yml") == project.resolve()
    assert find_project_file(nested, "missing-project.yml") is None


def test_load_project_block_yaml_and_json(tmp_path: Path) -> None:
    yaml_path = tmp_path / "_quarto.yml"
    _write(yaml_path, "reproducible-config:\n  onyxia:\n    catalog: handbook\n")
    assert load_project_block(yaml_path) == {"onyxia": {"catalog": "handbook"}}

    json_path = tmp_path / "project.json"
    write_json(json_path, {"reproducible-config": project_config()})
    assert load_project_block(json_path) == project_config()


def test_load_project_block_missing_file_or_key(tmp_path: Path) -> None:
    assert load_project_block(tmp_path / "absent.yml") == {}

    path = tmp_path / "_quarto.yml"
    _write(path, "project:\n  type: book\n")
    assert load_project_block(path) == {}


def test_validate_project_config_accepts_full_config() -> None:
    assert validate_project_config(project_config()) == []
    assert validate_project_config({}) == []
    assert validate_project_config(None) == []


def test_validate_project_config_reports_paths() -> None:
    messages = validate_project_config(
        {"onyxia": {"catalog": "handbook", "colour": "red"}, "defaults": {"tier": "xl"}}
    )
    assert len(messages) == 2
    assert messages[0].startswith("reproducible-config/defaults/tier: ")
    assert messages[1].startswith("reproducible-config/onyxia: ")
    assert "colour" in messages[1]


def test_render_document_uses_project_file(tmp_path: Path) -> None:
    _write(tmp_path / "_quarto.yml", "reproducible-config:\n  onyxia:\n    catalog: handbook\n")
    chapter = tmp_path / "chapters" / "land-cover.qmd"
    _write(chapter, _chapter())

    settings = HostSettings(output_format="html", project_file="_quarto.yml", validate_config=True)
    result = render_document(chapter, settings=settings)

    assert result.rendered
    assert "/launcher/handbook/eostat?" in result.url
    assert "chapter.name=«land-cover»" in result.url
    assert "tier=«heavy»" in result.url


def test_render_document_falls_back_to_document_block(tmp_path: Path) -> None:
    chapter = tmp_path / "solo.qmd"
    _write(
        chapter,
        "---\nreproducible:\n  enabled: true\nreproducible-config:\n"
        "  onyxia:\n    chart: solo-chart\n---\n",
    )
    result = render_document(chapter, settings=NO_PROJECT)
    assert "/launcher/capacity/solo-chart?" in result.url


def test_render_document_skips_non_html(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    chapter = tmp_path / "c.qmd"
    _write(chapter, _chapter(tier="super-heavy"))

    with caplog.at_level(logging.WARNING):
        result = render_document(chapter, output_format="pdf", settings=NO_PROJECT)

    assert not result.rendered
    assert result.warnings == []
    assert caplog.records == []


def test_render_document_logs_warnings(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    chapter = tmp_path / "c.qmd"
    _write(chapter, _chapter(tier="super-heavy"))
    project = tmp_path / "project.yml"
    _write(project, "reproducible-config:\n  ui:\n    colour: red\n")

    with caplog.at_level(logging.WARNING, logger="reproducible_onyxia.host"):
        result = render_document(chapter, project_file=project, settings=NO_PROJECT)

    assert result.warnings[0] == "Invalid tier: super-heavy, using 'medium'"
    assert result.warnings[1].startswith("reproducible-config/ui: ")
    assert len(caplog.records) == 2
    assert all(r.levelno == logging.WARNING for r in caplog.records)


def test_render_document_without_schema_validation(tmp_path: Path) -> None:
    chapter = tmp_path / "c.qmd"
    _write(chapter, _chapter())
    project = tmp_path / "project.yml"
    _write(project, "reproducible-config:\n  ui:\n    colour: red\n")

    settings = HostSettings(output_format="html", project_file="x.yml", validate_config=False)
    result = render_document(chapter, project_file=project, settings=settings)
    assert result.warnings == []


def test_inject_before_body() -> None:
    page = '<html><head></head><body class="book">\n<p>text</p></body></html>'
    out = inject_before_body(page, "<div>notice</div>\n")
    assert out == (
        '<html><head></head><body class="book">\n<div>notice</div>\n\n<p>text</p></body></html>'
    )


def test_inject_without_body_prepends() -> None:
    assert inject_before_body("<p>x</p>", "<a>y</a>") == "<a>y</a><p>x</p>"


def test_inject_into_file_normalizes_newlines(tmp_path: Path) -> None:
    page = tmp_path / "site" / "c.html"
    page.parent.mkdir(parents=True)
    page.write_bytes(b"<html>\r\n<body>\r\n<p>x</p>\r\n</body>\r\n</html>")

    inject_into_file(page, "<div>notice</div>")

    data = page.read_bytes()
    assert b"\r" not in data
    assert data.endswith(b"\n")
    assert data.index(b"<div>notice</div>") > data.index(b"<body>")


def test_load_document_metadata(tmp_path: Path) -> None:
    chapter = tmp_path / "c.qmd"
    _write(chapter, _chapter())
    assert load_document_metadata(chapter)["reproducible"] == {"enabled": True, "tier": "heavy"}


def test_numeric_looking_scalars_keep_their_text() -> None:
    meta, _ = split_front_matter(
        "---\nreproducible:\n  enabled: yes\n  data-snapshot: 2024.10\n  storage-size: 50\n---\n"
    )
    assert meta["reproducible"] == {
        "enabled": True,
        "data-snapshot": "2024.10",
        "storage-size": "50",
    }


def test_version_like_snapshot_reaches_url_verbatim(tmp_path: Path) -> None:
    chapter = tmp_path / "c.qmd"
    _write(chapter, "---\nreproducible:\n  enabled: true\n  data-snapshot: 2024.10\n---\n")

    result = render_document(chapter, settings=NO_PROJECT)

    assert "chapter.version=«2024-10»" in result.url


def test_project_file_numbers_keep_their_text(tmp_path: Path) -> None:
    path = tmp_path / "_quarto.yml"
    _write(path, "reproducible-config:\n  defaults:\n    data-snapshot: 1.10\n")
    assert load_project_block(path) == {"defaults": {"data-snapshot": "1.10"}}
