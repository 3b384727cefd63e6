from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from reproducible_onyxia.codec import decode_helm_value
from reproducible_onyxia.engine import ReproducibleResult
from reproducible_onyxia.host import inject_into_file, render_document
from reproducible_onyxia.stable_json import dumps_stable, write_json


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _result_payload(result: ReproducibleResult) -> dict[str, object]:
    return {
        "rendered": result.rendered,
        "url": result.url,
        "html": result.html,
        "warnings": list(result.warnings),
        "engine_version": result.engine_version,
        "inputs_fingerprint": result.inputs_fingerprint,
    }


def explain_url(url: str) -> list[str]:
    """Human-readable ``key = decoded value`` lines for a launcher URL."""

    base, _, query = url.partition("?")
    lines = [f"launcher = {base}"]
    for pair in query.split("&") if query else []:
        key, _, value = pair.partition("=")
        lines.append(f"{key} = {decode_helm_value(value)}")
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m reproducible_onyxia",
        description=(
            "Render the Onyxia launch URL and reproducible-environment notice for a document "
            "with YAML front matter. Exit codes: 0=rendered or skipped, 1=input error."
        ),
    )
    parser.add_argument("input", type=Path, help="Source document (.qmd/.md) with front matter")
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project file holding reproducible-config (default: nearest _quarto.yml)",
    )
    parser.add_argument(
        "--to",
        dest="output_format",
        default=None,
        help="Output format (default: $REPRODUCIBLE_OUTPUT_FORMAT or html)",
    )
    parser.add_argument(
        "--inject-into",
        type=Path,
        default=None,
        help="Rendered HTML page to insert the notice into (rewritten in place)",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as stable JSON")
    parser.add_argument("--json-out", type=Path, default=None, help="Write the result JSON here")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the decoded launcher parameters instead of the HTML fragment",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        result = render_document(
            args.input,
            project_file=args.project,
            output_format=args.output_format,
        )
        if result.html is not None and args.inject_into is not None:
            inject_into_file(args.inject_into, result.html)
    except (OSError, ValueError) as exc:
        print(f"FAIL: {exc}", file=sys.stderr)
        return 1

    # Warnings reach stderr through the host logger.
    if args.json_out is not None:
        write_json(args.json_out, _result_payload(result), make_parents=True)

    if args.json:
        sys.stdout.write(dumps_stable(_result_payload(result)))
        return 0

    if result.url is None or result.html is None:
        print("SKIP: reproducible notice not enabled for this document/format", file=sys.stderr)
        return 0

    if args.explain:
        print("\n".join(explain_url(result.url)))
    else:
        sys.stdout.write(result.html)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
