import argparse
import json
import logging
from pathlib import Path

from plantpack.config import DEFAULT_TOLERANCE, Tolerance
from plantpack.geometry.polygon import validate_outline
from plantpack.logging_config import setup_logging
from plantpack.pipeline.boundary import (
    extract_boundary, extraction_to_dict, parse_boundary_source,
)
from plantpack.pipeline.packer import layout_to_dict, pack_circles
from plantpack.pipeline.packer.models import MAX_ITERATIONS

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="plantpack", description="Boundary JSON → polygon → packed plant circles")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--log-file", default=None, help="Also write logs to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    ex = sub.add_parser("extract", help="Extract the boundary polygon from a source JSON file")
    ex.add_argument("source", help="Path to boundary source JSON")
    ex.add_argument("--out", default=None, help="Output file (default: stdout)")
    ex.add_argument("--tolerance", type=float, default=None, help="Point-equality tolerance")

    pk = sub.add_parser("pack", help="Extract the boundary, then pack plant circles into it")
    pk.add_argument("source", help="Path to boundary source JSON")
    pk.add_argument("--radii", required=True, help="Comma-separated plant radii in priority order, e.g. 7,5,3")
    pk.add_argument("--out", default=None, help="Output file (default: stdout)")
    pk.add_argument("--tolerance", type=float, default=None, help="Point-equality tolerance")
    pk.add_argument("--max-iterations", type=int, default=MAX_ITERATIONS, help="Growth iteration cap")

    return p


def parse_radii(text: str) -> list[float]:
    """Parse ``"7,5,3"`` into ``[7.0, 5.0, 3.0]``."""
    radii = [float(part) for part in text.split(",") if part.strip()]
    if not radii:
        raise ValueError("at least one radius is required")
    return radii


def _tolerance(value: float | None) -> Tolerance:
    if value is None:
        return DEFAULT_TOLERANCE
    return Tolerance(equal_point=value, equal_vector=value)


def _load_source(path: Path):
    with open(path, encoding="utf-8") as f:
        return parse_boundary_source(json.load(f))


def _write(data: dict, out: str | None) -> None:
    text = json.dumps(data, indent=2)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        log.info("Wrote %s", out)
    else:
        print(text)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        tol = _tolerance(args.tolerance)
        source = _load_source(Path(args.source))
        radii = parse_radii(args.radii) if args.cmd == "pack" else []
    except (OSError, ValueError, KeyError, TypeError) as exc:
        log.error("Bad input: %s", exc)
        return 1

    result = extract_boundary(source, tol)
    for warning in result.warnings:
        log.warning(warning)

    if args.cmd == "extract":
        _write(extraction_to_dict(result), args.out)
        return 0 if result.ok else 1

    if not result.ok:
        log.error("Boundary extraction failed (%s): %s",
                  result.error.kind.value, result.error.message)
        return 1

    polygon = result.unwrap()
    for problem in validate_outline(polygon, tolerance=tol):
        log.warning("Boundary: %s", problem)

    layout = pack_circles(polygon, radii, tol, max_iterations=args.max_iterations)
    if not layout.circles:
        log.warning("No plant circle fits inside the boundary")
    _write(layout_to_dict(layout), args.out)
    return 0
