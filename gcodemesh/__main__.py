"""
gcodemesh — entry point.

Usage:
    python -m gcodemesh <GCodeFilePath> <PLYFilePath> [options]

Options:
    --width MM          cross-section width (default 0.4)
    --max-miter N       miter widening clamp (default 10.0)
    --tolerance EPS     position/height comparison epsilon (default 0, exact)
    --skip-single       skip single-segment layers instead of aborting
    -v, --verbose       debug logging
"""

from __future__ import annotations

import dataclasses
import logging
import sys

from gcodemesh.config import MESH_RULES, SingleSegmentPolicy
from gcodemesh.mesh import GeometryError

_FLOAT_OPTIONS = {
    "--width": "extrusion_width_mm",
    "--max-miter": "max_miter_scale",
    "--tolerance": "tolerance",
}


def _usage(prog: str) -> str:
    return f"Usage: {prog} <GCodeFilePath> <PLYFilePath> [--width MM] " \
           f"[--max-miter N] [--tolerance EPS] [--skip-single] [-v]"


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    prog = "gcodemesh"

    positional: list[str] = []
    overrides: dict = {}
    verbose = False
    i = 0
    while i < len(args):
        a = args[i]
        if a in _FLOAT_OPTIONS and i + 1 < len(args):
            try:
                overrides[_FLOAT_OPTIONS[a]] = float(args[i + 1])
            except ValueError:
                print(f"Invalid value for {a}: {args[i + 1]}", file=sys.stderr)
                print(_usage(prog), file=sys.stderr)
                return 1
            i += 2
            continue
        if a in _FLOAT_OPTIONS:
            print(f"Missing value for {a}", file=sys.stderr)
            print(_usage(prog), file=sys.stderr)
            return 1
        if a == "--skip-single":
            overrides["single_segment_policy"] = SingleSegmentPolicy.SKIP
        elif a in ("-v", "--verbose"):
            verbose = True
        elif a.startswith("-") and len(a) > 1:
            print(f"Unknown option: {a}", file=sys.stderr)
            print(_usage(prog), file=sys.stderr)
            return 1
        else:
            positional.append(a)
        i += 1

    if len(positional) != 2:
        print(_usage(prog), file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from gcodemesh.pipeline import run_mesh_pipeline

    try:
        rules = dataclasses.replace(MESH_RULES, **overrides)
    except ValueError as exc:
        print(f"Invalid option: {exc}", file=sys.stderr)
        print(_usage(prog), file=sys.stderr)
        return 1

    input_path, output_path = positional
    try:
        result = run_mesh_pipeline(input_path, output_path, rules)
    except GeometryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("Re-run with --skip-single to leave such layers out.", file=sys.stderr)
        return 1

    print(result.layer_count)
    if result.success:
        print(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
