from __future__ import annotations

import argparse
import logging
from pathlib import Path

from iesrescale import __version__
from iesrescale.errors import IesRescaleError
from iesrescale.export.ies_writer import write_profile
from iesrescale.parser.ies_parser import parse_ies_file
from iesrescale.pipeline import rescale_file


_DEMO_IES_TEXT = """IESNA:LM-63-2002
[TEST] iesrescale demo
[MANUFAC] Demo Lighting
[LUMCAT] DEMO-001
TILT=NONE
1 16000 1 5 1 1 2 0.45 0.45 0.1
1 1 100
0 22.5 45 67.5 90
0
1000 950 700 300 50
"""


def _check_input(path: Path) -> bool:
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        print("        Provide a valid path to a .ies file.")
        return False
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return False
    return True


def _cmd_demo(args: argparse.Namespace) -> int:
    outpath = Path(args.out).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_text(_DEMO_IES_TEXT, encoding="ascii")
    print(f"Saved demo IES to: {outpath}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    ies_path = Path(args.file).expanduser().resolve()
    if not _check_input(ies_path):
        return 2
    try:
        profile = parse_ies_file(ies_path)
    except IesRescaleError as e:
        print(f"[ERROR] {e}")
        return 3

    photo = profile.photo
    all_cd = [c for row in photo.candelas for c in row]
    print("IES profile")
    print(f"  File: {ies_path}")
    print(f"  Format: {profile.file.format.value}")
    print(f"  Labels: {len(profile.labels)}")
    print(f"  TILT: {profile.lamp.tilt_file_name}")
    if profile.has_tilt:
        print(f"  TILT pairs: {profile.lamp.tilt.num_pairs}")
    print(f"  Goniometer: {photo.goniometer_type.name}")
    print(f"  Angles (V x H): {photo.num_vert_angles} x {photo.num_horz_angles}")
    print(f"  Vertical range: {min(photo.vert_angles):g}° .. {max(photo.vert_angles):g}°")
    print(f"  Candela range: {min(all_cd):g} .. {max(all_cd):g}")
    return 0


def _cmd_rescale(args: argparse.Namespace) -> int:
    src = Path(args.src).expanduser().resolve()
    if not _check_input(src):
        return 2
    try:
        run = rescale_file(src, args.dst, args.cone, preserve_intensity=bool(args.preserve_intensity))
    except IesRescaleError as e:
        print(f"[ERROR] {e}")
        return 3

    before = max((c for row in run.source.photo.candelas for c in row), default=0.0)
    after = max((c for row in run.result.photo.candelas for c in row), default=0.0)
    print("IES rescale")
    print(f"  Source: {src}")
    print(f"  Cone angle: {args.cone:g}°")
    print(f"  Mode: {'intensity-preserving' if args.preserve_intensity else 'shape-preserving'}")
    print(f"  Peak candela: {before:g} -> {after:g}")
    print(f"  Saved: {run.output_path} ({run.bytes_written} bytes)")
    return 0


def _cmd_roundtrip(args: argparse.Namespace) -> int:
    src = Path(args.src).expanduser().resolve()
    if not _check_input(src):
        return 2
    try:
        profile = parse_ies_file(src)
        out = write_profile(profile.with_name(str(args.dst)), args.dst)
    except IesRescaleError as e:
        print(f"[ERROR] {e}")
        return 3
    print(f"Saved canonical IES to: {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="iesrescale")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a small demo .ies file to disk.")
    demo.add_argument("--out", default="data/ies_samples/demo.ies", help="Output .ies path")
    demo.set_defaults(func=_cmd_demo)

    info = sub.add_parser("info", help="Parse an IES file and print a summary.")
    info.add_argument("file", help="Path to .ies file")
    info.set_defaults(func=_cmd_info)

    r = sub.add_parser("rescale", help="Rescale an IES profile onto a new cone angle.")
    r.add_argument("src", help="Input .ies file")
    r.add_argument("dst", help="Output .ies file")
    r.add_argument("--cone", type=float, required=True, help="Target cone angle in degrees, 0..180")
    r.add_argument(
        "--preserve-intensity",
        action="store_true",
        help="Keep candela magnitudes and only swing angles (teardrop-shaped result)",
    )
    r.set_defaults(func=_cmd_rescale)

    rt = sub.add_parser("roundtrip", help="Parse an IES file and write it back in canonical form.")
    rt.add_argument("src", help="Input .ies file")
    rt.add_argument("dst", help="Output .ies file")
    rt.set_defaults(func=_cmd_roundtrip)

    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
