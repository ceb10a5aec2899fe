"""
Command-line interface for ghep.

Usage:
    ghep doctor
    ghep demo [--shift X Y Z T] [--json] [--log-level NOTICE]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import ghep

from . import messenger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghep",
        description="Generated-event record: build, compactify and inspect "
        "the particle record of a simulated interaction.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {ghep.__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- demo ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build and print a sample quasi-elastic event record",
    )
    demo_parser.add_argument(
        "--energy", type=float, default=1.0,
        help="Neutrino energy in GeV (default: 1.0)",
    )
    demo_parser.add_argument(
        "--cos-theta", type=float, default=0.0,
        help="Muon emission angle cosine in the CM frame (default: 0.0)",
    )
    demo_parser.add_argument(
        "--shift", type=float, nargs=4, metavar=("X", "Y", "Z", "T"), default=None,
        help="Translate the event vertex by this 4-offset",
    )
    demo_parser.add_argument(
        "--log-level", default=None,
        help="Priority of the GHEP message stream (DEBUG, INFO, NOTICE, WARN, ...); "
        "overrides $GHEP_MSGCONF",
    )
    demo_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Output entries and validation report as JSON",
    )

    # --- doctor ---
    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Environment & capability check",
    )
    doctor_parser.add_argument("--json", dest="as_json", action="store_true")

    return parser


def _cmd_demo(args: argparse.Namespace) -> int:
    from .samples import build_qel_record
    from .validation import validate

    if args.log_level is not None:
        messenger.set_priority_level(messenger.RECORD_STREAM, args.log_level)

    try:
        record = build_qel_record(args.energy, args.cos_theta)
        if args.shift is not None:
            record.shift_vertex(args.shift)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = validate(record)
    if args.as_json:
        payload = {
            "entries": [p.to_dict() for p in record],
            "unphysical": record.unphysical,
            "validation": report.to_dict(),
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        record.print()
        print(str(report))
    return 0 if report.is_valid else 2


def _cmd_doctor(args: argparse.Namespace) -> int:
    from .doctor import doctor_report

    rep = doctor_report()
    if args.as_json:
        print(json.dumps(rep, indent=2, sort_keys=True))
    else:
        print(rep["summary"])
        for item in rep["checks"]:
            status = "OK" if item["ok"] else "FAIL"
            print(f"- {status}: {item['name']}: {item['detail']}")
    return 0 if all(c["ok"] for c in rep["checks"]) else 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr, format="%(name)s [%(levelname)s] %(message)s"
    )
    messenger.configure()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "demo": _cmd_demo,
        "doctor": _cmd_doctor,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
