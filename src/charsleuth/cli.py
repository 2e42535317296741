"""Command-line interface for charsleuth."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import charsleuth
from charsleuth._utils import DEFAULT_MAX_BYTES
from charsleuth.detector import EncodingDetector
from charsleuth.errors import CharsleuthError, NoCandidateError
from charsleuth.pipeline import Match


def _describe(match: Match) -> str:
    if match.is_binary:
        return "binary"
    if match.language:
        return f"{match.encoding} ({match.language})"
    return str(match.encoding)


def _report(name: str, matches: list[Match], args: argparse.Namespace) -> None:
    if args.json:
        payload: object = (
            [m.to_dict() for m in matches] if args.all else matches[0].to_dict()
        )
        if len(args.files) > 1:
            payload = {"file": name, "result": payload}
        print(json.dumps(payload, ensure_ascii=False))
        return
    for match in matches:
        if args.minimal:
            print("binary" if match.is_binary else match.encoding)
        else:
            print(f"{name}: {_describe(match)} with confidence {match.confidence}")


def _detect_one(
    detector: EncodingDetector, name: str, data: bytes, args: argparse.Namespace
) -> bool:
    try:
        if args.all:
            matches = detector.detect_all(data)
            if not matches:
                msg = f"no charset candidate for {len(data)} bytes of input"
                raise NoCandidateError(msg)
        else:
            matches = [detector.detect(data)]
    except CharsleuthError as e:
        print(f"charsleuth: {name}: {e}", file=sys.stderr)
        return False
    _report(name, matches, args)
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the ``charsleuth`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: The exit status: 0 on success, 1 if any input failed.
    """
    parser = argparse.ArgumentParser(
        description="Detect whether files are binary and which charset text files use."
    )
    parser.add_argument("files", nargs="*", help="Files to examine (default: stdin)")
    parser.add_argument(
        "-a", "--all", action="store_true", help="Show every candidate, best first"
    )
    parser.add_argument(
        "--strip-tags", action="store_true", help="Ignore <...> markup when scoring"
    )
    parser.add_argument(
        "--hint", default=None, help="Encoding the data is believed to use"
    )
    parser.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument(
        "--list-encodings",
        action="store_true",
        help="List every encoding that can be reported and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log detection details"
    )
    parser.add_argument(
        "--version", action="version", version=f"charsleuth {charsleuth.__version__}"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if args.list_encodings:
        for name in EncodingDetector.supported_encodings():
            print(name)
        return 0

    try:
        detector = EncodingDetector(
            strip_tags=args.strip_tags, declared_encoding=args.hint
        )
    except CharsleuthError as e:
        print(f"charsleuth: {e}", file=sys.stderr)
        return 1

    ok = True
    if args.files:
        for filepath in args.files:
            try:
                with Path(filepath).open("rb") as f:
                    data = f.read(DEFAULT_MAX_BYTES)
            except OSError as e:
                print(f"charsleuth: {filepath}: {e}", file=sys.stderr)
                ok = False
                continue
            ok = _detect_one(detector, filepath, data, args) and ok
    else:
        data = sys.stdin.buffer.read(DEFAULT_MAX_BYTES)
        ok = _detect_one(detector, "stdin", data, args)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
