"""Command-line interface for bayer_dither.

Reads an image from a file or stdin, applies ordered dithering, and writes the
result to a file or, as PNG, to stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from bayer_dither.core.dither import PreserveOrder
from bayer_dither.core.matrices import BayerMatrix

VERSION = "0.1.0"


def _matrix_arg(text: str) -> BayerMatrix:
    try:
        return BayerMatrix.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _preserve_order_arg(text: str) -> PreserveOrder:
    try:
        return PreserveOrder.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bayer-dither",
        description="Apply ordered (Bayer matrix) dithering to an image.",
    )
    parser.add_argument(
        "-i", "--input",
        metavar="INPUT_IMG",
        help="Input image path. Reads from stdin when omitted.",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="OUTPUT_IMG",
        help="Output image path. Writes PNG to stdout when omitted.",
    )
    parser.add_argument(
        "-m", "--matrix-size",
        metavar="MATRIX_SIZE",
        type=_matrix_arg,
        required=True,
        help="Bayer matrix: m2, m4 or m8.",
    )
    parser.add_argument(
        "-c", "--color",
        action="store_true",
        help="Preserve colors using brightness channel dithering.",
    )
    parser.add_argument(
        "-p", "--preserve-order",
        metavar="PRESERVE_ORDER",
        type=_preserve_order_arg,
        help="Preserve order in 'dark' or 'light' pixels (default: dark).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Report result or error as JSON.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(args: argparse.Namespace, message: str, code: str) -> None:
    if args.debug:
        import traceback
        traceback.print_exc(file=sys.stderr)
    if args.json:
        _json_error(message, code)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run(args: argparse.Namespace) -> None:
    """Decode, dither, encode."""
    from bayer_dither.core.processor import Settings, process_image
    from bayer_dither.core.reader import DecodeError, read_input
    from bayer_dither.core.writer import EncodeError, save_image, write_png

    settings = Settings(
        matrix=args.matrix_size,
        color=args.color,
        preserve_order=args.preserve_order,
    )

    try:
        image = read_input(args.input)
    except FileNotFoundError as e:
        _fail(args, str(e), "FILE_NOT_FOUND")
    except DecodeError as e:
        _fail(args, str(e), "DECODE_FAILED")

    dithered = process_image(image, settings)

    output_path = Path(args.output).resolve() if args.output else None
    try:
        if output_path is not None:
            save_image(dithered, output_path)
        else:
            write_png(dithered)
    except (EncodeError, OSError) as e:
        _fail(args, str(e), "ENCODE_FAILED")

    # stdout carries the image itself when no output path was given
    report = sys.stdout if output_path is not None else sys.stderr
    if args.json:
        result = {
            "status": "success",
            "input": str(Path(args.input).resolve()) if args.input else "-",
            "output": str(output_path) if output_path is not None else "-",
            "settings": settings.as_dict(),
            "metadata": {
                "width": dithered.width,
                "height": dithered.height,
                "mode": dithered.mode,
            },
        }
        print(json.dumps(result, indent=2), file=report)
    elif output_path is not None:
        print(f"Saved to {output_path}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _run(args)


if __name__ == "__main__":
    main()
