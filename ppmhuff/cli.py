"""Command line: ppmhuff INPUT OUTPUT (--format | --compress | --decompress)."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .compressor import compress
from .decompressor import decompress
from .formatter import format_file

_OPTIONS_WITH_VALUE = ("--save-model", "--load-model")


def _error(message: str) -> int:
    print(f"\033[0;31mError:\033[0m {message}")
    return 1


def _run_compress(input_path: str, output_path: str, options: Sequence[str]) -> int:
    values: dict[str, str] = {}
    remaining = iter(options)
    for option in remaining:
        if option in _OPTIONS_WITH_VALUE:
            value = next(remaining, None)
            if value is None:
                return _error(f"{option} needs a path.")
            values[option] = value

    load_path = values.get("--load-model")
    save_path = values.get("--save-model")
    if load_path is not None:
        print(f"Loading model from {load_path}...")
    stats = compress(input_path, output_path, save_path, load_path)
    print(f"Size of file: {stats.size}")
    if save_path is not None:
        print(f"Saving model to {save_path}...")
    print(f"Number of bits: {stats.bits}")
    print(f"Number of bytes: {stats.byte_count}")
    print(f"Average length: {stats.average_length:.3f}")
    print(f"Entropy: {stats.entropy:.3f}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        return _error("Insufficient parameters.")

    input_path, output_path, mode = args[:3]
    try:
        if mode == "--format":
            print("Formatting...")
            format_file(input_path, output_path)
        elif mode == "--compress":
            return _run_compress(input_path, output_path, args[3:])
        elif mode == "--decompress":
            print("Decompress...")
            print(f"input: {input_path}, output: {output_path}")
            size = decompress(input_path, output_path)
            print(f"Size of file: {size}")
    except (OSError, ValueError) as exc:
        return _error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())