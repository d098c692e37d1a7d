"""
jupyter2llm - Convert Jupyter notebooks to LLM-optimized text

Features:
- Markdown, code and raw cells flattened into fenced sections
- Optional cell outputs (stream, results, errors)
- Optional notebook metadata header (kernel, language, format)
- Output to stdout, a file, or the clipboard
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from document.errors import ConversionError
from services.clipboard import copy_to_clipboard
from services.converter import NotebookConverter
from services.converter_config import load_config

# ============================================================================
# Constants
# ============================================================================

VERSION = "0.1.0"
NOTEBOOK_SUFFIX = ".ipynb"

# ============================================================================
# Argument parsing
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jupyter2llm",
        description="Convert Jupyter notebooks to LLM-optimized text",
    )
    parser.add_argument("input", help="Path to the Jupyter notebook file (.ipynb)")
    parser.add_argument("-o", "--output", metavar="FILE",
                        help="Output file path (default: stdout)")
    parser.add_argument("-O", "--include-outputs", action="store_true",
                        help="Include cell outputs in the conversion")
    parser.add_argument("-m", "--include-metadata", action="store_true",
                        help="Include notebook metadata in the conversion")
    parser.add_argument("-l", "--llm-ready", action="store_true",
                        help="Create LLM-ready output (equivalent to --include-outputs --include-metadata)")
    parser.add_argument("-c", "--copy-clipboard", action="store_true",
                        help="Copy output to clipboard")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress informational messages")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug information to stderr")
    parser.add_argument("--config", metavar="FILE", type=Path,
                        help="JSON file with default include_outputs/include_metadata switches")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def _info(message: str, quiet: bool):
    if not quiet:
        print(message, file=sys.stderr)


# ============================================================================
# Entry point
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file '{input_path}' does not exist", file=sys.stderr)
        return 1
    if input_path.suffix != NOTEBOOK_SUFFIX:
        print(f"Error: Input file must have {NOTEBOOK_SUFFIX} extension", file=sys.stderr)
        return 1

    if args.config is not None and not args.config.exists():
        print(f"Error: Config file '{args.config}' does not exist", file=sys.stderr)
        return 1

    _info(f"Converting notebook: {input_path}", args.quiet)

    config = load_config(args.config).merged(
        include_outputs=args.include_outputs,
        include_metadata=args.include_metadata,
        llm_ready=args.llm_ready,
    )
    converter = NotebookConverter(config)

    try:
        result = converter.convert_file(input_path)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.copy_clipboard:
        if copy_to_clipboard(result):
            _info("Output copied to clipboard!", args.quiet)
            return 0
        print("Warning: Clipboard copying is not available on this system", file=sys.stderr)

    if args.output:
        try:
            Path(args.output).write_text(result, encoding="utf-8")
        except OSError as e:
            print(f"Error: Failed to write output file '{args.output}': {e}", file=sys.stderr)
            return 1
        if args.llm_ready:
            _info(f"LLM-ready output written to: {args.output}", args.quiet)
        else:
            _info(f"Output written to: {args.output}", args.quiet)
    else:
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
