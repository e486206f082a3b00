import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from constants import DEFAULT_MAX_DEPTH, ERROR_PREFIX
from recipe_parser import ParseError, parse
from recipe_renderer import render

log = logging.getLogger(__name__)


class TranspileError(ValueError):
    """A recipe that could not be transpiled; the message starts with "parse error: "."""


def transpile(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Turn a recipe description into its rendered sentence form."""
    try:
        recipe = parse(source, max_depth=max_depth)
    except ParseError as err:
        raise TranspileError(f"{ERROR_PREFIX}{err}") from err
    return render(recipe)


def max_depth_from_env() -> int:
    raw = os.getenv("RECIPE_MAX_DEPTH")
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        raise SystemExit(f"RECIPE_MAX_DEPTH must be an integer, got {raw!r}")
    if value < 0:
        raise SystemExit(f"RECIPE_MAX_DEPTH must not be negative, got {value}")
    return value


def configure_logging() -> None:
    level = os.getenv("RECIPE_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise SystemExit(f"Unknown RECIPE_LOG_LEVEL {level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise SystemExit(f"No such recipe file: {path}")
    return path.read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    configure_logging()
    ap = argparse.ArgumentParser(description="Transpile a recipe description into a step-by-step sentence.")
    ap.add_argument("source", nargs="?", default="-", help="Recipe file to read, '-' for stdin")
    ap.add_argument("--out", help="Write the result to this file instead of stdout")
    ap.add_argument("--max-depth", type=int, default=None, help="Maximum nesting of parenthesized recipes")
    args = ap.parse_args(argv)

    max_depth = args.max_depth if args.max_depth is not None else max_depth_from_env()
    if max_depth < 0:
        raise SystemExit(f"--max-depth must not be negative, got {max_depth}")

    text = read_source(args.source)
    try:
        result = transpile(text, max_depth=max_depth)
    except TranspileError as err:
        log.debug("failed to transpile %s", args.source, exc_info=err.__cause__)
        raise SystemExit(str(err))

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(result + "\n")
        log.info("wrote %s", out_path)
    else:
        print(result)


if __name__ == "__main__":
    main()
