"""Command-line entry point: run every filter over an image and show the results."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from image_filters.config import DEFAULT_CONFIG_PATH, get_section, load_config
from image_filters.core import ImageProcessor, PixelBuffer, filters, utils
from image_filters.core.logger import setup_logging

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        ivalue = int(value)
    except ValueError as exc:  # pragma: no cover - argparse failure path
        raise argparse.ArgumentTypeError(f"Expected integer, received '{value}'") from exc
    if ivalue < 0:
        raise argparse.ArgumentTypeError("Value must be zero or a positive integer.")
    return ivalue


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-filters",
        description=(
            "Apply greyscale, invert, single-channel and posterize filters to an "
            "image, and optionally watermark it with a second image."
        ),
    )
    parser.add_argument("image", help="Path to the image to filter.")
    parser.add_argument(
        "watermark_image",
        nargs="?",
        help="Optional second image blended over the first.",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration YAML (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--log-level", help="Override logging level (e.g. INFO, DEBUG).")
    parser.add_argument("--log-file", help="Override log file path.")
    parser.add_argument("--output-dir", help="Save every result into this directory.")
    parser.add_argument(
        "--no-display",
        action="store_true",
        help="Do not open a window for each result.",
    )
    parser.add_argument(
        "--wait-ms",
        type=_non_negative_int,
        help="Milliseconds each window stays open (0 waits for a key).",
    )
    parser.add_argument(
        "--independent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Apply each filter to the loaded image instead of the previous result.",
    )
    parser.add_argument(
        "--bounds",
        choices=filters.BOUNDS_MODES,
        help="How the watermark blend region is chosen.",
    )
    return parser


def _collect_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level.upper()
    if args.log_file:
        file_overrides = overrides.setdefault("logging", {}).setdefault("file", {})
        file_overrides["enabled"] = True
        file_overrides["filename"] = args.log_file
    if args.output_dir:
        overrides.setdefault("output", {})["directory"] = args.output_dir
    if args.no_display:
        overrides.setdefault("display", {})["enabled"] = False
    if args.wait_ms is not None:
        overrides.setdefault("display", {})["wait_ms"] = args.wait_ms
    if args.independent is not None:
        overrides.setdefault("pipeline", {})["independent"] = args.independent
    if args.bounds:
        overrides.setdefault("watermark", {})["bounds"] = args.bounds
    return overrides


def _present(
    result: PixelBuffer, image_name: str, label: str, config: Dict[str, Any]
) -> Optional[Path]:
    """Show and/or save one filter result according to config."""
    display = get_section(config, "display")
    output = get_section(config, "output")

    saved: Optional[Path] = None
    directory = output.get("directory")
    if directory:
        target = utils.output_path_for(
            directory, image_name, label, str(output.get("extension", ".png"))
        )
        saved = result.save(target)
        logger.info("Saved %s result to %s", label, saved)

    if display.get("enabled", True):
        title = f"{display.get('window_prefix', '')}{Path(image_name).name} - {label}"
        result.show(title, wait_ms=int(display.get("wait_ms") or 0))
    return saved


def run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    independent = bool(get_section(config, "pipeline").get("independent", False))
    processor = ImageProcessor.from_config(args.image, config)
    logger.info(
        "Filtering %s (%sx%s)", processor.name, processor.buffer.width, processor.buffer.height
    )

    for filter_name in filters.FILTERS:
        if independent:
            processor.reset()
        result = processor.apply(filter_name)
        _present(result, processor.name, filter_name, config)

    if args.watermark_image:
        if independent:
            processor.reset()
        second = ImageProcessor.from_config(args.watermark_image, config)
        result = processor.watermark(second)
        _present(result, processor.name, "watermark", config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    overrides = _collect_overrides(args)
    try:
        config = load_config(args.config, overrides=overrides or None)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not load configuration %s: %s", args.config, exc)
        return 1
    setup_logging(get_section(config, "logging"), force=True)

    try:
        return run(args, config)
    except Exception as exc:
        logger.exception("Filtering failed: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
