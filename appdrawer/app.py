"""Command line bootstrap: index icon themes and list installed applications."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import sys

from PySide6.QtGui import QGuiApplication

from appdrawer.config.settings import AppSettings, parse_theme_directory
from appdrawer.core.catalog import IconCatalog
from appdrawer.core.desktop_entries import DesktopEntries
from appdrawer.core.icon_index import IconIndex
from appdrawer.core.renderer import IconRenderer, ResizePolicy


def _configure_logger(settings: AppSettings, verbose: bool) -> logging.Logger:
    logger = logging.getLogger("appdrawer")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "appdrawer.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if verbose:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)
    logger.propagate = False
    return logger


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw}")
    return value


def _theme_directory(raw: str):
    try:
        return parse_theme_directory(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appdrawer",
        description="List installed applications whose icons resolve.",
    )
    parser.add_argument("--scale-factor", type=_positive_int, default=None)
    parser.add_argument("--base-size", type=_positive_int, default=None)
    parser.add_argument(
        "--data-dir",
        action="append",
        type=Path,
        default=None,
        help="XDG data directory to search for applications (repeatable)",
    )
    parser.add_argument(
        "--icon-dir",
        action="append",
        type=_theme_directory,
        default=None,
        metavar="PATH:FORMAT",
        help="icon theme directory, lowest priority first (repeatable)",
    )
    parser.add_argument(
        "--resize-policy",
        choices=[p.value for p in ResizePolicy],
        default=None,
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def run_app(argv: list[str] | None = None) -> int:
    """Load applications and print one line per entry."""
    args = build_parser().parse_args(argv)

    # Offscreen platform: only QImage rendering is needed.
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])
    app.setApplicationName("AppDrawer")
    app.setOrganizationName("AppDrawer")

    settings = AppSettings()
    logger = _configure_logger(settings, args.verbose)

    icon_paths = args.icon_dir or settings.icon_paths
    policy = ResizePolicy(args.resize_policy) if args.resize_policy else settings.resize_policy
    base_size = args.base_size or settings.base_icon_size
    scale_factor = args.scale_factor or settings.scale_factor

    index = IconIndex.build(icon_paths, max_workers=min(8, len(icon_paths)))
    logger.info("indexed %d icons from %d theme directories", len(index), len(icon_paths))
    catalog = IconCatalog(
        index,
        IconRenderer(resize_policy=policy),
        base_size=base_size,
        scale_factor=scale_factor,
    )
    entries = DesktopEntries(catalog, args.data_dir)
    logger.info("loaded %d applications at %dpx", len(entries), entries.icon_size())

    for entry in entries:
        print(f"{entry.name}\t{entry.exec}\t{entry.icon.name}\t{entry.icon.width}px")
    return 0
