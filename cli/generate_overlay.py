"""Overlay generation CLI.

Reads a source theme directory (``gtk-3.0/``, ``gtk-4.0/`` and
``gnome-shell/`` stylesheets) plus an optional JSON settings file, renders
the overlay and writes it below an output directory.

Settings files use the preference key names, e.g.::

  {"overlay-source-theme": "ZorinBlue-Dark", "zorin-tint-strength": 40,
   "border-radius": 12, "color-scheme": "prefer-dark"}

Exit codes: 0 success, 1 theme source unreadable, 2 bad arguments.

Example:
  python cli/generate_overlay.py --theme /usr/share/themes/ZorinBlue-Dark --out ./overlay --json
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from overlay import DictSettings, OverlayGenerator, ThemeSourceError, ThemeStylesheets
from overlay.services.logging_service import LoggingService

_logger = logging.getLogger("overlay.cli")


def _read_optional(path: str) -> Optional[str]:
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            return fh.read()
    except OSError as exc:
        raise ThemeSourceError(path, str(exc)) from exc


def load_theme(theme_dir: str) -> ThemeStylesheets:
    """Collect the stylesheets of ``theme_dir``; missing files stay None."""
    if not os.path.isdir(theme_dir):
        raise ThemeSourceError(theme_dir, "not a directory")
    theme_dir = os.path.abspath(theme_dir)
    shell_dir = os.path.join(theme_dir, "gnome-shell")
    return ThemeStylesheets(
        theme_name=os.path.basename(theme_dir),
        theme_path=theme_dir,
        gtk3_light=_read_optional(os.path.join(theme_dir, "gtk-3.0", "gtk.css")),
        gtk3_dark=_read_optional(os.path.join(theme_dir, "gtk-3.0", "gtk-dark.css")),
        gtk4_light=_read_optional(os.path.join(theme_dir, "gtk-4.0", "gtk.css")),
        gtk4_dark=_read_optional(os.path.join(theme_dir, "gtk-4.0", "gtk-dark.css")),
        shell=_read_optional(os.path.join(shell_dir, "gnome-shell.css")),
        has_pad_osd=os.path.isfile(os.path.join(shell_dir, "pad-osd.css")),
    )


def load_settings(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("settings file must contain a JSON object")
    return data


def write_overlay(out_dir: str, files: Dict[str, str]) -> int:
    for rel_path, css in files.items():
        target = os.path.join(out_dir, rel_path)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8") as fh:
            fh.write(css)
    return len(files)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a theme overlay from a source theme")
    p.add_argument("--theme", required=True, help="Source theme directory")
    p.add_argument("--out", required=True, help="Output directory for the overlay files")
    p.add_argument("--settings", help="JSON file with preference values")
    p.add_argument(
        "--apply-accent",
        action="store_true",
        help="Derive border/background/shadow colors from the theme accent",
    )
    p.add_argument("--timestamps", action="store_true", help="Stamp generation time into headers")
    p.add_argument("--json", action="store_true", help="Emit JSON summary instead of text")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        values = load_settings(args.settings)
    except (OSError, ValueError) as exc:
        print(f"Invalid settings file: {exc}", file=sys.stderr)
        return 2
    try:
        sources = load_theme(args.theme)
    except ThemeSourceError as exc:
        _logger.error("%s", exc)
        return 1

    values.setdefault("overlay-source-theme", sources.theme_name)
    if args.debug:
        values["debug-logging"] = True
    settings = DictSettings(values)
    log_service = LoggingService()
    log_service.attach()
    try:
        generator = OverlayGenerator(timestamps=args.timestamps, log_service=log_service)
        output = generator.generate_overlay(sources, settings, apply_accent=args.apply_accent)
        written = write_overlay(args.out, output.files)
    finally:
        log_service.detach()

    if args.json:
        summary = output.summary()
        summary["errors"] = [e.message for e in log_service.recent(level="ERROR")]
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    else:
        print(f"Overlay written to {args.out} ({written} files)")
        for path in sorted(output.files):
            print(f"  {path}")
        accent = output.accent
        if accent and accent.rgb:
            print(f"Accent: rgb{tuple(accent.rgb)} from {accent.source.value}")
        else:
            print("Accent: none (neutral theme)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
