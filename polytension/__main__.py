"""Command-line interface.

    python -m polytension desktop [--url URL] [--seed SEED]
    python -m polytension web [--host HOST] [--port PORT] [--no-browser]
    python -m polytension export out.gif [--seed SEED] [--frames N] [--fps F]
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from polytension import __version__
from polytension.config import Settings
from polytension.core.seed import timestamp_seed
from polytension.logging_config import setup_logging

logger = logging.getLogger("polytension")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="polytension", description="Seeded animated triangle tessellations.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--fps", type=float, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    desktop = sub.add_parser("desktop", help="open the animation in a window")
    desktop.add_argument("--url", default=None, help="start URL; its ?s= parameter seeds the pattern")
    desktop.add_argument("--seed", default=None)

    web = sub.add_parser("web", help="serve the animation to a browser")
    web.add_argument("--host", default=None)
    web.add_argument("--port", type=int, default=None)
    web.add_argument("--no-browser", action="store_true")

    export = sub.add_parser("export", help="render frames to .gif or the last frame to .png")
    export.add_argument("output")
    export.add_argument("--seed", default=None)
    export.add_argument("--frames", type=int, default=120)
    export.add_argument("--width", type=int, default=None)
    export.add_argument("--height", type=int, default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))
    if args.fps is not None:
        settings = replace(settings, fps=args.fps)

    if args.command == "desktop":
        from polytension.app import desktop

        return desktop.main(settings, url=args.url, seed=args.seed)

    if args.command == "web":
        from polytension.app import web

        settings = replace(
            settings,
            host=args.host or settings.host,
            port=args.port or settings.port,
        )
        web.main(settings, open_browser=not args.no_browser)
        return 0

    from polytension.render.export import export_animation

    seed = args.seed or timestamp_seed()
    try:
        path = export_animation(
            args.output,
            seed,
            frames=args.frames,
            fps=settings.fps,
            width=args.width or settings.width,
            height=args.height or settings.height,
            background=settings.background,
        )
    except ValueError as e:
        parser.error(str(e))
    logger.info("Wrote %s (seed %s)", path, seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
