"""
Application entry point — CLI parsing, dependency checks, Qt launch.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .palettes import SCHEMES, get_scheme, list_schemes


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="metafield",
        description="Metaball Field — bouncing sources drawn with marching squares.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                              # 6 sources, teal/pink\n"
            "  %(prog)s --sources 10 --scheme lava   # 10 sources, lava colours\n"
            "  %(prog)s --snapshot out.png --frames 120 --seed 7\n"
            "  %(prog)s --list-schemes               # show available colour schemes\n"
            "  %(prog)s -v                           # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--sources", type=int, default=6, help="Number of sources (1–20, default 6)")
    p.add_argument("--scheme", type=str, default="original", help="Colour scheme")
    p.add_argument("--width", type=int, default=800, help="Viewport width in pixels")
    p.add_argument("--height", type=int, default=600, help="Viewport height in pixels")
    p.add_argument("--fps", type=int, default=60, help="Frame rate (10–120, default 60)")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible runs")
    p.add_argument("--snapshot", type=str, default=None, metavar="PATH",
                   help="Render headless and save the last frame to PATH")
    p.add_argument("--frames", type=int, default=60, help="Frames to simulate for --snapshot")
    p.add_argument("--list-schemes", action="store_true", help="List colour schemes and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def _validate(args: argparse.Namespace) -> list:
    errors = []
    if not (1 <= args.sources <= 20):
        errors.append("--sources must be 1–20.")
    if not (10 <= args.fps <= 120):
        errors.append("--fps must be 10–120.")
    if args.width <= 0 or args.height <= 0:
        errors.append("--width and --height must be positive.")
    if args.frames < 1:
        errors.append("--frames must be at least 1.")
    if args.scheme not in SCHEMES:
        avail = ", ".join(list_schemes())
        errors.append(f"Unknown scheme '{args.scheme}'. Available: {avail}")
    return errors


def render_snapshot(args: argparse.Namespace) -> int:
    """Run the animator offscreen for ``args.frames`` frames and save a PNG."""
    from .animator import FieldAnimator
    from .qt_surface import QImageSurface

    logger = logging.getLogger("metafield")
    scheme = get_scheme(args.scheme)
    surface = QImageSurface(args.width, args.height)
    animator = FieldAnimator(
        surface, args.width, args.height,
        source_count=args.sources, scheme=scheme, seed=args.seed,
    )
    for _ in range(args.frames):
        animator.advance_and_draw()
    logger.info("Rendered %d frames", animator.frame)
    return 0 if surface.save(args.snapshot, background=scheme.background) else 1


def main(argv=None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("metafield")

    if args.list_schemes:
        print("Available colour schemes:")
        for key in list_schemes():
            s = SCHEMES[key]
            print(f"  {key:10s}  {s.name:14s}  inner={s.inner_hex}  outer={s.outer_hex}")
        sys.exit(0)

    errors = _validate(args)
    if errors:
        for e in errors:
            print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    if args.snapshot:
        sys.exit(render_snapshot(args))

    logger.info("Starting Metaball Field v%s", __version__)
    logger.info("Sources: %d, Scheme: %s, FPS: %d", args.sources, args.scheme, args.fps)

    from PyQt5.QtWidgets import QApplication
    from .main_window import MainWindow

    app = QApplication(sys.argv if argv is None else ["metafield", *argv])
    app.setStyle("Fusion")
    app.setApplicationName("Metaball Field")
    app.setApplicationVersion(__version__)

    app.setStyleSheet("""
        QMainWindow, QWidget {
            background: #16161c;
            color: #c0c4d0;
        }
        QGroupBox {
            font-weight: bold;
            font-size: 12px;
            color: #8fd6d8;
            border: 1px solid #2c2f3a;
            border-radius: 6px;
            margin-top: 8px;
            padding-top: 14px;
        }
        QGroupBox::title {
            subcontrol-origin: margin;
            subcontrol-position: top left;
            padding: 2px 8px;
        }
        QPushButton {
            background: #22242e;
            border: 1px solid #3a3e4c;
            border-radius: 5px;
            padding: 5px 12px;
            color: #c0c4d0;
            font-size: 12px;
        }
        QPushButton:hover {
            background: #2c2f3a;
        }
        QPushButton:checked {
            background: #3a3e4c;
            color: #ffffff;
        }
        QComboBox {
            background: #22242e;
            border: 1px solid #3a3e4c;
            border-radius: 4px;
            padding: 4px 8px;
        }
        QSlider::groove:horizontal {
            height: 4px;
            background: #2c2f3a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            background: #25ced1;
            width: 14px;
            height: 14px;
            margin: -5px 0;
            border-radius: 7px;
        }
        QLabel {
            font-size: 12px;
        }
    """)

    scheme = get_scheme(args.scheme)
    window = MainWindow(scheme, source_count=args.sources, fps=args.fps, seed=args.seed)
    window.resize(args.width + 300, args.height + 40)
    window.show()

    sys.exit(app.exec_())
