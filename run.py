"""Roomwalk CLI entry point.

Generates a room layout and prints it as an ASCII map or JSON, or runs the
HTTP API. Accepts configuration via flags and ROOMWALK_* environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.2.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Roomwalk layout generator

    Walk a grid of room cells, choosing door configurations as the cursor
    travels, then back-fill every cell the walk never reached. CLI flags take
    precedence over ROOMWALK_* environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          ROOMWALK_MOVE_AMOUNT   Grid step size (default: 1000)
          ROOMWALK_MIN_Y         Right-hand bound (default: 0)
          ROOMWALK_MAX_Y         Left-hand bound (default: 4000)
          ROOMWALK_MAX_X         Last row (default: 3000)
          ROOMWALK_SEED          Seed (default: random)
          ROOMWALK_LOG_LEVEL     debug|info|warn|error (default: info)

        Examples:
          # Print a layout for a fixed seed
          python run.py generate --seed 42

          # Watch it grow, one room every quarter second
          python run.py generate --seed 42 --rate 0.25

          # Emit JSON for another tool
          python run.py generate --seed 42 --json

          # Serve the HTTP API on port 8080
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="roomwalk",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Roomwalk {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (strings are hashed)")
    gen_parser.add_argument("--move", dest="move_amount", type=int, default=None, help="Grid step size")
    gen_parser.add_argument("--min-y", dest="min_y", type=int, default=None, help="Right-hand bound")
    gen_parser.add_argument("--max-y", dest="max_y", type=int, default=None, help="Left-hand bound")
    gen_parser.add_argument("--max-x", dest="max_x", type=int, default=None, help="Last row")
    gen_parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Seconds between steps; redraws the map after each step",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _run_generate(args) -> int:
    from roomwalk import logging_utils
    from roomwalk.layout import ConfigurationError, GenerationAborted, Layout, LayoutConfig
    from roomwalk.layout.render import render_ascii
    from roomwalk.routes.layout_api import _coerce_seed

    if args.json:
        # keep stdout parseable
        logging_utils.set_level("warn")
    try:
        config = LayoutConfig.from_env(
            move_amount=args.move_amount, min_y=args.min_y, max_y=args.max_y, max_x=args.max_x
        )
    except ConfigurationError as exc:
        print(_paint(f"[ERROR] {exc}", Fore.RED), file=sys.stderr)
        return 2
    if args.seed is not None:
        config.seed = _coerce_seed(args.seed)

    on_step = None
    if args.rate and not args.json:
        def on_step(record):
            print(_paint(f"step {record.index}: {record.outcome.value} -> {tuple(record.position_after)[:2]}", Fore.CYAN))

    try:
        layout = Layout(config, time_per_step=args.rate, on_step=on_step)
    except (ConfigurationError, GenerationAborted) as exc:
        print(_paint(f"[ERROR] {exc}", Fore.RED), file=sys.stderr)
        return 2

    if args.json:
        data = layout.to_dict()
        print(json.dumps(data, indent=2))
        return 0
    print(_paint(f"seed={layout.seed} steps={layout.state.steps} rooms={len(layout.placements)}", Fore.YELLOW))
    print(render_ascii(layout))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    def handle_sigint(sig, frame):
        print("\n[INFO] Interrupted")
        sys.exit(130)

    signal.signal(signal.SIGINT, handle_sigint)

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "server":
        from roomwalk.logging_utils import log
        from roomwalk.server import start_server

        host = args.host or os.getenv("HOST", "127.0.0.1")
        port = int(args.port or os.getenv("PORT", "5000"))
        print(_paint(f"Roomwalk {__version__} listening on {host}:{port}", Fore.GREEN))
        log.info(event="listen", host=host, port=port, debug=args.debug)
        start_server(host=host, port=port, debug=args.debug)
        return 0
    return _run_generate(args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
