"""tilegen CLI entry point.

Provides subcommands for serving layouts over HTTP and for generating a
single layout to stdout or a file. Accepts configuration via flags and
environment variables, with optional .env loading.

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
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

FORMATS = ("ascii", "json", "tiled")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    tilegen layout server

    Serve procedurally generated dungeon layouts as JSON, or generate a single
    layout from the command line. Configuration can be provided via CLI flags
    or environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                   Bind address for the web server (default: 0.0.0.0)
          PORT                   Port for the web server (default: 5000)
          LAYOUT_DEFAULT_WIDTH   Width used when a request omits it (default: 40)
          LAYOUT_DEFAULT_HEIGHT  Height used when a request omits it (default: 30)
          TILEGEN_LOG_LEVEL      debug | info | warn | error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print an ASCII preview of a 60x40 layout
          python run.py generate --width 60 --height 40 --seed 7

          # Write a Tiled map for the renderer
          python run.py generate --seed dungeon-1 --format tiled --output dungeon_room.json
        """
    )

    parser = argparse.ArgumentParser(
        prog="tilegen",
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
        version=f"tilegen layout server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve /api/layout, /api/layout/tiled and /api/tileset",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print or save it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--width", type=int, default=40, help="Grid width (min 5)")
    gen_parser.add_argument("--height", type=int, default=30, help="Grid height (min 6)")
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--format", dest="fmt", choices=FORMATS, default="ascii", help="Output format")
    gen_parser.add_argument("--output", default=None, help="Write to this path instead of stdout")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    from tilegen.layout.config import LayoutSizeError
    from tilegen.layout.export import to_ascii, to_json, to_tiled
    from tilegen.routes.layout_api import _coerce_seed
    from tilegen.layout import LayoutGenerator

    seed = _coerce_seed(args.seed)
    try:
        result = LayoutGenerator(width=args.width, height=args.height, seed=seed).run()
    except LayoutSizeError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.fmt == "ascii":
        text = to_ascii(result.layers.walls) + "\n"
    elif args.fmt == "json":
        text = json.dumps(to_json(result))
    else:
        text = json.dumps(to_tiled(result.layers))
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {args.fmt} layout (seed={result.seed}, {result.width}x{result.height}) to {args.output}")
    else:
        sys.stdout.write(text)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from tilegen.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}tilegen Layout Server{Style.RESET_ALL}" if _COLOR_ENABLED else "tilegen Layout Server"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from tilegen.logging_utils import log

    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
