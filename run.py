"""Undercroft CLI entry point.

Provides subcommands for running the HTTP server, generating a single
dungeon, and running structural diagnostics over a list of seeds. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from dotenv import load_dotenv


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

DEFAULT_DIAGNOSE_SEEDS = [101, 202, 303, 404, 505]


def _add_generation_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=None, help="Grid width, odd (default: env DUNGEON_WIDTH or 501)")
    parser.add_argument("--height", type=int, default=None, help="Grid height, odd (default: env DUNGEON_HEIGHT or 501)")
    parser.add_argument("--room-attempts", dest="room_attempts", type=int, default=None, help="Room placement attempts")
    parser.add_argument("--size-modifier", dest="size_modifier", type=int, default=None, help="Higher = bigger rooms")
    parser.add_argument(
        "--direction-chance", dest="direction_chance", type=int, default=None, help="Maze turn bias, percent 0-100"
    )
    parser.add_argument(
        "--connection-chance", dest="connection_chance", type=int, default=None, help="Extra loop chance, percent 0-100"
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Undercroft dungeon generator

    Serve generated dungeon layouts over HTTP, generate a single layout, or
    check a batch of seeds for structural problems. Configuration can be
    provided via CLI flags or environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                       Bind address for the web server (default: 0.0.0.0)
          PORT                       Port for the web server (default: 5000)
          DUNGEON_WIDTH / _HEIGHT    Grid dimensions, odd
          DUNGEON_ROOM_ATTEMPTS      Room placement attempt budget
          DUNGEON_DIRECTION_CHANCE   Maze turn bias (percent)
          DUNGEON_CONNECTION_CHANCE  Extra loop chance (percent)
          DUNGEON_SEED               Default seed

        Examples:
          # Run the server on a custom port
          python run.py server --port 8080

          # Generate one 101x101 dungeon and dump it as JSON
          python run.py generate --seed 42 --width 101 --height 101 --json out.json

          # Check a few seeds for disconnected regions or leftover dead ends
          python run.py diagnose 1 2 3 --width 61 --height 61
        """
    )

    parser = argparse.ArgumentParser(
        prog="Undercroft",
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
        version=f"Undercroft {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/dungeon/*",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print a summary",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env DUNGEON_SEED or random)")
    _add_generation_flags(gen_parser)
    gen_parser.add_argument("--json", dest="json_path", default=None, help="Write the full dungeon as JSON to this path")
    gen_parser.set_defaults(command="generate")

    diag_parser = subparsers.add_parser(
        "diagnose",
        help="Check seeds for structural issues (exit 1 if any)",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    diag_parser.add_argument("seeds", nargs="*", type=int, help="Seeds to check (default: a fixed sample)")
    _add_generation_flags(diag_parser)
    diag_parser.set_defaults(command="diagnose")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]
    return parser.parse_args(argv)


def _config_from_args(args: argparse.Namespace):
    from undercroft.dungeon import DungeonConfig

    return DungeonConfig.from_env(
        width=args.width,
        height=args.height,
        room_attempts=args.room_attempts,
        size_modifier=args.size_modifier,
        direction_chance=args.direction_chance,
        connection_chance=args.connection_chance,
        seed=getattr(args, "seed", None),
    )


def _run_generate(args: argparse.Namespace) -> int:
    from undercroft.dungeon import generate_dungeon

    dungeon = generate_dungeon(_config_from_args(args))
    m = dungeon.metrics
    print(f"seed={dungeon.seed} size={dungeon.width}x{dungeon.height} rooms={len(dungeon.rooms)}")
    if m:
        print(
            f"maze_regions={m['maze_regions']} connectors={m['connectors_spanning']}+{m['connectors_extra']} "
            f"dead_ends_filled={m['dead_ends_filled']} passable={m['passable_cells']} runtime_ms={m['runtime_ms']}"
        )
    if args.json_path:
        with open(args.json_path, "w", encoding="utf-8") as f:
            json.dump(dungeon.to_dict(), f, separators=(",", ":"))
        print(f"wrote {args.json_path}")
    return 0


def _run_diagnose(args: argparse.Namespace) -> int:
    from undercroft.dungeon.debug_checks import diagnose_seeds

    report = diagnose_seeds(args.seeds or DEFAULT_DIAGNOSE_SEEDS, _config_from_args(args))
    print(json.dumps(report, indent=2))
    return 0 if report["ok"] else 1


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _run_generate(args)
    if mode == "diagnose":
        return _run_diagnose(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from undercroft import server

    print(f"Undercroft {__version__} :: http://{host}:{port}")
    server.start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
