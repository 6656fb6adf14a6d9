"""Command-line runner for headless simulations."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Headless grid snake simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Run the simulation without a display.")
    run_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags below override it).",
    )
    run_p.add_argument("--steps", type=_non_negative_int, default=100)
    run_p.add_argument(
        "--frame-ms", type=float, default=150.0,
        help="Simulated elapsed time per step, in milliseconds.",
    )
    run_p.add_argument("--seed", type=int, default=None)
    run_p.add_argument("--arena-width", type=int, default=None)
    run_p.add_argument("--arena-height", type=int, default=None)
    run_p.add_argument(
        "--moves", type=str, default="",
        help=(
            "Comma-separated keys pressed on successive steps "
            "(e.g. 'left,,up'); empty entries press nothing."
        ),
    )
    run_p.add_argument(
        "--show", action="store_true",
        help="Print the final arena as text.",
    )

    # --- init-config ---
    init_p = sub.add_parser(
        "init-config", help="Write the default config to a JSON file.",
    )
    init_p.add_argument("path", help="Destination path.")

    return parser


def _load_config(args: argparse.Namespace):
    from grid_snake.config import GameConfig

    if args.config:
        config = GameConfig.load(args.config)
        logger.info("Loaded config from %s", args.config)
    else:
        config = GameConfig()

    overrides: dict = {}
    flag_map = {
        "seed": "seed",
        "arena_width": "arena_width",
        "arena_height": "arena_height",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    arena_overridden = "arena_width" in overrides or "arena_height" in overrides
    if arena_overridden and not args.config:
        # Keep the default snake inside a resized arena.
        width = overrides.get("arena_width", config.arena_width)
        height = overrides.get("arena_height", config.arena_height)
        overrides["head_start"] = [width // 2, height // 2]
        overrides["segment_start"] = [width // 2, height // 2 - 1]

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig.from_dict(d)
    return config


def _run_simulation(args: argparse.Namespace) -> int:
    from grid_snake.engine import GameEngine
    from grid_snake.render import ascii_frame

    config = _load_config(args)
    engine = GameEngine(config)
    script = [key.strip() for key in args.moves.split(",")] if args.moves else []
    elapsed = args.frame_ms / 1000.0

    for i in range(args.steps):
        pressed = [script[i]] if i < len(script) and script[i] else []
        engine.step(pressed, elapsed)

    if args.show:
        print(ascii_frame(engine.world, config))  # noqa: T201
    print(  # noqa: T201
        f"Simulation: {engine.steps} steps, {engine.moves} moves, "
        f"length {engine.length}, food eaten {engine.ctx.food_eaten}, "
        f"resets {engine.resets}"
    )
    return 0


def _run_init_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    GameConfig().save(args.path)
    print(f"Wrote default config to {args.path}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_simulation,
        "init-config": _run_init_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
