"""Command line tools for headless runs and planner benchmarks."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from snake_astar.config import VARIANT_NAMES

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-astar",
        description="Snake A* headless simulation and benchmarking tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run a game without a display.")
    sim_p.add_argument(
        "--variant", choices=VARIANT_NAMES, default="ai",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help=(
            "Path to a JSON variant config. Overrides --variant and cannot "
            "be combined with --seed, --rows or --cols."
        ),
    )
    sim_p.add_argument("--ticks", type=int, default=500)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--rows", type=int, default=None)
    sim_p.add_argument("--cols", type=int, default=None)

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure A* planner throughput.",
    )
    bench_p.add_argument("--rows", type=int, default=20)
    bench_p.add_argument("--cols", type=int, default=20)
    bench_p.add_argument("--queries", type=int, default=1_000)
    bench_p.add_argument("--obstacle-density", type=float, default=0.2)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- show-config ---
    show_p = sub.add_parser(
        "show-config", help="Print a variant preset as JSON.",
    )
    show_p.add_argument("--variant", choices=VARIANT_NAMES, default="solo")
    show_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config to this file instead of stdout.",
    )

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_astar.benchmark import simulate
    from snake_astar.config import VariantConfig
    from snake_astar.session import GameSession

    session = None
    if args.config:
        overridden = [
            flag for flag, value in (
                ("--seed", args.seed), ("--rows", args.rows), ("--cols", args.cols),
            )
            if value is not None
        ]
        if overridden:
            logger.error(
                "%s cannot be combined with --config.", ", ".join(overridden),
            )
            return 2
        try:
            session = GameSession(VariantConfig.load(args.config))
        except (OSError, ValueError, TypeError, KeyError) as exc:
            logger.error("Could not load config %s: %s", args.config, exc)
            return 2
        logger.info("Loaded variant config from %s", args.config)

    try:
        result = simulate(
            args.variant,
            ticks=args.ticks,
            seed=args.seed,
            rows=args.rows,
            cols=args.cols,
            session=session,
        )
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_astar.benchmark import benchmark_planner

    try:
        result = benchmark_planner(
            rows=args.rows,
            cols=args.cols,
            num_queries=args.queries,
            obstacle_density=args.obstacle_density,
            seed=args.seed,
        )
    except ValueError as exc:
        logger.error("Invalid benchmark arguments: %s", exc)
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_show_config(args: argparse.Namespace) -> int:
    from snake_astar.config import get_variant

    config = get_variant(args.variant)
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-astar`` CLI."""
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
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "show-config": _run_show_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
