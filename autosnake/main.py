#!/usr/bin/env python3
"""
Autonomous Snake Simulation

A snake that steers itself toward food with A* search, growing on each
capture until it runs into a wall or its own body.

Usage:
    autosnake --config configs/default.yaml [options]

Examples:
    autosnake --config configs/default.yaml --live
    autosnake --config configs/small.yaml --gif --out-dir results/
    autosnake --config configs/small.yaml --no-csv --no-snapshot --quiet
    autosnake --config configs/default.yaml --seed 42 --ticks 5000
"""

import argparse
import sys
from pathlib import Path

import yaml

from .config import HEADLESS_TICK_CAP, load_config
from .logging_config import configure_logging, logger
from .model.engine import SimulationEngine
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer, use_headless_backend
from .export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Autonomous A* Snake Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    autosnake --config configs/default.yaml --live
    autosnake --config configs/small.yaml --gif --out-dir results/
    autosnake --config configs/small.yaml --no-csv --no-snapshot --quiet
    autosnake --config configs/default.yaml --seed 42 --ticks 5000
        """
    )

    # Required arguments
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML configuration file')

    # Optional overrides
    parser.add_argument('--ticks', type=int, default=None,
                        help='Override max simulation ticks')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    parser.add_argument('--live', action='store_true', default=False,
                        help='Open an interactive window (space restarts)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: WARNING)')
    parser.add_argument('--log-dir', type=Path, default=None,
                        help='Also write logs to a timestamped file here')

    return parser.parse_args(argv)


def run_live(engine: SimulationEngine, visualizer: Visualizer) -> int:
    from .live import LiveView

    LiveView(engine, visualizer).show()
    return 0


def run_headless(engine: SimulationEngine, visualizer: Visualizer, config,
                 config_path: Path) -> int:
    max_ticks = config.max_ticks if config.max_ticks is not None else HEADLESS_TICK_CAP

    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    reporter = Reporter(str(config_path), config.seed)

    if not config.quiet:
        print(f"\nRunning simulation...")

    engine.start()
    final_state = engine.snapshot()
    if config.gif_enabled:
        visualizer.buffer_frame(final_state)

    try:
        while not engine.is_finished() and engine.current_tick < max_ticks:
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            # Buffer GIF frame (every other tick to reduce memory)
            if config.gif_enabled:
                if state.tick % 2 == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.tick % 500 == 0:
                print(f"  Tick {state.tick}: length {state.length}, "
                      f"eaten {engine.food_eaten}")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if engine.current_tick >= max_ticks and not engine.is_finished():
        logger.info("Stopped at tick cap %d", max_ticks)

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=20)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            engine.get_summary(),
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_dir)

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.ticks is not None:
        config.max_ticks = args.ticks
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    if not args.live:
        use_headless_backend()

    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Grid: {config.grid.cols}x{config.grid.rows}")
        print(f"  Food placement: {config.food_placement}")
        print(f"  Max ticks: {config.max_ticks if config.max_ticks is not None else 'unlimited'}")

    engine = SimulationEngine(config)
    visualizer = Visualizer(config.grid.cols, config.grid.rows, config.render)

    if args.live:
        return run_live(engine, visualizer)
    return run_headless(engine, visualizer, config, args.config)


if __name__ == '__main__':
    sys.exit(main())
