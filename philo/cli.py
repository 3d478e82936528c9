"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from philo.args import ArgumentError, parse_settings
from philo.simulation import run_simulation

USAGE = (
    "Format: number_of_philosophers time_to_die time_to_eat "
    "time_to_sleep [number_of_times_each_philosopher_must_eat]"
)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the arguments and run the simulation on standard output."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_settings(args)
    except ArgumentError:
        print(USAGE)
        return 0
    run_simulation(settings, sys.stdout)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())