#!/usr/bin/env python3
"""Main entry point for the ATM demo"""

import argparse
import sys

from .config import get_config
from .demo import SCENARIOS, run_scenario
from .logging_config import setup_logging


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="atm_core", description="Run the ATM demo scenarios")
    parser.add_argument(
        "--scenario", choices=SCENARIOS, action="append",
        help="Scenario to run (repeatable); all scenarios run by default"
    )
    args = parser.parse_args(argv)

    cfg = get_config()
    setup_logging(cfg.log_level, "atm", cfg.log_format)

    for name in args.scenario or SCENARIOS:
        print(f"== {name}")
        run_scenario(name, cfg)
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
