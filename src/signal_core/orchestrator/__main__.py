"""python -m signal_core.orchestrator [--config path] [--seed N]"""

import argparse

from signal_core.orchestrator.runner import main

parser = argparse.ArgumentParser(
    prog="signal_core.orchestrator",
    description="Tick the simulated markets and log a signal per asset on each interval.",
)
parser.add_argument("--config", default=None, help="YAML config; defaults apply when absent")
parser.add_argument("--seed", type=int, default=None, help="Fix the simulator seed (overrides config)")
args = parser.parse_args()
main(config_path=args.config, seed=args.seed)
