from __future__ import annotations

import argparse

from everglow.simulation.autopilot import available_policies
from everglow.ui.cli import commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Everglow")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common_parent = argparse.ArgumentParser(add_help=False)
    common_parent.add_argument("--data-dir", default=None, help="Where the high score and results live")

    sub = subparsers.add_parser("play", parents=[common_parent], help="Open the game window")
    sub.add_argument("--mute", action="store_true")
    sub.set_defaults(func=commands.cmd_play)

    sub = subparsers.add_parser("simulate", parents=[common_parent], help="Run headless autopilot games")
    sub.add_argument("--policy", choices=available_policies(), default=None)
    sub.add_argument("--sims", type=int, default=None)
    sub.add_argument("--workers", type=int, default=None)
    sub.set_defaults(func=commands.cmd_simulate)

    sub = subparsers.add_parser("report", parents=[common_parent], help="Print the saved simulation summary")
    sub.set_defaults(func=commands.cmd_report)

    sub = subparsers.add_parser("doctor", parents=[common_parent], help="Check environment/dependencies")
    sub.set_defaults(func=commands.cmd_doctor)

    sub = subparsers.add_parser("high-score", parents=[common_parent], help="Show or reset the stored high score")
    sub.add_argument("--reset", action="store_true")
    sub.set_defaults(func=commands.cmd_high_score)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
