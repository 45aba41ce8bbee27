"""
Command-line interface for inspecting and maintaining the learned memory.
"""

import argparse
import logging
import sys
from pathlib import Path

import tictactoe_ai.memory as Memory
from tictactoe_ai.memory.json_store import to_document, write_document
from tictactoe_ai.utils.config import DEFAULT_MEMORY_PATH

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Inspect, export and reset the tic-tac-toe AI's learned memory"
    )
    parser.add_argument(
        "--memory", "-m",
        type=Path,
        default=DEFAULT_MEMORY_PATH,
        help=f"Experience store file, .db or .json (default: {DEFAULT_MEMORY_PATH})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("info", help="Show how much has been learned")
    export = sub.add_parser("export", help="Write the table to a JSON file")
    export.add_argument("output", type=Path, help="Destination .json file")
    reset = sub.add_parser("reset", help="Forget everything learned")
    reset.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask for confirmation",
    )
    return parser.parse_args(argv)


def cmd_info(args: argparse.Namespace) -> int:
    with Memory.open_readonly(args.memory) as store:
        info = store.get_info()
    print(
        f"{info['path']} ({info['backend']}): "
        f"{info['states']} states, {info['entries']} entries, "
        f"{info['banned']} banned, {info['rewarded']} rewarded"
    )
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    with Memory.open_readonly(args.memory) as store:
        table = store.snapshot()
    args.output.parent.mkdir(parents=True, exist_ok=True)
    write_document(args.output.resolve(), to_document(table))
    print(f"Exported {sum(len(m) for m in table.values())} entries to {args.output}")
    return 0


def cmd_reset(args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input(f"Erase all learned moves in {args.memory}? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Aborted")
            return 1
    with Memory.for_path(args.memory) as store:
        store.reset()
    print(f"Reset {args.memory}")
    return 0


COMMANDS = {
    "info": cmd_info,
    "export": cmd_export,
    "reset": cmd_reset,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except Exception:
        logger.exception("Command %s failed", args.command)
        return 2


if __name__ == "__main__":
    sys.exit(main())
