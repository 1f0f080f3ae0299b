"""Command line interface running the commands of enabled packages."""

import argparse
import logging
import sys
from typing import Dict, List, Type

from whoa.api import Application
from whoa.commands import CommandIO
from whoa.config import load_config
from whoa.exceptions import WhoaError

logger = logging.getLogger(__name__)


def build_parser(commands: Dict[str, Type]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whoa", description="Whoa application console")
    parser.add_argument("-c", "--config", help="Path to app.yaml")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More output (repeat for more)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    for name, command in sorted(commands.items()):
        command_parser = subparsers.add_parser(
            name, help=command.get_description(), description=command.get_help() or command.get_description()
        )
        for argument in command.get_arguments():
            command_parser.add_argument(
                argument["name"],
                help=argument.get("description"),
                nargs=None if argument.get("required", True) else "?",
            )
        for option in command.get_options():
            flags = [f"--{option['name']}"]
            if option.get("shortcut"):
                flags.insert(0, f"-{option['shortcut']}")
            if option.get("has_value", False):
                command_parser.add_argument(*flags, dest=option["name"], help=option.get("description"))
            else:
                command_parser.add_argument(
                    *flags, dest=option["name"], action="store_true", help=option.get("description")
                )

    return parser


def main(argv: List[str] = None) -> int:
    """Run a console command."""
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("-c", "--config")
    pre_parser.add_argument("-v", "--verbose", action="count", default=0)
    known, _ = pre_parser.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if known.verbose >= 3 else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(known.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    application = Application(config)
    commands = application.get_commands()

    parser = build_parser(commands)
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    command = commands[args.command]
    arguments = {argument["name"]: getattr(args, argument["name"]) for argument in command.get_arguments()}
    options = {option["name"]: getattr(args, option["name"]) for option in command.get_options()}
    verbosity = CommandIO.VERBOSITY_QUIET if args.quiet else CommandIO.VERBOSITY_NORMAL + args.verbose

    io = CommandIO(arguments, options, verbosity)
    try:
        application.run_command(command, io)
    except (ValueError, WhoaError) as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        io.write_error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
