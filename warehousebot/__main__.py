"""
Warehouse CLI

Interactive explorer for a warehouse bot: move, scan and draw the map.

Run: python -m warehousebot            (remote bot from BOT_* settings)
     python -m warehousebot --mock     (built-in simulated warehouse)
"""

import argparse
import asyncio

from .bot import BotCommands, MockBot, RestBot
from .cli import Cli, CliError, CommandFailed, CommandNotImplemented, CommandUnknown
from .config import Config
from .logging_utils import Color, colored, log_error, log_info, log_success
from .persistence import JsonPersistence
from .warehouse import Coords2D, Direction

BANNER = r"""
============= Warehouse CLI ===============
Copyright (c) 1972 - Warehouse Control Ltd.
==========================================="""


def build_demo_bot() -> MockBot:
    """A small simulated warehouse with a partition and a few stocked shelves."""
    return MockBot.rectangle(
        6,
        4,
        start=Coords2D(1, 1),
        items={
            Coords2D(0, 0): ["Kürbis", "Kürbis", "Kürbis"],
            Coords2D(5, 3): ["Milch"],
        },
        inner_walls=[
            (Coords2D(2, 0), Direction.EAST),
            (Coords2D(2, 1), Direction.EAST),
            (Coords2D(4, 2), Direction.SOUTH),
        ],
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Explore and map a warehouse with a bot")
    parser.add_argument("--bot", default=None, help="Bot name (default: BOT_NAME)")
    parser.add_argument("--base-url", default=None, help="Bot API base URL (default: BOT_BASE_URL)")
    parser.add_argument("--mock", action="store_true", help="Use the built-in simulated warehouse")
    parser.add_argument(
        "--save-dir",
        default=None,
        help="Directory for SAVE/LOAD (default: SAVE_DIR)",
    )
    return parser.parse_args()


async def main(args: argparse.Namespace) -> None:
    Config.validate()

    bot: BotCommands
    if args.mock:
        bot = build_demo_bot()
    else:
        bot = RestBot(args.bot, args.base_url)

    persistence = JsonPersistence(args.save_dir or Config.SAVE_DIR)
    await persistence.initialize()

    print("\x1b[2J\x1b[1;1H", end="")
    print(BANNER)
    log_info(Config.display())
    log_success(f"Saved maps in {persistence.base_path}")

    cli = Cli(bot, persistence=persistence)
    try:
        print(await cli.init_state())
    except CommandFailed as exc:
        log_error(f"Command failed : {exc.message}")

    try:
        while True:
            try:
                line = await asyncio.to_thread(input, ">> ")
            except EOFError:
                print("CTRL-D")
                break
            if not line.strip():
                continue

            try:
                print(await cli.dispatch_command(line))
            except CommandFailed as exc:
                print(colored("Command failed : ", Color.RED) + exc.message)
            except CommandNotImplemented:
                print(colored("Command not yet implemented", Color.YELLOW))
            except CommandUnknown:
                print(colored("Unknown command", Color.YELLOW))
            except CliError as exc:
                log_error(str(exc))
    except KeyboardInterrupt:
        print("CTRL-C")
    finally:
        await persistence.close()


def run() -> None:
    """Console-script entry point."""
    try:
        asyncio.run(main(parse_args()))
    except KeyboardInterrupt:
        print("CTRL-C")


if __name__ == "__main__":
    run()
