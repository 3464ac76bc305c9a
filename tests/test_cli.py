"""Tests for the command interpreter driving a simulated bot."""

import pytest

from warehousebot.bot import HitWall, InvalidTarget, MockBot, ScanFailed, TransportError
from warehousebot.cli import (
    HELP_TEXT,
    Cli,
    CommandFailed,
    CommandNotImplemented,
    CommandUnknown,
    command_error_to_cli_error,
)
from warehousebot.persistence import InMemoryPersistence
from warehousebot.warehouse import (
    ORIGIN,
    Cell,
    CellGrid,
    CellState,
    CellType,
    Coords2D,
    Direction,
    WarehouseState,
)

N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST


async def started_cli(bot=None, persistence=None) -> Cli:
    cli = Cli(bot or MockBot.rectangle(3, 2), persistence=persistence)
    await cli.init_state()
    return cli


@pytest.mark.asyncio
async def test_init_state_surveys_start_cell():
    cli = Cli(MockBot.rectangle(3, 2))
    output = await cli.init_state()

    assert output.splitlines() == [
        "(0, 0) Corner - walls: north, west - Cell - Storage (0/9) - Goods: -",
        "far scan N=0 E=2 S=1 W=0 (3 new cells)",
    ]
    assert cli.position == ORIGIN
    assert cli.grid.get(ORIGIN).was_visited()
    assert cli.grid.get(Coords2D(2, 0)).walls == (E,)
    assert cli.grid.get(Coords2D(0, 1)).walls == (S,)
    assert await cli.dispatch_command("STATS") == "4 cells - storage 0/25"


@pytest.mark.asyncio
async def test_init_state_forgets_previous_map():
    grid = CellGrid()
    grid.upsert_observed(Coords2D(9, 9), Cell())
    cli = Cli(MockBot.rectangle(2, 2), grid=grid)

    await cli.init_state()

    assert Coords2D(9, 9) not in cli.grid
    assert cli.grid is grid


@pytest.mark.asyncio
async def test_move_and_scan():
    cli = await started_cli()

    assert await cli.dispatch_command("east") == "going east"
    assert cli.position == Coords2D(1, 0)
    # The frontier cell becomes visited as soon as the bot stands on it.
    assert cli.grid.get(Coords2D(1, 0)).was_visited()

    near = await cli.dispatch_command("NEAR")
    assert near.startswith("(1, 0) TCross - walls: north")

    far = await cli.dispatch_command("far")
    assert far == "far scan N=0 E=1 S=1 W=1 (1 new cells)"
    assert cli.grid.get(Coords2D(1, 1)).walls == (S,)


@pytest.mark.asyncio
async def test_one_letter_moves():
    cli = await started_cli()
    assert await cli.dispatch_command("s") == "going south"
    assert await cli.dispatch_command("N") == "going north"
    assert cli.position == ORIGIN


@pytest.mark.asyncio
async def test_hit_wall_keeps_position():
    cli = await started_cli()
    with pytest.raises(CommandFailed) as excinfo:
        await cli.dispatch_command("NORTH")

    assert excinfo.value.message == "hit the wall"
    assert cli.position == ORIGIN


@pytest.mark.asyncio
async def test_failed_scan_leaves_map_untouched():
    bot = MockBot.rectangle(3, 2)
    cli = await started_cli(bot)
    before = cli.grid.to_state()

    bot.fail_scans = True
    await cli.dispatch_command("EAST")
    with pytest.raises(CommandFailed, match="scan failed"):
        await cli.dispatch_command("SCAN")

    after = cli.grid.to_state()
    # Only the visited flag of the cell the bot moved onto changed.
    assert after.cells["1,0"].visited
    after.cells["1,0"].visited = False
    assert after == before


@pytest.mark.asyncio
async def test_inconsistent_near_scan_is_rejected():
    grid = CellGrid()
    grid.upsert_observed(Coords2D(1, 0), Cell.with_walls(N, E, S))
    bot = MockBot({ORIGIN: {E}, Coords2D(1, 0): {N, E, S}})
    cli = Cli(bot, grid=grid)

    with pytest.raises(CommandFailed, match="inconsistent"):
        await cli.dispatch_command("NEAR")
    assert ORIGIN not in cli.grid


@pytest.mark.asyncio
async def test_full_walk_map():
    cli = await started_cli()
    for line in ["EAST", "SCAN", "EAST", "SCAN", "SOUTH", "SCAN", "WEST", "SCAN", "WEST", "SCAN"]:
        await cli.dispatch_command(line)

    assert cli.position == Coords2D(0, 1)
    assert cli.grid.check_consistency() == []
    assert await cli.dispatch_command("MAP") == (
        "\n"
        "+-+-+-+ \n"
        "|     | \n"
        "+ + + + \n"
        "|o    | \n"
        "+-+-+-+ \n"
        "        \n"
    )


@pytest.mark.asyncio
async def test_info():
    cli = Cli(MockBot.rectangle(3, 2))
    assert await cli.dispatch_command("INFO") == "(0, 0) unexplored"

    await cli.init_state()
    assert await cli.dispatch_command("info") == (
        "(0, 0) Corner (visited) - Cell - Storage (0/9) - Goods: -"
    )

    await cli.dispatch_command("EAST")
    await cli.dispatch_command("EAST")
    assert await cli.dispatch_command("INFO") == (
        "(2, 0) TCross (visited) - Cell - Storage (0/6) - Goods: -"
    )


@pytest.mark.asyncio
async def test_items_show_in_near_scan_and_stats():
    bot = MockBot.rectangle(3, 2, items={ORIGIN: ["Kürbis", "Kürbis"]})
    cli = await started_cli(bot)

    assert cli.grid.get(ORIGIN).items == ["Kürbis", "Kürbis"]
    assert await cli.dispatch_command("STATS") == "4 cells - storage 2/25"


@pytest.mark.asyncio
async def test_reset_returns_to_origin_and_clears_map():
    bot = MockBot.rectangle(3, 2)
    cli = await started_cli(bot)
    await cli.dispatch_command("EAST")

    assert await cli.dispatch_command("RESET") == "reset"
    assert cli.position == ORIGIN
    assert cli.grid.is_empty()
    assert bot.position == ORIGIN
    assert await cli.dispatch_command("MAP") == "\n"


@pytest.mark.asyncio
@pytest.mark.parametrize("line", ["", "   ", "JUMP", "go north"])
async def test_unknown_commands(line):
    cli = Cli(MockBot.rectangle(2, 2))
    with pytest.raises(CommandUnknown):
        await cli.dispatch_command(line)


@pytest.mark.asyncio
async def test_help():
    cli = Cli(MockBot.rectangle(2, 2))
    assert await cli.dispatch_command("help") == HELP_TEXT
    assert "SAVE <name>" in HELP_TEXT


@pytest.mark.asyncio
async def test_storage_commands_need_a_backend():
    cli = Cli(MockBot.rectangle(2, 2))
    for line in ["SAVE hall", "LOAD hall", "LIST"]:
        with pytest.raises(CommandNotImplemented):
            await cli.dispatch_command(line)


@pytest.mark.asyncio
async def test_save_and_load():
    persistence = InMemoryPersistence()
    cli = await started_cli(persistence=persistence)
    await cli.dispatch_command("EAST")
    await cli.dispatch_command("SCAN")
    saved_grid = cli.grid.to_state()

    assert await cli.dispatch_command("SAVE hall-a") == "saved 5 cells as 'hall-a'"
    assert await cli.dispatch_command("LIST") == "hall-a"

    await cli.dispatch_command("RESET")
    assert cli.grid.is_empty()

    assert await cli.dispatch_command("LOAD hall-a") == "loaded 5 cells from 'hall-a'"
    assert cli.position == Coords2D(1, 0)
    assert cli.grid.to_state() == saved_grid


@pytest.mark.asyncio
async def test_save_usage_and_bad_names():
    cli = Cli(MockBot.rectangle(2, 2), persistence=InMemoryPersistence())

    with pytest.raises(CommandFailed, match="usage: SAVE <name>"):
        await cli.dispatch_command("SAVE")
    with pytest.raises(CommandFailed, match="usage: LOAD <name>"):
        await cli.dispatch_command("LOAD a b")
    with pytest.raises(CommandFailed, match="Invalid map name"):
        await cli.dispatch_command("SAVE ../etc")


@pytest.mark.asyncio
async def test_list_without_saved_maps():
    cli = Cli(MockBot.rectangle(2, 2), persistence=InMemoryPersistence())
    assert await cli.dispatch_command("LIST") == "no saved maps"


@pytest.mark.asyncio
async def test_load_missing_map():
    cli = Cli(MockBot.rectangle(2, 2), persistence=InMemoryPersistence())
    with pytest.raises(CommandFailed, match="no saved map named 'nope'"):
        await cli.dispatch_command("LOAD nope")


@pytest.mark.asyncio
async def test_load_corrupt_map_keeps_current_grid():
    persistence = InMemoryPersistence()
    persistence.warehouses["broken"] = WarehouseState(
        cells={"0,0": CellState(x=0, y=0, walls=[N], shape=CellType.DEADEND)}
    )
    cli = await started_cli(persistence=persistence)
    before = cli.grid.to_state()

    with pytest.raises(CommandFailed, match="corrupt map 'broken'"):
        await cli.dispatch_command("LOAD broken")
    assert cli.grid.to_state() == before


def test_command_error_translation():
    assert command_error_to_cli_error(HitWall("x")).message == "hit the wall"
    assert command_error_to_cli_error(InvalidTarget("x")).message == "invalid target"
    assert command_error_to_cli_error(ScanFailed("x")).message == "scan failed"
    assert command_error_to_cli_error(TransportError("x")).message == "bot unreachable"
