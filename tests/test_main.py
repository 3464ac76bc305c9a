"""Tests for the interactive entry point using the simulated warehouse."""

import argparse

import pytest

from warehousebot.__main__ import build_demo_bot, main
from warehousebot.warehouse import Coords2D, Direction


@pytest.fixture
def scripted_input(monkeypatch):
    def install(*lines):
        pending = list(lines)

        def fake_input(prompt=""):
            if not pending:
                raise EOFError
            return pending.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)

    return install


def test_demo_bot_layout():
    bot = build_demo_bot()
    assert bot.position == Coords2D(1, 1)
    assert Direction.EAST in bot.layout[Coords2D(2, 0)]
    assert Direction.WEST in bot.layout[Coords2D(3, 0)]
    assert bot.items[Coords2D(0, 0)] == ["Kürbis", "Kürbis", "Kürbis"]


@pytest.mark.asyncio
async def test_main_session(monkeypatch, tmp_path, capsys, scripted_input):
    monkeypatch.setenv("WAREHOUSEBOT_NO_COLOR", "1")
    scripted_input("west", "west", "jump", "", "save demo", "stats")

    args = argparse.Namespace(bot=None, base_url=None, mock=True, save_dir=str(tmp_path))
    await main(args)

    out = capsys.readouterr().out
    assert "Warehouse CLI" in out
    assert "Warehousebot Configuration:" in out
    assert "going west" in out
    assert "Command failed : hit the wall" in out
    assert "Unknown command" in out
    assert "saved 5 cells as 'demo'" in out
    assert "CTRL-D" in out
    assert (tmp_path / "demo.json").exists()
