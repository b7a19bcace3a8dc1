from __future__ import annotations

import pytest

from pychip8.utils import debug_enabled, debug_log
from pychip8.utils.debug import reload_categories


@pytest.fixture(autouse=True)
def _reset_categories():
    reload_categories()
    yield
    reload_categories()


def test_debug_disabled_without_env(monkeypatch, capsys) -> None:
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)

    assert not debug_enabled("cpu")
    debug_log("cpu", "hidden %d", 1)
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "CPU, timer")

    assert debug_enabled("cpu")
    assert debug_enabled("timer")
    assert not debug_enabled("audio")

    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=0200\n"


def test_all_enables_everything(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "all")

    assert debug_enabled("loader")
    assert debug_enabled()


def test_bad_format_arguments_are_appended(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "input")

    debug_log("input", "key=%d", "x")
    assert capsys.readouterr().out == "[CHIP8][input] key=%d ('x',)\n"
