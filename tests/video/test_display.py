from __future__ import annotations

import pytest

from pychip8.video import FONT_DATA, SCREEN_HEIGHT, SCREEN_WIDTH, Display


def lit(display: Display) -> set[tuple[int, int]]:
    return {
        (x, y)
        for y in range(SCREEN_HEIGHT)
        for x in range(SCREEN_WIDTH)
        if display.get_pixel(x, y)
    }


def test_draw_sets_pixels_msb_first() -> None:
    display = Display()

    collision = display.draw_sprite(2, 3, bytes([0b10100000]))

    assert collision is False
    assert lit(display) == {(2, 3), (4, 3)}


def test_second_draw_erases_and_reports_collision() -> None:
    display = Display()
    display.draw_sprite(10, 10, bytes([0xFF, 0x81]))

    collision = display.draw_sprite(10, 10, bytes([0xFF, 0x81]))

    assert collision is True
    assert lit(display) == set()


def test_partial_overlap_keeps_other_pixels() -> None:
    display = Display()
    display.draw_sprite(0, 0, bytes([0b11000000]))

    collision = display.draw_sprite(1, 0, bytes([0b11000000]))

    assert collision is True
    assert lit(display) == {(0, 0), (2, 0)}


def test_sprite_wraps_each_pixel_independently() -> None:
    display = Display()

    display.draw_sprite(62, 31, bytes([0xF0, 0x80]))

    assert lit(display) == {(62, 31), (63, 31), (0, 31), (1, 31), (62, 0)}


def test_start_coordinates_wrap() -> None:
    display = Display()

    display.draw_sprite(64 + 5, 32 + 1, bytes([0x80]))

    assert lit(display) == {(5, 1)}


def test_empty_sprite_changes_nothing() -> None:
    display = Display()

    assert display.draw_sprite(0, 0, b"") is False
    assert not any(display.snapshot())


def test_clear_and_text_rows() -> None:
    display = Display()
    display.draw_sprite(0, 0, FONT_DATA[0:5])

    rows = display.rows()
    assert rows[0].startswith("####.")
    assert rows[1].startswith("#..#.")
    assert len(rows) == SCREEN_HEIGHT
    assert all(len(row) == SCREEN_WIDTH for row in rows)

    display.clear()
    assert not any(display.snapshot())


def test_glyph_lookup_matches_font_table() -> None:
    from pychip8.video.font import get_glyph, glyph_address

    assert bytes(get_glyph(0xA)) == FONT_DATA[50:55]
    assert glyph_address(0, 0xF) == 75
    with pytest.raises(ValueError):
        get_glyph(16)
