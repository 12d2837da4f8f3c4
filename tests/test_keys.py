import sys

import pytest

from textedit.keys import Key, key_to_text

COMMANDS = [k for k in Key if k not in (Key.KEYDOWN, Key.SHIFT)]


@pytest.mark.parametrize("ch", ["a", "Z", "0", " ", "\n", "é", "\u20ac"])
def test_printable_characters_map_to_code_point(ch):
    assert key_to_text(ord(ch)) == ord(ch)


@pytest.mark.parametrize("ch", ["a", "\n", "\u00df"])
def test_string_input_maps_to_code_point(ch):
    assert key_to_text(ch) == ord(ch)


def test_multi_character_string_rejected():
    with pytest.raises(ValueError):
        key_to_text("ab")


def test_empty_string_rejected():
    with pytest.raises(ValueError):
        key_to_text("")


@pytest.mark.parametrize("command", COMMANDS)
def test_commands_are_not_text(command):
    assert key_to_text(command) == -1
    assert key_to_text(command | Key.SHIFT) == -1


@pytest.mark.parametrize("command", COMMANDS)
def test_commands_carry_keydown_bit(command):
    assert Key(int(command)) is command
    assert command & Key.KEYDOWN == Key.KEYDOWN
    assert command & Key.SHIFT == 0
    assert key_to_text(int(command)) == -1


def test_command_codes_are_distinct():
    values = [int(k) for k in COMMANDS]
    assert len(values) == len(set(values))
    assert [Key(v) for v in values] == COMMANDS


@pytest.mark.parametrize("command", COMMANDS)
def test_shifted_strips_back_to_command(command):
    assert command.shifted & ~Key.SHIFT == command
    assert command.shifted != command
    assert key_to_text(int(command.shifted)) == -1


def test_commands_lie_above_unicode_range():
    assert all(int(k) > sys.maxunicode for k in Key)
    assert [key_to_text(int(k)) for k in Key] == [-1] * len(list(Key))


def test_out_of_range_and_negative_are_not_text():
    assert key_to_text(sys.maxunicode + 1) == -1
    assert key_to_text(-5) == -1


def test_shifted_character_is_not_text():
    assert key_to_text(ord("a") | Key.SHIFT) == -1


def test_highest_code_point_is_text():
    assert key_to_text(sys.maxunicode) == sys.maxunicode