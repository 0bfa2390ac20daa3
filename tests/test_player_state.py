# SPDX-License-Identifier: GPL-3.0-or-later

import os
import sys
import unittest

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cyp.config import LevelDescriptor
from cyp.player_state import PlayerState, apply_delta, decode, encode, parse_int


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("-17", -17),
        ("+8", 8),
        ("  12", 12),
        ("42abc", 42),
        ("780; theme=dark", 780),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("-", 0),
        ("\u0663\u0664", 0),
        ("\u00a042", 0),
    ],
)
def test_parse_int_reads_leading_integer(text, expected):
    assert parse_int(text) == expected


class DecodeTests(unittest.TestCase):
    def test_missing_cookie_starts_fresh_game(self):
        self.assertEqual(decode(None), (PlayerState(0, 1000), False))

    def test_two_fields(self):
        self.assertEqual(decode("50&800"), (PlayerState(50, 800), True))

    def test_malformed_treasure_defaults_to_zero(self):
        self.assertEqual(decode("abc&800"), (PlayerState(0, 800), True))

    def test_missing_health_defaults_to_zero(self):
        self.assertEqual(decode("50"), (PlayerState(50, 0), True))

    def test_empty_header_still_counts_as_prior_state(self):
        self.assertEqual(decode(""), (PlayerState(0, 0), True))

    def test_extra_segments_are_ignored(self):
        self.assertEqual(decode("1&2&3&4"), (PlayerState(1, 2), True))

    def test_overlong_number_defaults_to_zero(self):
        self.assertEqual(decode("9" * 5000 + "&800"), (PlayerState(0, 800), True))

    def test_negative_health_survives(self):
        self.assertEqual(decode("5&-40"), (PlayerState(5, -40), True))


class EncodeTests(unittest.TestCase):
    def test_wire_format(self):
        self.assertEqual(encode(PlayerState(60, 780)), "60&780")
        self.assertEqual(encode(PlayerState(0, -5)), "0&-5")
        self.assertEqual(encode(PlayerState()), "0&1000")

    def test_round_trip(self):
        for state in (PlayerState(0, 1000), PlayerState(-3, 0), PlayerState(123456789, -987654321)):
            self.assertEqual(decode(encode(state)), (state, True))


class ApplyDeltaTests(unittest.TestCase):
    def test_adds_reward_and_subtracts_damage(self):
        level = LevelDescriptor(treasure_reward="10", damage_amount="20")
        self.assertEqual(apply_delta(PlayerState(50, 800), level), PlayerState(60, 780))

    def test_non_numeric_amounts_count_as_zero(self):
        level = LevelDescriptor(treasure_reward="lots", damage_amount=None)
        self.assertEqual(apply_delta(PlayerState(50, 800), level), PlayerState(50, 800))

    def test_health_is_not_clamped(self):
        level = LevelDescriptor(treasure_reward="0", damage_amount="500")
        self.assertEqual(apply_delta(PlayerState(0, 100), level), PlayerState(0, -400))

    def test_overlong_amount_counts_as_zero(self):
        level = LevelDescriptor(treasure_reward="1" * 5000, damage_amount="5")
        self.assertEqual(apply_delta(PlayerState(50, 800), level), PlayerState(50, 795))

    def test_does_not_modify_input(self):
        state = PlayerState(1, 2)
        apply_delta(state, LevelDescriptor(treasure_reward="5", damage_amount="5"))
        self.assertEqual(state, PlayerState(1, 2))


if __name__ == "__main__":
    unittest.main()
