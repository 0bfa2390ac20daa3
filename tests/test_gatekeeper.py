# SPDX-License-Identifier: GPL-3.0-or-later

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cyp.gatekeeper import Visibility, decide


@pytest.mark.parametrize(
    "had_prior_state, is_entry_route, expected",
    [
        (True, True, Visibility.VISIBLE),
        (True, False, Visibility.VISIBLE),
        (False, True, Visibility.VISIBLE),
        (False, False, Visibility.BLOCKED),
    ],
)
def test_decide(had_prior_state, is_entry_route, expected):
    assert decide(had_prior_state, is_entry_route) is expected
