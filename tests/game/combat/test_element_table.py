"""
Unit tests for elemental matchups.
"""

import itertools

import pytest

from chibiquest.core.data import Element
from chibiquest.game.combat import ElementMatchupTable


@pytest.fixture
def table():
    return ElementMatchupTable()


class TestElementMultipliers:
    """Test the fire/water/wind triangle and the light/dark pair."""

    @pytest.mark.parametrize("attacker,defender", [
        (Element.FIRE, Element.WIND),
        (Element.WIND, Element.WATER),
        (Element.WATER, Element.FIRE),
    ])
    def test_advantage(self, table, attacker, defender):
        assert table.multiplier(attacker, defender) == 1.3

    @pytest.mark.parametrize("attacker,defender", [
        (Element.WIND, Element.FIRE),
        (Element.WATER, Element.WIND),
        (Element.FIRE, Element.WATER),
    ])
    def test_disadvantage(self, table, attacker, defender):
        assert table.multiplier(attacker, defender) == 0.7

    def test_light_and_dark_counter_each_other(self, table):
        assert table.multiplier(Element.LIGHT, Element.DARK) == 1.5
        assert table.multiplier(Element.DARK, Element.LIGHT) == 1.5

    @pytest.mark.parametrize("element", list(Element))
    def test_same_element_is_neutral(self, table, element):
        assert table.multiplier(element, element) == 1.0

    def test_triangle_against_light_dark_is_neutral(self, table):
        assert table.multiplier(Element.FIRE, Element.DARK) == 1.0
        assert table.multiplier(Element.LIGHT, Element.WATER) == 1.0

    def test_advantage_mirrors_disadvantage(self, table):
        """Whenever A beats B at 1.3, B hits A at 0.7."""
        for a, b in itertools.product(Element, repeat=2):
            if table.multiplier(a, b) == 1.3:
                assert table.multiplier(b, a) == 0.7

    def test_vectorized_lookup(self, table):
        multipliers = table.multipliers_against(Element.FIRE, [Element.WIND, Element.WATER, Element.FIRE])

        assert multipliers.tolist() == [1.3, 0.7, 1.0]
