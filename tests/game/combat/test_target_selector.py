"""
Unit tests for row-aware target selection.
"""

from chibiquest.core.data import Position, TargetType
from chibiquest.game.combat import TargetSelector


class TestTargetSelector:
    """Test front-row priority and random targeting."""

    def test_front_row_first(self, rng, character_factory):
        """Single-target only picks from the front pair until both fall, then the back member."""
        front_a = character_factory(card_id="fa", position=Position.FRONT)
        front_b = character_factory(card_id="fb", position=Position.FRONT)
        back = character_factory(card_id="bk", position=Position.BACK)
        defenders = [front_a, front_b, back]
        selector = TargetSelector(rng)

        picks = {selector.select(defenders).id for _ in range(50)}
        assert picks <= {"fa", "fb"}

        front_a.current_hp = 0
        assert {selector.select(defenders).id for _ in range(20)} == {"fb"}

        front_b.current_hp = 0
        assert selector.select(defenders) is back

    def test_back_row_only_when_no_front(self, rng, character_factory):
        back = character_factory(card_id="bk", position=Position.BACK)

        assert TargetSelector(rng).select([back]) is back

    def test_no_living_defender_returns_none(self, rng, character_factory):
        dead = character_factory(card_id="d", current_hp=0)
        selector = TargetSelector(rng)

        assert selector.select([dead]) is None
        assert selector.select([dead], TargetType.RANDOM) is None
        assert selector.select([]) is None

    def test_random_ignores_rows(self, rng, character_factory):
        defenders = [
            character_factory(card_id="fa", position=Position.FRONT),
            character_factory(card_id="bk", position=Position.BACK),
        ]
        selector = TargetSelector(rng)

        picks = {selector.select(defenders, TargetType.RANDOM).id for _ in range(100)}

        assert picks == {"fa", "bk"}

    def test_random_skips_dead(self, rng, character_factory):
        alive = character_factory(card_id="a", position=Position.BACK)
        defenders = [character_factory(card_id="d", current_hp=0), alive]

        assert TargetSelector(rng).select(defenders, TargetType.RANDOM) is alive
