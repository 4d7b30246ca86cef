"""Team construction and roster invariants."""

from typing import Optional, Sequence

from ...core.data import (
    CharacterCard,
    CombatCharacter,
    EventCard,
    MAX_EVENT_CARDS,
    MAX_TEAM_SIZE,
    MIN_TEAM_SIZE,
    Position,
    Team,
)
from ...core.exceptions import InvalidTeamError, MissingDataError
from .character import create_combat_character


def validate_team(team: Team) -> None:
    """Check the roster invariants.

    Raises:
        InvalidTeamError: If the roster is empty or oversized, member ids
            repeat, the leader is not a member, or too many event cards
            are carried
    """
    size = len(team.characters)
    if size < MIN_TEAM_SIZE:
        raise InvalidTeamError(f"Team '{team.id}' has no members")
    if size > MAX_TEAM_SIZE:
        raise InvalidTeamError(f"Team '{team.id}' has {size} members (max {MAX_TEAM_SIZE})")

    ids = team.member_ids()
    if len(set(ids)) != len(ids):
        raise InvalidTeamError(f"Team '{team.id}' has duplicate members")
    if team.leader_id not in ids:
        raise InvalidTeamError(f"Team '{team.id}' leader '{team.leader_id}' is not a member")
    if len(team.event_cards) > MAX_EVENT_CARDS:
        raise InvalidTeamError(
            f"Team '{team.id}' carries {len(team.event_cards)} event cards (max {MAX_EVENT_CARDS})"
        )


def get_member(team: Team, character_id: str) -> CombatCharacter:
    """Find a member by id.

    Raises:
        MissingDataError: If no member has that id
    """
    member = team.find(character_id)
    if member is None:
        raise MissingDataError("character", character_id)
    return member


def get_leader(team: Team) -> CombatCharacter:
    member = team.find(team.leader_id)
    if member is None:
        raise InvalidTeamError(f"Team '{team.id}' leader '{team.leader_id}' is not a member")
    return member


def initialize_team(
    team_id: str,
    name: str,
    cards: Sequence[CharacterCard],
    leader_id: str,
    event_cards: Sequence[EventCard] = (),
    front_row_size: int = 3,
    slots: Optional[Sequence[int]] = None,
) -> Team:
    """Build a validated adventure team from selected cards.

    Cards are ordered by formation slot (their list order when ``slots`` is
    omitted); slots below ``front_row_size`` form the front row.

    Args:
        team_id: Team identifier
        name: Display name
        cards: Selected character cards
        leader_id: Id of the leading card
        event_cards: Carried event cards
        front_row_size: Number of slots in the front row
        slots: Formation slot of each card, parallel to ``cards``

    Returns:
        A new level 1 Team

    Raises:
        InvalidTeamError: If the result breaks a roster invariant
    """
    if slots is not None and len(slots) != len(cards):
        raise InvalidTeamError("Formation slots must match the number of selected cards")

    positions = list(slots) if slots is not None else list(range(len(cards)))
    order = sorted(range(len(cards)), key=lambda i: positions[i])
    characters = [
        create_combat_character(cards[i], Position.FRONT if positions[i] < front_row_size else Position.BACK)
        for i in order
    ]

    team = Team(
        id=team_id,
        name=name,
        characters=characters,
        leader_id=leader_id,
        event_cards=list(event_cards),
    )
    validate_team(team)
    return team
