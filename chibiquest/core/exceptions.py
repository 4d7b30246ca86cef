"""Engine exception hierarchy.

Every failure the engine reports is a structural precondition failure raised
immediately to the caller. Nothing is retried.
"""


class EngineError(Exception):
    """Base class for all simulation engine errors."""


class MissingDataError(EngineError):
    """A referenced id is absent from the supplied records."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind} found with id '{identifier}'")


class InvalidTeamError(EngineError):
    """A team breaks the roster invariants (size, leader, event cards)."""


class InvalidRewardError(EngineError):
    """A level-up reward cannot be applied to the given team."""


class ConfigError(EngineError):
    """The balance configuration file is missing fields or malformed."""
