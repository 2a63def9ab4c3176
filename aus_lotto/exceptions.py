"""Exception hierarchy for the analyzer."""


class LottoError(Exception):
    """Base class for analyzer errors."""


class UnknownGameError(LottoError, ValueError):
    """Raised when a game type has no configured ruleset or results URL."""

    def __init__(self, game_type, configured=()):
        self.game_type = game_type
        valid = ", ".join(sorted(str(g) for g in configured))
        message = f"Unknown game type: {game_type}"
        if valid:
            message += f". Valid: {valid}"
        super().__init__(message)


class InvalidDrawError(LottoError, ValueError):
    """Raised when a draw result violates the rules of its game."""


class RowParseError(LottoError, ValueError):
    """Raised when a single results table row cannot be parsed."""
