"""
Custom exceptions

Rule violations are recoverable: the Game catches them and reports them in its status string.
Everything else propagates up to whoever called the service.
"""


class GameError(Exception):
    """Top-level error for anything raised by this application."""


# --- RULE VIOLATIONS (caught by the Game, shown to the player) ---
class RuleViolation(GameError):
    """An action the rules do not allow. Never changes committed state."""


class SelectionError(RuleViolation):
    """Picking a piece from the roster that cannot be picked (yet)."""


class PlacementError(RuleViolation):
    """Nothing selected, or the target cell is taken."""


class ContinuityError(RuleViolation):
    """The action would split the formation in two (or more) clusters."""


class NotYourTurnError(RuleViolation):
    """Acting on behalf of the player that is not to move."""


class PhaseError(RuleViolation):
    """Action does not belong to the current phase of the game."""


# --- ERRORS THAT PROPAGATE ---
class GameStateError(GameError):
    """A (stored) game state or configuration that cannot be interpreted."""


class RepositoryError(GameError):
    """Game could not be found in the store."""


class InvalidRequestError(GameError):
    """Request is malformed before it even reaches the domain layer."""
