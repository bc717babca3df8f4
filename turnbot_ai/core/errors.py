"""
Error types raised by the turnbot_ai package.

Configuration and invocation errors surface at the public API boundary.
Dead-end playouts are absorbed inside a single search.
"""


class TurnbotError(Exception):
    """Base class for all errors raised by turnbot_ai."""


class ConfigurationError(TurnbotError, ValueError):
    """
    A caller misconfiguration.

    Raised for non-positive search budgets, invalid step limits, or a
    player with no registered agent when the driver needs one.
    """


class InvalidInvocation(TurnbotError, RuntimeError):
    """An agent was asked to decide on a state where it has no legal action."""


class EnumerationContractViolation(TurnbotError):
    """
    The game is not over but no legal action exists for the player to move.

    Raised inside a playout and caught by the search loop, which then
    treats the playout as having no result. ``steps`` counts the moves the
    playout made before it got stuck.
    """

    def __init__(self, player_id=None, message: str = "", steps: int = 0):
        self.player_id = player_id
        self.steps = steps
        super().__init__(
            message or f"No legal actions for player {player_id!r} in a running game"
        )
