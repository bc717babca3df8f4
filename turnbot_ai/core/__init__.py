"""
turnbot_ai core package

This package contains the pieces shared by agents and the simulation driver:
- Game state, context and action representation
- The turn-based reducer used to describe games
- The seedable random source
- Error types

All core components can be imported directly from this package.
"""

from turnbot_ai.core.errors import (
    TurnbotError, ConfigurationError, InvalidInvocation,
    EnumerationContractViolation
)
from turnbot_ai.core.state import Action, Ctx, GameOver, GameState, make_move
from turnbot_ai.core.game import Game, Reducer, as_reducer, create_game_reducer
from turnbot_ai.core.random import Random

__all__ = [
    # Errors
    'TurnbotError', 'ConfigurationError', 'InvalidInvocation',
    'EnumerationContractViolation',

    # State
    'Action', 'Ctx', 'GameOver', 'GameState', 'make_move',

    # Game
    'Game', 'Reducer', 'as_reducer', 'create_game_reducer',

    # Random
    'Random',
]
