"""
turnbot_ai - Monte Carlo Tree Search agents for reducer-based turn games.

This package provides agents that play any turn-based game whose rules are
expressed as a pure reducer ``(state, action) -> state``, and a driver that
runs those agents against the reducer until a game concludes.
"""

__version__ = "0.1.0"
__author__ = "turnbot_ai Team"

# Make key components available at package level
from turnbot_ai.core import (
    Action, Ctx, GameOver, GameState, make_move,
    Game, as_reducer, create_game_reducer, Random,
    TurnbotError, ConfigurationError, InvalidInvocation,
    EnumerationContractViolation,
)
from turnbot_ai.agents import Agent, Decision, RandomAgent
from turnbot_ai.mcts import MCTSAgent, MCTSConfig, SearchNode, DEFAULT_CONFIG
from turnbot_ai.simulation import simulate, step, run_matches, StepResult, MatchSummary

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
