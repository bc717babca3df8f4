"""Reference games built on the turn-based reducer."""

from turnbot_ai.games.tic_tac_toe import TicTacToe, enumerate_moves as tic_tac_toe_moves

__all__ = ['TicTacToe', 'tic_tac_toe_moves']
