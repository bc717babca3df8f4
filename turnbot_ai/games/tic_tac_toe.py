"""
Tic-tac-toe as a reducer game.

A small solved game: perfect play from the empty board ends in a draw.
Used by the command-line runner and by the scenario tests.
"""
from typing import List, Optional, Tuple

from turnbot_ai.core.game import Game
from turnbot_ai.core.state import Action, Ctx, GameOver, make_move

Cells = Tuple[Optional[str], ...]

WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def is_victory(cells: Cells) -> bool:
    for a, b, c in WINNING_LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return True
    return False


def setup(ctx: Ctx) -> Cells:
    return (None,) * 9


def click_cell(G: Cells, ctx: Ctx, cell: int) -> Cells:
    if G[cell] is not None:
        return G
    cells = list(G)
    cells[cell] = ctx.current_player
    return tuple(cells)


def end_game_if(G: Cells, ctx: Ctx) -> Optional[GameOver]:
    if is_victory(G):
        return GameOver.win(ctx.current_player)
    if all(cell is not None for cell in G):
        return GameOver.drawn()
    return None


def enumerate_moves(G: Cells, ctx: Ctx, player_id: str) -> List[Action]:
    """Legal actions: one click per empty cell."""
    return [make_move("clickCell", i, player_id=player_id) for i in range(9) if G[i] is None]


def render_board(G: Cells) -> str:
    symbols = {"0": "X", "1": "O", None: "."}
    rows = []
    for r in range(3):
        rows.append(" ".join(symbols[G[3 * r + c]] for c in range(3)))
    return "\n".join(rows)


TicTacToe = Game(
    setup=setup,
    moves={"clickCell": click_cell},
    end_game_if=end_game_if,
    moves_per_turn=1,
    num_players=2,
    name="tic-tac-toe",
)
