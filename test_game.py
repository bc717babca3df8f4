#!/usr/bin/env python
"""
Tests for the core game pieces: state, reducer and random source.

Run with ``python -m pytest`` or ``python test_game.py``.
"""
import unittest

from turnbot_ai.core.errors import ConfigurationError
from turnbot_ai.core.game import Game, as_reducer, create_game_reducer
from turnbot_ai.core.random import Random
from turnbot_ai.core.state import Action, Ctx, GameOver, GameState, make_move
from turnbot_ai.games.tic_tac_toe import TicTacToe, enumerate_moves, render_board


def play_cells(state, cells):
    """Apply clickCell moves for whoever is to move."""
    for cell in cells:
        state = TicTacToe.reduce(state, make_move("clickCell", cell, player_id=state.ctx.current_player))
    return state


class TestState(unittest.TestCase):
    """Test the immutable state types."""

    def test_make_move(self):
        action = make_move("clickCell", 4, player_id=1)
        self.assertEqual(action.move, "clickCell")
        self.assertEqual(action.args, (4,))
        self.assertEqual(action.player_id, "1")
        self.assertEqual(action, Action(move="clickCell", args=(4,), player_id="1"))
        self.assertEqual(len({action, make_move("clickCell", 4, player_id="1")}), 1)

    def test_action_to_dict(self):
        data = make_move("clickCell", 2, player_id="0").to_dict()
        self.assertEqual(data["type"], "MAKE_MOVE")
        self.assertEqual(data["payload"], {"type": "clickCell", "args": [2], "playerID": "0"})

    def test_game_over_values(self):
        self.assertEqual(GameOver.win(1).winner, "1")
        self.assertTrue(GameOver.drawn().draw)
        self.assertEqual(GameOver.drawn().to_dict(), {"draw": True})
        with self.assertRaises(ValueError):
            GameOver(winner="0", draw=True)

    def test_ctx_player_to_move(self):
        self.assertEqual(Ctx(action_players=("1", "0")).player_to_move, "1")
        self.assertIsNone(Ctx(action_players=()).player_to_move)

    def test_state_is_immutable(self):
        state = GameState(G=(None,) * 9)
        with self.assertRaises(AttributeError):
            state.G = ()


class TestReducer(unittest.TestCase):
    """Test the turn-based reducer with tic-tac-toe."""

    def setUp(self):
        self.initial = TicTacToe.initial_state()

    def test_initial_state(self):
        ctx = self.initial.ctx
        self.assertEqual(self.initial.G, (None,) * 9)
        self.assertEqual(ctx.current_player, "0")
        self.assertEqual(ctx.action_players, ("0",))
        self.assertEqual(ctx.num_players, 2)
        self.assertIsNone(ctx.gameover)

    def test_move_passes_turn(self):
        state = TicTacToe.reduce(self.initial, make_move("clickCell", 4, player_id="0"))
        self.assertEqual(state.G[4], "0")
        self.assertEqual(state.ctx.current_player, "1")
        self.assertEqual(state.ctx.action_players, ("1",))
        self.assertEqual(state.ctx.turn, 1)
        # The input state is untouched
        self.assertEqual(self.initial.G, (None,) * 9)

    def test_out_of_turn_move_is_ignored(self):
        state = TicTacToe.reduce(self.initial, make_move("clickCell", 0, player_id="1"))
        self.assertIs(state, self.initial)

    def test_unknown_move_is_ignored(self):
        state = TicTacToe.reduce(self.initial, make_move("jump", player_id="0"))
        self.assertIs(state, self.initial)

    def test_victory(self):
        state = play_cells(self.initial, [0, 3, 1, 4, 2])
        self.assertEqual(state.ctx.gameover, GameOver(winner="0"))
        self.assertIs(state.gameover, state.ctx.gameover)
        self.assertTrue(state.ctx.is_over)
        self.assertFalse(self.initial.ctx.is_over)
        self.assertIsNone(self.initial.gameover)
        self.assertEqual(state.ctx.action_players, ())

    def test_draw(self):
        state = play_cells(self.initial, [0, 1, 2, 4, 3, 5, 7, 6, 8])
        self.assertEqual(state.ctx.gameover, GameOver(draw=True))

    def test_finished_game_never_changes(self):
        state = play_cells(self.initial, [0, 3, 1, 4, 2])
        after = TicTacToe.reduce(state, make_move("clickCell", 8, player_id="1"))
        self.assertIs(after, state)

    def test_callable(self):
        state = TicTacToe(self.initial, make_move("clickCell", 0, player_id="0"))
        self.assertEqual(state.G[0], "0")

    def test_moves_per_turn(self):
        game = Game(
            setup=lambda ctx: 0,
            moves={"add": lambda G, ctx, n: G + n},
            moves_per_turn=2,
        )
        state = game.initial_state()
        state = game.reduce(state, make_move("add", 1))
        self.assertEqual(state.ctx.current_player, "0")
        self.assertEqual(state.ctx.num_moves, 1)
        state = game.reduce(state, make_move("add", 2))
        self.assertEqual(state.G, 3)
        self.assertEqual(state.ctx.current_player, "1")
        self.assertEqual(state.ctx.num_moves, 0)

    def test_invalid_game_definition(self):
        with self.assertRaises(ConfigurationError):
            Game(setup=lambda ctx: None, moves={}, moves_per_turn=0)

    def test_as_reducer(self):
        self.assertEqual(as_reducer(TicTacToe), TicTacToe.reduce)
        fn = lambda state, action: state
        self.assertIs(create_game_reducer(fn), fn)
        with self.assertRaises(ConfigurationError):
            as_reducer(42)

    def test_enumerate_moves(self):
        state = play_cells(self.initial, [0, 4])
        actions = enumerate_moves(state.G, state.ctx, "0")
        self.assertEqual([a.args[0] for a in actions], [1, 2, 3, 5, 6, 7, 8])
        self.assertTrue(all(a.player_id == "0" for a in actions))

    def test_render_board(self):
        state = play_cells(self.initial, [0, 4])
        self.assertEqual(render_board(state.G), "X . .\n. O .\n. . .")


class TestRandom(unittest.TestCase):
    """Test the seedable random source."""

    def test_same_seed_same_sequence(self):
        a = Random("test")
        b = Random("test")
        self.assertEqual([a.next() for _ in range(5)], [b.next() for _ in range(5)])

    def test_different_seeds_differ(self):
        self.assertNotEqual(Random(1).next(), Random(2).next())

    def test_values_in_range(self):
        r = Random(0)
        for _ in range(1000):
            value = r.next()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_reseed(self):
        r = Random(7)
        first = [r.next() for _ in range(3)]
        r.reseed(7)
        self.assertEqual([r.next() for _ in range(3)], first)
        self.assertEqual(r.seed, 7)

    def test_state_snapshot(self):
        r = Random(3)
        r.next()
        snapshot = r.get_state()
        expected = [r.next() for _ in range(3)]
        r.set_state(snapshot)
        self.assertEqual([r.next() for _ in range(3)], expected)

    def test_random_index(self):
        r = Random(0)
        for _ in range(200):
            self.assertIn(r.random_index(3), (0, 1, 2))
        with self.assertRaises(ValueError):
            r.random_index(0)

    def test_shuffle(self):
        tiles = ["A", "B", "C", "D", "E"]
        result = Random(0).shuffle(tiles)
        self.assertEqual(sorted(result), tiles)
        self.assertEqual(tiles, ["A", "B", "C", "D", "E"])

    def test_number(self):
        a = Random("n")
        b = Random("n")
        value = a.number()
        self.assertTrue(0.0 <= value < 1.0)
        self.assertEqual(value, b.next())

    def test_die(self):
        r = Random(0)
        self.assertTrue(1 <= r.die() <= 6)
        rolls = r.die(20, 5)
        self.assertEqual(len(rolls), 5)
        self.assertTrue(all(1 <= roll <= 20 for roll in rolls))


if __name__ == "__main__":
    unittest.main()
