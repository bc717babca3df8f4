#!/usr/bin/env python
"""
Tests for the simulation driver (step / simulate / run_matches).

The scenario tests at the bottom play complete tic-tac-toe games between
agents and check the outcomes perfect-enough play should produce.
"""
import unittest

from turnbot_ai.agents import RandomAgent
from turnbot_ai.core.errors import ConfigurationError
from turnbot_ai.core.state import make_move
from turnbot_ai.games.tic_tac_toe import TicTacToe, enumerate_moves
from turnbot_ai.mcts.agent import MCTSAgent
from turnbot_ai.mcts.node import SearchNode
from turnbot_ai.simulation import MatchSummary, get_agent, run_matches, simulate, step


def no_moves(G, ctx, player_id):
    return []


def random_agents(seed):
    return {
        "0": RandomAgent(enumerate_moves, "0", seed=f"{seed}-0"),
        "1": RandomAgent(enumerate_moves, "1", seed=f"{seed}-1"),
    }


def marks(state):
    return sum(1 for cell in state.G if cell is not None)


class TestStep(unittest.TestCase):

    def setUp(self):
        self.initial = TicTacToe.initial_state()

    def test_random_step(self):
        result = step(TicTacToe, random_agents(0), self.initial)
        self.assertEqual(marks(result.state), 1)
        self.assertIsNone(result.root)
        self.assertEqual(result.player_id, "0")
        self.assertEqual(result.action.player_id, "0")
        self.assertFalse(result.stalled)
        self.assertEqual(result.state.ctx.current_player, "1")

    def test_mcts_step_returns_tree(self):
        agents = {
            "0": MCTSAgent(TicTacToe, enumerate_moves, "0", iterations=50, seed=1),
            "1": RandomAgent(enumerate_moves, "1", seed=1),
        }
        result = step(TicTacToe, agents, self.initial)
        self.assertIsInstance(result.root, SearchNode)
        self.assertEqual(result.root.visit_count, 50)
        self.assertIs(result.root.state, self.initial)
        self.assertEqual(result.state.G[result.action.args[0]], "0")

    def test_step_is_idempotent_after_game_over(self):
        final = simulate(TicTacToe, random_agents(3), self.initial)
        self.assertIsNotNone(final.ctx.gameover)

        result = step(TicTacToe, random_agents(3), final)
        self.assertIs(result.state, final)
        self.assertIsNone(result.root)
        self.assertIsNone(result.action)
        self.assertIs(step(TicTacToe, random_agents(3), result.state).state, final)

    def test_step_with_plain_reducer(self):
        result = step(TicTacToe.reduce, random_agents(0), self.initial)
        self.assertEqual(marks(result.state), 1)

    def test_step_stalls_without_legal_moves(self):
        agents = {"0": RandomAgent(no_moves, "0"), "1": RandomAgent(no_moves, "1")}
        result = step(TicTacToe, agents, self.initial)
        self.assertTrue(result.stalled)
        self.assertIs(result.state, self.initial)
        self.assertIsNone(result.root)


class TestSimulate(unittest.TestCase):

    def setUp(self):
        self.initial = TicTacToe.initial_state()

    def test_runs_to_completion(self):
        final = simulate(TicTacToe, random_agents(0), self.initial)
        self.assertIsNotNone(final.ctx.gameover)
        self.assertEqual(final.ctx.action_players, ())

    def test_same_seeds_same_game(self):
        a = simulate(TicTacToe, random_agents(11), self.initial)
        b = simulate(TicTacToe, random_agents(11), self.initial)
        self.assertEqual(a, b)

    def test_step_limit(self):
        final = simulate(TicTacToe, random_agents(0), self.initial, max_steps=3)
        self.assertEqual(marks(final), 3)
        self.assertIsNone(final.ctx.gameover)

    def test_zero_step_limit(self):
        self.assertIs(simulate(TicTacToe, random_agents(0), self.initial, max_steps=0), self.initial)

    def test_negative_step_limit(self):
        with self.assertRaises(ConfigurationError):
            simulate(TicTacToe, random_agents(0), self.initial, max_steps=-1)

    def test_missing_agent(self):
        agents = {"0": RandomAgent(enumerate_moves, "0", seed=0)}
        with self.assertRaises(ConfigurationError):
            simulate(TicTacToe, agents, self.initial)

    def test_integer_keys(self):
        agents = {
            0: RandomAgent(enumerate_moves, 0, seed=0),
            1: RandomAgent(enumerate_moves, 1, seed=1),
        }
        self.assertIs(get_agent(agents, "1"), agents[1])
        final = simulate(TicTacToe, agents, self.initial)
        self.assertIsNotNone(final.ctx.gameover)

    def test_shared_agent(self):
        agent = RandomAgent(enumerate_moves, seed="shared")
        final = simulate(TicTacToe, agent, self.initial)
        self.assertIsNotNone(final.ctx.gameover)
        self.assertIn("1", final.G)

    def test_shared_mcts_agent(self):
        agent = MCTSAgent(TicTacToe, enumerate_moves, iterations=30, seed="shared")
        final = simulate(TicTacToe, agent, self.initial, max_steps=4)
        self.assertEqual(marks(final), 4)

    def test_degenerate_enumerator_is_a_no_op(self):
        for agents in (
            {"0": RandomAgent(no_moves, "0", seed=0), "1": RandomAgent(no_moves, "1", seed=0)},
            MCTSAgent(TicTacToe, no_moves, iterations=10, seed=0),
        ):
            final = simulate(TicTacToe, agents, self.initial)
            self.assertIs(final, self.initial)

    def test_finished_game_is_returned_unchanged(self):
        state = self.initial
        for cell in (0, 3, 1, 4, 2):
            state = TicTacToe.reduce(state, make_move("clickCell", cell))
        self.assertIsNotNone(state.ctx.gameover)
        self.assertIs(simulate(TicTacToe, random_agents(0), state), state)


class TestRunMatches(unittest.TestCase):

    def test_summary(self):
        summary = run_matches(TicTacToe, random_agents, num_games=6)
        self.assertIsInstance(summary, MatchSummary)
        self.assertEqual(summary.num_games, 6)
        self.assertEqual(sum(summary.wins.values()) + summary.draws + summary.unfinished, 6)
        self.assertEqual(summary.unfinished, 0)
        self.assertEqual(len(summary.final_states), 6)
        self.assertAlmostEqual(
            summary.win_rate("0") + summary.win_rate("1") + summary.draw_rate, 1.0
        )

    def test_unfinished_games(self):
        summary = run_matches(TicTacToe, random_agents, num_games=2, max_steps=2)
        self.assertEqual(summary.unfinished, 2)
        self.assertEqual(summary.to_dict()["unfinished"], 2)

    def test_invalid_game_count(self):
        with self.assertRaises(ConfigurationError):
            run_matches(TicTacToe, random_agents, num_games=0)


class TestScenarios(unittest.TestCase):
    """Full games between agents in tic-tac-toe, a solved draw."""

    def test_mcts_vs_mcts_draws(self):
        draws = 0
        for seed in range(5):
            agents = {
                "0": MCTSAgent(TicTacToe, enumerate_moves, "0", iterations=1000, seed=seed),
                "1": MCTSAgent(TicTacToe, enumerate_moves, "1", iterations=1000, seed=seed),
            }
            final = simulate(TicTacToe, agents, TicTacToe.initial_state())
            if final.ctx.gameover.draw:
                draws += 1
        self.assertGreaterEqual(draws, 4)

    def test_random_never_beats_mcts(self):
        for seed in range(5):
            agents = {
                "0": RandomAgent(enumerate_moves, "0", seed=f"random-{seed}"),
                "1": MCTSAgent(TicTacToe, enumerate_moves, "1", iterations=1000, seed=f"mcts-{seed}"),
            }
            final = simulate(TicTacToe, agents, TicTacToe.initial_state())
            self.assertIsNotNone(final.ctx.gameover)
            self.assertNotEqual(final.ctx.gameover.winner, "0")


if __name__ == "__main__":
    unittest.main()
