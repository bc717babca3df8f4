#!/usr/bin/env python
"""
Command-line runner for bot matches.

This script plays tic-tac-toe between two agents (random or MCTS), either a
single game shown move by move, or a batch of games with a summary.

Example usage:
    # Watch MCTS play against itself, printing the top of each search tree
    python play_game.py --player0 mcts --player1 mcts --show-tree

    # Random vs MCTS over 20 games
    python play_game.py --player0 random --player1 mcts --games 20
"""
import argparse
import logging
import sys

from rich.console import Console

from turnbot_ai.agents import RandomAgent
from turnbot_ai.games.tic_tac_toe import TicTacToe, enumerate_moves, render_board
from turnbot_ai.mcts.agent import MCTSAgent
from turnbot_ai.mcts.debug import print_tree
from turnbot_ai.simulation import run_matches, step

console = Console()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play tic-tac-toe between bots.")
    parser.add_argument("--player0", choices=["random", "mcts"], default="mcts",
                        help="Agent for player 0 (moves first)")
    parser.add_argument("--player1", choices=["random", "mcts"], default="mcts",
                        help="Agent for player 1")
    parser.add_argument("--iterations", type=int, default=500,
                        help="Number of MCTS iterations per move")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None,
                        help="Base random seed (each player gets its own derived seed)")
    parser.add_argument("--show-tree", action="store_true",
                        help="Print the first level of each MCTS search tree")
    parser.add_argument("--verbose", action="store_true",
                        help="Log search statistics")
    return parser.parse_args(argv)


def create_agents(args, game_index: int = 0):
    agents = {}
    for player_id, kind in (("0", args.player0), ("1", args.player1)):
        seed = None
        if args.seed is not None:
            seed = f"{args.seed}-{game_index}-{player_id}"
        if kind == "mcts":
            agents[player_id] = MCTSAgent(
                TicTacToe, enumerate_moves, player_id,
                iterations=args.iterations, seed=seed, verbose=args.verbose,
            )
        else:
            agents[player_id] = RandomAgent(enumerate_moves, player_id, seed=seed)
    return agents


def play_single_game(args) -> None:
    agents = create_agents(args)
    state = TicTacToe.initial_state()

    while state.ctx.gameover is None and state.ctx.action_players:
        result = step(TicTacToe, agents, state)
        if result.stalled:
            console.print("[red]No legal moves, stopping.[/red]")
            break

        console.print(f"\nPlayer {result.player_id} ({agents[result.player_id]}) plays {result.action}")
        if args.show_tree and result.root is not None:
            print_tree(result.root, max_depth=1, console=console)
        console.print(render_board(result.state.G))
        state = result.state

    console.print(f"\n[bold]{state.ctx.gameover}[/bold]")


def play_many_games(args) -> None:
    summary = run_matches(
        TicTacToe,
        lambda i: create_agents(args, i),
        num_games=args.games,
        progress=True,
    )

    console.print("\n[bold]Results[/bold]")
    console.print(f"  Games: {summary.num_games}")
    for player_id in ("0", "1"):
        console.print(f"  Player {player_id} wins: {summary.wins[player_id]} "
                      f"({summary.win_rate(player_id):.0%})")
    console.print(f"  Draws: {summary.draws} ({summary.draw_rate:.0%})")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.games <= 1:
            play_single_game(args)
        else:
            play_many_games(args)
    except KeyboardInterrupt:
        console.print("\nInterrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
