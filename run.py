#!/usr/bin/env python3
"""
run.py - Main entry point for ConnectN
"""

import argparse
import sys

from connectn.debug import debug, DebugLevel
from connectn.interfaces.cli import SimpleCLI
from connectn.utils import ROWS, COLS, CONNECT_N, GameConfig, GameMode


def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)


def handle_play(argv):
    """Hand the 'play' command over to the interactive CLI."""
    SimpleCLI().run(['play'] + argv)


def handle_simulate(args):
    """Play random-agent episodes in the gymnasium environment and report the tally."""
    from connectn.ai.env import ConnectNEnv
    from connectn.data.stats import GameStats

    configure_debug(args)
    config = GameConfig(args.rows, args.cols, args.connect)
    mode = GameMode.SINGLE_PLAYER if args.mode == 'single' else GameMode.TWO_PLAYER
    env = ConnectNEnv(config=config, mode=mode)
    stats = GameStats.load(args.stats_file) if args.stats_file else GameStats()

    total_reward = 0.0
    for episode in range(args.episodes):
        observation, info = env.reset(seed=None if args.seed is None else args.seed + episode)
        env.engine.join_game(stats)

        done = False
        while not done:
            action = env.np_random.choice(info['valid_moves'])
            observation, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            done = terminated or truncated

        if args.verbose:
            print(f"Episode {episode + 1}: {info['game_result']} after {info['moves_made']} moves")
            print(env.engine.render())
    env.close()

    print(f"Episodes: {args.episodes}, average reward: {total_reward / max(args.episodes, 1):.3f}")
    print(f"Wins: {stats.wins}, draws: {stats.draws}")
    if args.stats_file:
        stats.save(args.stats_file)
        print(f"Statistics saved to {args.stats_file}")


def main():
    """Main entry point for ConnectN."""
    parser = argparse.ArgumentParser(
        description='ConnectN game engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play Connect Four against the computer
    python run.py play

    # Two players on a 7x9 board, five in a row
    python run.py play --mode two --rows 7 --cols 9 --connect 5

    # Let a random agent play 100 games against the computer
    python run.py simulate --episodes 100 --stats-file data/stats.json
    """)
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('play', help='Play a game interactively (see play --help)', add_help=False)

    sim_parser = subparsers.add_parser('simulate', help='Run random-agent episodes')
    sim_parser.add_argument('--episodes', type=int, default=10, help='Number of episodes')
    sim_parser.add_argument('--rows', type=int, default=ROWS, help='Number of rows')
    sim_parser.add_argument('--cols', type=int, default=COLS, help='Number of columns')
    sim_parser.add_argument('--connect', type=int, default=CONNECT_N,
                            help='Tokens in a row needed to win')
    sim_parser.add_argument('--mode', choices=['single', 'two'], default='single',
                            help='Agent against the computer, or agent on both sides')
    sim_parser.add_argument('--seed', type=int, default=None, help='Base random seed')
    sim_parser.add_argument('--stats-file', type=str, default=None,
                            help='JSON file to load and save game statistics')
    sim_parser.add_argument('--verbose', action='store_true', help='Print every final board')
    sim_parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    sim_parser.add_argument('--debug-level', type=str, default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')

    args, remaining = parser.parse_known_args()

    if args.command == 'play':
        handle_play(remaining)
    elif args.command == 'simulate':
        if remaining:
            parser.error(f"unrecognized arguments: {' '.join(remaining)}")
        handle_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
