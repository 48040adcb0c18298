"""
Interactive 2048 Game
Reads commands from the terminal, plays them on a Board and can ask an LLM
for a move suggestion.
"""

import argparse
import asyncio
import json
import os
import random
import sys

from game_2048 import Board
from game_config import load_config
from game_logger import get_logger, setup_logging, success
from llm_suggest import SuggestionBridge

logger = get_logger()

MOVE_COMMANDS = {
    'up': 'up', 'w': 'up',
    'down': 'down', 's': 'down',
    'left': 'left', 'a': 'left',
    'right': 'right', 'd': 'right',
}
QUIT_COMMANDS = ('quit', 'exit', 'q')

HELP_LINES = [
    '  up/w         - Move up',
    '  down/s       - Move down',
    '  left/a       - Move left',
    '  right/d      - Move right',
    '  ai-move/ai   - ask AI for move',
    '  reset/r      - Reset game',
    '  display/show - Show board',
    '  help/h       - Show this help',
    '  quit/q       - Exit game',
]


def main_prompt(is_game_over: bool) -> None:
    """Print the command summary; move hints are hidden once the game is over."""
    if not is_game_over:
        logger.info('Enter your move (type up or w, down or s, left or a, right or d).')
    logger.info('Type reset or r to reset the game.')
    if not is_game_over:
        logger.info('Type ai-move or ai to ask AI for a move suggestion.')
        logger.info('Type help or h to display this help message.')
    logger.info('Type quit or q to exit.')
    logger.info('Then press Enter to submit your command.')


def build_game_log(board: Board, game_end_reason=None) -> list:
    """
    Convert the board's move history into a JSON-friendly game log.

    Args:
        board: Board whose history is exported
        game_end_reason: When given, a final statistics entry is appended

    Returns:
        List of log entries
    """
    history = board.get_move_history()
    game_log = [
        {
            "game_state": [row[:] for row in move['game_board']],
            "action": move['direction'].upper(),
            "current_score": move['score'],
        }
        for move in history
    ]
    if game_end_reason is not None:
        game_log.append({
            "final_score": board.get_score(),
            "game_end_reason": game_end_reason,
            "total_moves": sum(1 for move in history if move['direction'] != 'start'),
        })
    return game_log


def save_game_log(board: Board, log_file: str, game_end_reason=None) -> None:
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    with open(log_file, 'w') as f:
        json.dump(build_game_log(board, game_end_reason), f, indent=2)


def run_game(board: Board, read=input, log_file=None, run_async=asyncio.run) -> int:
    """
    Run the command loop until the player quits or input ends.

    Args:
        board: Board to play on; the 'start' history entry is recorded here
        read: Callable returning the next raw command line
        log_file: Optional path for a JSON game log, rewritten after every move
        run_async: Runs the suggestion coroutine to completion

    Returns:
        Final score
    """
    logger.info('Game 2048 Loaded!')
    board.collect_move_history('start')
    board.display()

    game_end_reason = 'quit'
    while True:
        try:
            main_prompt(board.is_game_over())
            try:
                raw = read('> ')
            except EOFError:
                game_end_reason = 'end_of_input'
                break
            command = raw.strip().lower()

            if command in MOVE_COMMANDS:
                direction = MOVE_COMMANDS[command]
                board.move(direction)
                board.collect_move_history(direction)
                board.display()
                if log_file:
                    save_game_log(board, log_file)
            elif command in ('ai', 'ai-move'):
                logger.info('Requesting AI for move suggestion...')
                try:
                    run_async(board.suggest_ai_move())
                    logger.info('AI suggestion completed.')
                    board.display()
                except Exception as e:
                    logger.error(f"Error in AI suggestion: {e}")
            elif command in ('reset', 'r'):
                logger.info('Resetting game...')
                board.reset()
                board.display()
            elif command in ('display', 'show'):
                board.display()
            elif command in QUIT_COMMANDS:
                logger.info('Thanks for playing! Goodbye!')
                break
            elif command in ('help', 'h'):
                logger.info('Available commands:')
                for line in HELP_LINES:
                    logger.info(line)
            else:
                logger.info(f'Unknown command: "{command}". Type "help" for available commands.')
                board.display()

            if board.is_game_over():
                logger.info('Game Over! No more moves available.')
                logger.info(f"Your final score: {board.get_score()}")
                logger.info('Please reset the game to play again or type "quit" to exit.')
        except Exception as e:
            logger.error(f"Error reading input: {e}")
            board.display()

    if log_file:
        save_game_log(board, log_file, game_end_reason)
        success(logger, f"Game log saved to: {log_file}")
    return board.get_score()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Play the Game 2048')
    parser.add_argument('--base_url', type=str, default=None, help='Base URL of the suggestion API (overrides AI_URL)')
    parser.add_argument('--model_name', type=str, default=None, help='Name of the model (overrides AI_MODEL)')
    parser.add_argument('--api_key', type=str, default=None, help='API key (overrides AI_API_KEY)')
    parser.add_argument('--log_file', type=str, default=None, help='Write the session as a JSON game log')
    parser.add_argument('--seed', type=int, default=None, help='Seed for deterministic tile spawns')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config()
    setup_logging(config)

    logger.info('Starting Game 2048...')
    # Suggestions share one loop so the bridge's HTTP client outlives each call
    loop = asyncio.new_event_loop()
    try:
        bridge = SuggestionBridge(
            base_url=args.base_url,
            model=args.model_name,
            api_key=args.api_key,
            config=config,
        )
        rng = random.Random(args.seed) if args.seed is not None else None
        board = Board(rng=rng, ai_helper=bridge)
        run_game(board, log_file=args.log_file, run_async=loop.run_until_complete)
    except KeyboardInterrupt:
        logger.debug('Received SIGINT (Ctrl+C)')
        return 0
    except Exception as e:
        logger.exception(f"Game2048 failed: {e}")
        return 1
    finally:
        loop.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
