"""
Plot scores per move for exported 2048 sessions.
Reads game logs written by play_2048.py --log_file.
"""

import os
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from create_game_gifs import get_session_name, load_log_entries
from game_config import load_config
from game_logger import get_logger, setup_logging

logger = get_logger()


def load_game_log(log_file):
    """
    Extract the score after each recorded move.

    Args:
        log_file: Path to a game log JSON file

    Returns:
        Tuple of (move numbers, scores); the final stats entry is skipped
    """
    scores = []
    moves = []
    for i, entry in enumerate(load_log_entries(log_file)):
        if 'current_score' in entry:
            scores.append(entry['current_score'])
            moves.append(i)
        elif 'final_score' in entry:
            break
    return moves, scores


def load_all_logs(log_dir):
    session_data = {}
    for log_file in sorted(Path(log_dir).glob('game_log_*.json')):
        session = get_session_name(log_file.name)
        try:
            moves, scores = load_game_log(log_file)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading {log_file}: {e}")
            continue
        session_data[session] = (moves, scores)
        logger.info(f"Loaded {session}: {len(moves)} moves, final score {scores[-1] if scores else 0}")
    return session_data


def plot_all_scores(log_dir='game_logs', output_file='scores_per_turn.png'):
    """Plot every session's score progression on one chart."""
    session_data = load_all_logs(log_dir)
    if not session_data:
        logger.warning('No game logs found!')
        return None

    fig, ax = plt.subplots(figsize=(14, 8))
    for session, (moves, scores) in sorted(session_data.items()):
        ax.plot(moves, scores, marker='o', markersize=2, linewidth=1.5, label=session, alpha=0.8)

    ax.set_xlabel('Move Number', fontsize=12)
    ax.set_ylabel('Score', fontsize=12)
    ax.set_title('2048 Score Progression by Session', fontsize=14, fontweight='bold')
    ax.legend(bbox_to_anchor=(1.05, 1), loc='upper left', fontsize=9)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"Plot saved to {output_file}")
    return output_file


def plot_individual_scores(log_dir='game_logs', output_dir='plots'):
    """Write one chart per session. Returns the list of files written."""
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for session, (moves, scores) in sorted(load_all_logs(log_dir).items()):
        fig, ax = plt.subplots(figsize=(10, 6))
        ax.plot(moves, scores, marker='o', markersize=3, linewidth=2, color='#2E86AB')
        ax.fill_between(moves, scores, alpha=0.3, color='#2E86AB')

        ax.set_xlabel('Move Number', fontsize=12)
        ax.set_ylabel('Score', fontsize=12)
        ax.set_title(f'Score Progression: {session}', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        output_file = os.path.join(output_dir, f'score_progression_{session}.png')
        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved {output_file}")
        written.append(output_file)
    return written


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Plot 2048 game scores per move')
    parser.add_argument('--log_dir', type=str, default='game_logs',
                        help='Directory containing game_log_*.json files')
    parser.add_argument('--output', type=str, default='scores_per_turn.png',
                        help='Output filename for combined plot')
    parser.add_argument('--individual', action='store_true',
                        help='Also create one plot per session')
    parser.add_argument('--individual_dir', type=str, default='plots',
                        help='Directory for individual plots')

    args = parser.parse_args()
    setup_logging(load_config())

    plot_all_scores(args.log_dir, args.output)
    if args.individual:
        plot_individual_scores(args.log_dir, args.individual_dir)
