"""
Create animated GIFs from exported 2048 sessions.
Each logged board becomes one frame.
"""

import io
import json
import os
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from game_config import load_config
from game_logger import get_logger, setup_logging

logger = get_logger()

# Color scheme for tiles (similar to the original 2048 game)
TILE_COLORS = {
    0: '#CDC1B4',      # Empty
    2: '#EEE4DA',
    4: '#EDE0C8',
    8: '#F2B179',
    16: '#F59563',
    32: '#F67C5F',
    64: '#F65E3B',
    128: '#EDCF72',
    256: '#EDCC61',
    512: '#EDC850',
    1024: '#EDC53F',
    2048: '#EDC22E',
    4096: '#3C3A32',   # 4096+
}

TILE_TEXT_COLORS = {
    0: '#CDC1B4',
    2: '#776E65',
    4: '#776E65',
}
DEFAULT_TEXT_COLOR = '#F9F6F2'
BACKGROUND_COLOR = '#FAF8EF'


def get_tile_color(value):
    return TILE_COLORS.get(value or 0, TILE_COLORS[4096])


def get_text_color(value):
    return TILE_TEXT_COLORS.get(value or 0, DEFAULT_TEXT_COLOR)


def get_session_name(filename):
    """game_log_<session>.json -> <session>"""
    return filename.replace('game_log_', '').replace('.json', '')


def load_log_entries(log_file):
    with open(log_file, 'r') as f:
        return json.load(f)


def load_game_states(log_file):
    """
    Load the boards recorded in a game log.

    Args:
        log_file: Path to a game log JSON file

    Returns:
        List of dicts with 'state', 'score', 'action' and 'move_num' keys
    """
    states = []
    for i, entry in enumerate(load_log_entries(log_file)):
        if 'game_state' in entry:
            states.append({
                'state': entry['game_state'],
                'score': entry.get('current_score', 0),
                'action': entry.get('action', 'UNKNOWN'),
                'move_num': i,
            })
        elif 'final_score' in entry:
            break
    return states


def sample_states(states, max_frames):
    """Keep at most max_frames states, evenly spaced and including both ends."""
    if not max_frames or len(states) <= max_frames:
        return states
    indices = np.linspace(0, len(states) - 1, max_frames, dtype=int)
    return [states[i] for i in indices]


def render_game_state(game_state, score, move_num, action, ax):
    """Draw one board onto a matplotlib axis."""
    size = len(game_state)
    ax.clear()
    ax.set_xlim(0, size)
    ax.set_ylim(0, size)
    ax.set_aspect('equal')
    ax.axis('off')

    for i, row in enumerate(game_state):
        for j, value in enumerate(row):
            rect = mpatches.Rectangle((j, size - 1 - i), 1, 1,
                                      facecolor=get_tile_color(value),
                                      edgecolor='#BBADA0',
                                      linewidth=3)
            ax.add_patch(rect)

            if value:
                fontsize = 40 if value < 100 else (32 if value < 1000 else 24)
                ax.text(j + 0.5, size - 1 - i + 0.5, str(value),
                        ha='center', va='center',
                        fontsize=fontsize, fontweight='bold',
                        color=get_text_color(value))

    info_text = f"Move: {move_num} | Action: {action} | Score: {score}"
    ax.text(size / 2, -0.3, info_text, ha='center', va='top',
            fontsize=14, fontweight='bold', color='#776E65')


def render_frames(states):
    frames = []
    fig, ax = plt.subplots(figsize=(6, 6.5))
    try:
        for state_info in states:
            render_game_state(
                state_info['state'],
                state_info['score'],
                state_info['move_num'],
                state_info['action'],
                ax
            )
            buf = io.BytesIO()
            fig.savefig(buf, format='png', dpi=100,
                        facecolor=BACKGROUND_COLOR, edgecolor='none')
            buf.seek(0)
            frames.append(Image.open(buf).copy())
            buf.close()
    finally:
        plt.close(fig)
    return frames


def create_gif(log_file, output_file, fps=2, max_frames=None):
    """
    Render a game log as an animated GIF.

    Args:
        log_file: Path to a game log JSON file
        output_file: Where to write the GIF
        fps: Frames per second
        max_frames: Sample frames evenly down to this count

    Returns:
        Number of frames written (0 if the log has no boards)
    """
    states = sample_states(load_game_states(log_file), max_frames)
    if not states:
        logger.warning(f"No states found in {log_file}")
        return 0

    frames = render_frames(states)
    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    frames[0].save(
        output_file,
        save_all=True,
        append_images=frames[1:],
        duration=int(1000 / fps),
        loop=0
    )
    logger.info(f"Saved {output_file} ({len(frames)} frames)")
    return len(frames)


def create_all_gifs(log_dir='game_logs', output_dir='gifs', fps=2, max_frames=None):
    log_files = sorted(Path(log_dir).glob('game_log_*.json'))
    if not log_files:
        logger.warning(f"No game logs found in {log_dir}")
        return

    logger.info(f"Found {len(log_files)} game logs, creating GIFs at {fps} FPS")
    for log_file in log_files:
        session = get_session_name(log_file.name)
        output_file = os.path.join(output_dir, f'game_{session}.gif')
        try:
            create_gif(log_file, output_file, fps, max_frames)
        except (OSError, ValueError) as e:
            logger.error(f"Error creating GIF for {session}: {e}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Create animated GIFs of 2048 sessions')
    parser.add_argument('--log_dir', type=str, default='game_logs',
                        help='Directory containing game_log_*.json files')
    parser.add_argument('--output_dir', type=str, default='gifs',
                        help='Directory to save GIFs')
    parser.add_argument('--fps', type=int, default=2,
                        help='Frames per second for GIF animation')
    parser.add_argument('--max_frames', type=int, default=None,
                        help='Maximum number of frames per GIF (samples evenly if exceeded)')
    parser.add_argument('--session', type=str, default=None,
                        help='Create GIF for one session only')
    parser.add_argument('--sample', action='store_true',
                        help='Limit each GIF to 20 evenly spaced frames')

    args = parser.parse_args()
    setup_logging(load_config())

    max_frames = 20 if args.sample else args.max_frames
    if args.session:
        log_file = Path(args.log_dir) / f'game_log_{args.session}.json'
        if log_file.exists():
            create_gif(log_file, os.path.join(args.output_dir, f'game_{args.session}.gif'), args.fps, max_frames)
        else:
            logger.error(f"Log file not found: {log_file}")
    else:
        create_all_gifs(args.log_dir, args.output_dir, args.fps, max_frames)
