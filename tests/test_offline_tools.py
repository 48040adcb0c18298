import json

import pytest
from PIL import Image

from create_game_gifs import create_all_gifs, create_gif, get_session_name, get_tile_color, load_game_states, sample_states
from plot_scores_per_turn import load_game_log, plot_all_scores, plot_individual_scores

EMPTY_ROW = [None, None, None, None]


@pytest.fixture
def log_dir(tmp_path):
    directory = tmp_path / 'game_logs'
    directory.mkdir()
    game_log = [
        {"game_state": [[2, 2, None, None]] + [EMPTY_ROW] * 3, "action": "START", "current_score": 0},
        {"game_state": [[4, 2, 2, None]] + [EMPTY_ROW] * 3, "action": "LEFT", "current_score": 4},
        {"game_state": [[8, 2, None, None]] + [EMPTY_ROW] * 3, "action": "LEFT", "current_score": 12},
        {"final_score": 12, "game_end_reason": "quit", "total_moves": 2},
    ]
    (directory / 'game_log_session1.json').write_text(json.dumps(game_log))
    return directory


def test_get_session_name():
    assert get_session_name('game_log_morning.json') == 'morning'


def test_empty_cells_use_empty_tile_color():
    assert get_tile_color(None) == get_tile_color(0) == '#CDC1B4'
    assert get_tile_color(8192) == '#3C3A32'


def test_load_game_states_skips_final_stats(log_dir):
    states = load_game_states(log_dir / 'game_log_session1.json')
    assert [state['action'] for state in states] == ['START', 'LEFT', 'LEFT']
    assert [state['move_num'] for state in states] == [0, 1, 2]
    assert states[2]['score'] == 12


def test_sample_states_keeps_ends():
    states = list(range(10))
    assert sample_states(states, None) == states
    assert sample_states(states, 20) == states
    sampled = sample_states(states, 3)
    assert sampled[0] == 0 and sampled[-1] == 9 and len(sampled) == 3


def test_create_gif(log_dir, tmp_path):
    output_file = tmp_path / 'gifs' / 'game_session1.gif'
    assert create_gif(log_dir / 'game_log_session1.json', str(output_file), fps=4) == 3
    with Image.open(output_file) as gif:
        assert gif.format == 'GIF'
        assert gif.n_frames == 3


def test_create_gif_without_states(tmp_path):
    log_file = tmp_path / 'game_log_empty.json'
    log_file.write_text(json.dumps([{"final_score": 0, "game_end_reason": "quit", "total_moves": 0}]))
    assert create_gif(log_file, str(tmp_path / 'empty.gif')) == 0
    assert not (tmp_path / 'empty.gif').exists()


def test_create_all_gifs(log_dir, tmp_path):
    create_all_gifs(str(log_dir), str(tmp_path / 'gifs'), max_frames=2)
    with Image.open(tmp_path / 'gifs' / 'game_session1.gif') as gif:
        assert gif.n_frames == 2


def test_load_game_log(log_dir):
    assert load_game_log(log_dir / 'game_log_session1.json') == ([0, 1, 2], [0, 4, 12])


def test_plot_all_scores(log_dir, tmp_path):
    output_file = tmp_path / 'scores.png'
    assert plot_all_scores(str(log_dir), str(output_file)) == str(output_file)
    assert output_file.stat().st_size > 0


def test_plot_all_scores_without_logs(tmp_path):
    assert plot_all_scores(str(tmp_path), str(tmp_path / 'scores.png')) is None


def test_plot_individual_scores(log_dir, tmp_path):
    written = plot_individual_scores(str(log_dir), str(tmp_path / 'plots'))
    assert [path.rsplit('/', 1)[-1] for path in written] == ['score_progression_session1.png']
