import logging

import pytest

from game_logger import LOGGER_NAME


class ScriptedRandom:
    """Returns queued values from random(), then a fixed default."""

    def __init__(self, values=(), default=0.0):
        self.values = list(values)
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default


class FakeBridge:
    """Records suggestion prompts instead of calling a model."""

    def __init__(self, error=None):
        self.questions = []
        self.error = error

    async def suggest_move(self, question):
        self.questions.append(question)
        if self.error is not None:
            raise self.error


def clear_board(board):
    for row in range(board.size):
        for col in range(board.size):
            board.set_cell(row, col, None)


def fill_board(board, rows):
    for row, values in enumerate(rows):
        for col, value in enumerate(values):
            board.set_cell(row, col, value)


def distinct_rows():
    """A full board where no two neighbours match."""
    return [[2 ** (row * 4 + col + 1) for col in range(4)] for row in range(4)]


@pytest.fixture(autouse=True)
def reset_game_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
