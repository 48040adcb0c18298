"""
LLM Move Suggestions for 2048
Forwards a text description of the game to an OpenAI-compatible chat endpoint
and logs the suggested move.
"""

import asyncio
import re
from typing import Optional

import openai
from openai import AsyncOpenAI

from game_config import load_config
from game_logger import get_logger

logger = get_logger()

RULES_PROMPT = """You are advising a player of the game of 2048. Here are the rules:

2048 is played on a plain 4×4 grid, with numbered tiles that slide in four directions: UP, DOWN, LEFT and RIGHT. Tiles slide as far as possible in the chosen direction until they are stopped by either another tile or the edge of the grid. If two tiles of the same number collide while moving, they will merge into a tile with the total value of the two tiles that collided. The resulting tile cannot merge with another tile again in the same move. The score grows by the value of every merged tile.

In this version several new tiles (2 or 4) appear in random empty cells after every move, so empty space disappears quickly. Empty cells are shown as blanks.

You may think for as long as you like, but then you need to say on a separate from your reasoning line:

FINAL_RESPONSE: <direction of the shift in uppercase>

Example of the response:

I think, I should shift everything to the right.

FINAL_RESPONSE: RIGHT"""


def parse_direction(text: Optional[str]) -> Optional[str]:
    """
    Extract the suggested direction from an LLM reply.

    Args:
        text: Reply text, possibly None

    Returns:
        'up', 'down', 'left' or 'right', or None if no FINAL_RESPONSE line is found
    """
    if not text:
        return None
    match = re.search(r'FINAL_RESPONSE:\s*(UP|DOWN|LEFT|RIGHT)', text, re.IGNORECASE)
    return match.group(1).lower() if match else None


class SuggestionError(Exception):
    """A suggestion request failed, timed out or was superseded."""


class SuggestionBridge:
    """
    Sends suggestion prompts to the configured model.

    At most one request is outstanding per bridge: starting a new one cancels
    the previous request, whose caller then gets a SuggestionError.
    """

    def __init__(self, base_url=None, model=None, api_key=None, timeout=None, client=None, config=None):
        config = config if config is not None else load_config()
        self.base_url = base_url or config['AI_URL']
        self.model = model or config['AI_MODEL']
        self.api_key = api_key or config['AI_API_KEY']
        self.timeout = timeout or config['AI_TIMEOUT']
        self._client = client
        self._pending: Optional[asyncio.Future] = None

    @property
    def client(self):
        # Created on first use so building a bridge never needs the network
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def _request(self, question: str) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": f"{RULES_PROMPT}\n\n{question}"}],
            temperature=0.7,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def suggest_move(self, question: str) -> None:
        previous = self._pending
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.ensure_future(self._request(question))
        self._pending = task
        try:
            message = await task
        except asyncio.CancelledError as e:
            if self._pending is not task:
                logger.error('AI suggestion cancelled by a newer request')
                raise SuggestionError('Suggestion request was superseded by a newer one') from e
            raise
        except openai.OpenAIError as e:
            logger.error(f"Failed to get AI suggestion: {e}")
            raise SuggestionError(f"Failed to get AI suggestion: {e}") from e
        finally:
            if self._pending is task:
                self._pending = None

        if not message:
            logger.debug('AI Suggest Move Response received but no data found')
            return

        logger.info('AI Suggest Move Response:')
        logger.info(message)
        direction = parse_direction(message)
        if direction:
            logger.info(f"Suggested move: {direction.upper()}")
