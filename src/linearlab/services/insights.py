"""
AI Insight Service
==================
Asks a language model to explain the current transformation in plain words.

One request, one response: no retries, no streaming. Every failure (missing
key, network, malformed answer) is logged and reported as "no insight".
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

import anthropic

from linearlab.config import INSIGHT_MAX_TOKENS, INSIGHT_MODEL, API_KEY_ENV, get_api_key
from linearlab.model.types import Insight, Matrix, Vector

logger = logging.getLogger(__name__)


def format_vector(v: Vector) -> str:
    """e.g. 'u(1, 2)' or 'w(1, 1, 0)'"""
    return f"{v.label}({', '.join(f'{c:g}' for c in v.coords())})"


def build_prompt(matrix: Matrix, vectors: Sequence[Vector]) -> str:
    matrix_str = json.dumps([list(row) for row in matrix])
    vectors_str = ", ".join(format_vector(v) for v in vectors)

    return f"""Analyze the linear transformation represented by the matrix {matrix_str}.
The current vectors in the space are: {vectors_str}.
Explain what this transformation does geometrically (rotation, scaling, shear, projection, etc.).
Calculate the determinant and explain its meaning regarding volume/area change.
If it's 3D, mention the orientation.
Format the response as a clear educational summary for a student.

Respond with ONLY a JSON object, no other text, with exactly these keys:
{{"title": "<short title>", "explanation": "<a paragraph>", "mathDetails": ["<short fact>", "..."]}}"""


def parse_insight(text: str) -> Optional[Insight]:
    """
    Turn the model answer into an Insight.

    Accepts the bare JSON object or one wrapped in a Markdown code fence.
    Returns None if the answer is not an object with a string `title`,
    a string `explanation` and a list of strings `mathDetails`.
    """
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        text = "\n".join(lines[1:-1]) if lines[-1].strip().startswith("```") else "\n".join(lines[1:])

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Insight response is not valid JSON: {e}")
        return None

    if not isinstance(data, dict):
        logger.error("Insight response is not a JSON object.")
        return None

    title = data.get("title")
    explanation = data.get("explanation")
    details = data.get("mathDetails")
    if not isinstance(title, str) or not isinstance(explanation, str):
        logger.error("Insight response is missing 'title' or 'explanation'.")
        return None
    if not isinstance(details, list) or not all(isinstance(d, str) for d in details):
        logger.error("Insight response 'mathDetails' is not a list of strings.")
        return None

    return Insight.from_dict(data)


def request_insight(
    matrix: Matrix,
    vectors: Sequence[Vector],
    client: Optional[anthropic.Anthropic] = None,
) -> Optional[Insight]:
    """
    Send one insight request for the given scene.

    Args:
        matrix: The active 2x2 or 3x3 matrix.
        vectors: The vectors currently in the space.
        client: Messages API client; built from the environment key when omitted.

    Returns:
        The Insight, or None when anything went wrong.
    """
    try:
        if client is None:
            api_key = get_api_key()
            if not api_key:
                logger.error(f"{API_KEY_ENV} not set, no insight available.")
                return None
            client = anthropic.Anthropic(api_key=api_key)

        logger.info(f"Requesting insight for {len(matrix)}x{len(matrix)} matrix from {INSIGHT_MODEL}.")
        message = client.messages.create(
            model=INSIGHT_MODEL,
            max_tokens=INSIGHT_MAX_TOKENS,
            messages=[{"role": "user", "content": build_prompt(matrix, vectors)}],
        )

        text = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
        if not text:
            logger.error("Insight response was empty.")
            return None

        return parse_insight(text)

    except Exception as e:
        logger.error(f"Insight request failed: {e}")
        return None
