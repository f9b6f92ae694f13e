"""OpenAI chat-completions binding for the Model Invoker contract."""

from __future__ import annotations

from openai import AsyncOpenAI

from ..types import ModelOptions
from ._system import SYSTEM_PROMPT

__all__ = ["invoke_openai"]


async def invoke_openai(prompt: str, api_key: str, options: ModelOptions) -> str:
    """Send one prompt to OpenAI and return the trimmed reply text."""
    async with AsyncOpenAI(api_key=api_key) as client:
        response = await client.chat.completions.create(
            model=options.model_name,
            temperature=options.temperature,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
    content = response.choices[0].message.content
    return (content or "").strip()
