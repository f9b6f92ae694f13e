"""Gemini binding for the Model Invoker contract (google-genai SDK)."""

from __future__ import annotations

from google import genai
from google.genai import types as genai_types

from ..types import ModelOptions
from ._system import SYSTEM_PROMPT

__all__ = ["invoke_gemini"]


async def invoke_gemini(prompt: str, api_key: str, options: ModelOptions) -> str:
    """Send one prompt to Gemini and return the trimmed reply text."""
    async with genai.Client(api_key=api_key).aio as client:
        response = await client.models.generate_content(
            model=options.model_name,
            contents=prompt,
            config=genai_types.GenerateContentConfig(
                system_instruction=SYSTEM_PROMPT,
                temperature=options.temperature,
            ),
        )
    return (response.text or "").strip()
