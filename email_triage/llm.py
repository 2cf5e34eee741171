"""
Chat client shared by the triage agents.

Agents receive a client at construction instead of building their own, so a
fake with the same ``complete`` method can stand in during tests.
"""

from __future__ import annotations

import os
from typing import Optional, Protocol

from openai import OpenAI


class ChatClient(Protocol):
    def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        ...


def _make_client(api_key: Optional[str] = None, timeout: Optional[float] = None) -> OpenAI:
    key = api_key or os.getenv("OPENAI_API_KEY")
    if not key:
        raise RuntimeError("OPENAI_API_KEY not configured")
    if timeout is None:
        return OpenAI(api_key=key)
    return OpenAI(api_key=key, timeout=timeout)


class OpenAIChatClient:
    """ChatClient backed by the OpenAI chat completions API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: Optional[float] = None,
        max_tokens: int = 500,
    ):
        self.client = _make_client(api_key, timeout)
        self.model = model
        self.max_tokens = max_tokens

    def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=self.max_tokens,
        )

        content = response.choices[0].message.content
        if not content:
            raise RuntimeError("No content from OpenAI")
        return content
