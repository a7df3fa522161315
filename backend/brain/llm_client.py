"""Model providers — OpenAI-style chat completions over httpx, or Claude via the Anthropic SDK."""
from __future__ import annotations

import logging
import time
from typing import Literal

import anthropic
import httpx
from pydantic import BaseModel

from brain.exceptions import ModelCallError
from server import config

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    name: str
    label: str
    kind: Literal["openai", "anthropic"] = "openai"
    api_key: str = ""
    endpoint: str = ""
    model: str = ""

    @property
    def is_configured(self) -> bool:
        if self.kind == "anthropic":
            return bool(self.api_key and self.model)
        return bool(self.api_key and self.endpoint and self.model)


def resolve_provider(name: str | None) -> ProviderConfig:
    """Map a provider name from the request to its settings.

    Settings are read from server.config on every call. Unknown names fall
    back to Volcengine (doubao).
    """
    name = (name or config.DEFAULT_PROVIDER or "doubao").strip().lower()
    if name == "deepseek":
        return ProviderConfig(
            name="deepseek",
            label="DEEPSEEK",
            api_key=config.DEEPSEEK_API_KEY,
            endpoint=config.DEEPSEEK_ENDPOINT or "https://api.deepseek.com/v1/chat/completions",
            model=config.DEEPSEEK_MODEL,
        )
    if name == "claude":
        return ProviderConfig(
            name="claude",
            label="ANTHROPIC",
            kind="anthropic",
            api_key=config.ANTHROPIC_API_KEY,
            endpoint="https://api.anthropic.com",
            model=config.ANTHROPIC_MODEL,
        )
    return ProviderConfig(
        name="doubao",
        label="VOLC",
        api_key=config.VOLC_API_KEY,
        endpoint=config.VOLC_ENDPOINT,
        model=config.VOLC_MODEL,
    )


def extract_completion_text(data) -> str:
    """Pull the answer text out of a chat-completions payload.

    Some gateways wrap the payload in an extra "data" object, and older
    completion endpoints put the answer in choices[0].text.
    """
    if not isinstance(data, dict):
        return ""

    def first_choice(payload) -> dict:
        choices = payload.get("choices") if isinstance(payload, dict) else None
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            return choices[0]
        return {}

    first = first_choice(data)
    message = first.get("message") if isinstance(first.get("message"), dict) else {}
    wrapped = first_choice(data.get("data"))
    wrapped_message = wrapped.get("message") if isinstance(wrapped.get("message"), dict) else {}

    for candidate in (message.get("content"), first.get("text"), wrapped_message.get("content")):
        if isinstance(candidate, str) and candidate:
            return candidate
    return ""


async def _call_chat_completions(provider: ProviderConfig, messages: list[dict]) -> str:
    payload = {
        "model": provider.model,
        "messages": messages,
        "temperature": config.MODEL_TEMPERATURE,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {provider.api_key}",
    }

    try:
        async with httpx.AsyncClient(timeout=config.MODEL_TIMEOUT_SECONDS) as client:
            response = await client.post(provider.endpoint, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        try:
            detail = e.response.json()
        except ValueError:
            detail = e.response.text[:2000]
        logger.error(f"{provider.label} HTTP error {e.response.status_code}: {detail}")
        raise ModelCallError(detail) from e
    except httpx.TimeoutException as e:
        logger.error(f"{provider.label} request timed out after {config.MODEL_TIMEOUT_SECONDS}s")
        raise ModelCallError(f"timeout after {config.MODEL_TIMEOUT_SECONDS}s") from e
    except httpx.RequestError as e:
        logger.error(f"{provider.label} request failed: {e}")
        raise ModelCallError(str(e) or type(e).__name__) from e
    except ValueError as e:
        logger.error(f"{provider.label} returned a non-JSON body: {e}")
        raise ModelCallError("invalid JSON from model endpoint") from e

    return extract_completion_text(data)


async def _call_anthropic(provider: ProviderConfig, messages: list[dict]) -> str:
    system = "\n".join(m["content"] for m in messages if m["role"] == "system")
    chat = [m for m in messages if m["role"] != "system"]

    try:
        async with anthropic.AsyncAnthropic(
            api_key=provider.api_key, timeout=config.MODEL_TIMEOUT_SECONDS
        ) as client:
            message = await client.messages.create(
                model=provider.model,
                max_tokens=config.MODEL_MAX_TOKENS,
                system=system,
                messages=chat,
                temperature=config.MODEL_TEMPERATURE,
            )
    except anthropic.APIStatusError as e:
        detail = e.body if e.body is not None else e.message
        logger.error(f"Claude HTTP error {e.status_code}: {detail}")
        raise ModelCallError(detail) from e
    except anthropic.APIError as e:
        logger.error(f"Claude request failed: {type(e).__name__}: {e}")
        raise ModelCallError(str(e)) from e

    for block in message.content:
        if getattr(block, "type", None) == "text":
            return block.text
    return ""


async def call_model(provider: ProviderConfig, messages: list[dict]) -> str:
    """Send chat messages to the provider and return the raw answer text.

    Raises:
        ModelCallError: transport failure, non-2xx answer, or SDK error.
    """
    start_time = time.time()
    prompt_chars = sum(len(m["content"]) for m in messages)
    logger.info(f"Calling {provider.name} ({provider.model}) — prompt length {prompt_chars} chars")

    if provider.kind == "anthropic":
        content = await _call_anthropic(provider, messages)
    else:
        content = await _call_chat_completions(provider, messages)

    logger.info(
        f"{provider.name} answered {len(content)} chars in {time.time() - start_time:.2f}s"
    )
    return content
