from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from englearn.config import get_settings
from englearn.utils.exceptions import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionRequest:
    """One prompt bound for the chat-completion endpoint."""

    model: str
    prompt: str
    system_prompt: Optional[str] = None
    max_tokens: int = 1000
    temperature: float = 0.7
    top_p: float = 1.0

    def to_messages(self) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append({"role": "user", "content": self.prompt})
        return messages

    def to_payload(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.to_messages(),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }


def _build_headers(api_key: str) -> Dict[str, str]:
    settings = get_settings()
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "X-Title": settings.app_title,
    }
    if settings.referer:
        headers["HTTP-Referer"] = settings.referer
    return headers


def _extract_content(resp_dict: Any) -> str:
    if not isinstance(resp_dict, dict):
        raise RuntimeError("response is not a JSON object")

    choices = resp_dict.get("choices")
    if not isinstance(choices, list) or len(choices) == 0:
        raise RuntimeError("no choices in response")

    msg = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(msg, dict):
        raise RuntimeError("no message in choice")

    content = msg.get("content")
    if not isinstance(content, str):
        raise RuntimeError("no content in message")
    return content


async def complete(
    request: CompletionRequest,
    *,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Send one chat completion and return the first choice's text.

    Exactly one HTTP request is made. Any failure is logged with its cause and
    re-raised as TransportFailure.
    """
    settings = get_settings()
    key = api_key or settings.openrouter_api_key
    if not key:
        logger.error("OPENROUTER_API_KEY not set; cannot call completion endpoint")
        raise TransportFailure(details={"cause": "OPENROUTER_API_KEY not set"})

    data = request.to_payload()
    logger.info(
        f"Calling completion endpoint with model: {request.model}, messages count: {len(data['messages'])}"
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Request data: {json.dumps(data, ensure_ascii=False)[:500]}")

    try:
        async with httpx.AsyncClient(timeout=settings.timeout, transport=transport) as client:
            resp = await client.post(settings.base_url, json=data, headers=_build_headers(key))
            resp.raise_for_status()
            resp_dict = resp.json()
        return _extract_content(resp_dict)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"Completion request failed with HTTP {status}: {e}")
        raise TransportFailure(status_code=status, details={"cause": str(e)}) from e
    except httpx.HTTPError as e:
        logger.error(f"Completion request failed: {e!r}")
        raise TransportFailure(details={"cause": repr(e)}) from e
    except (ValueError, RuntimeError) as e:
        logger.error(f"Unexpected completion response: {e}")
        raise TransportFailure(details={"cause": str(e)}) from e
