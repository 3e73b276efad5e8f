"""
Profanity filter HTTP client (APILayer "bad_words" API).

Used endpoint:
- POST /bad_words?censor_character=*  (raw text body, `apikey` header)
  -> {"content": "...", "bad_words_total": 1, "bad_words_list": [...],
      "censored_content": "..."}
  On failure the body is {"message": "..."}.

Failure classes:
- status >= 500          -> ServerError(status, message)
- 400 <= status < 500    -> ClientError(status, message)
- transport / bad body   -> ExternalAPIError(underlying)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from core import config
from core.errors import ClientError, ExternalAPIError, ServerError

logger = logging.getLogger(__name__)


def _normalize_base_url(base_url: str) -> str:
    return (base_url or "").strip().rstrip("/")


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        # Avoid dumping huge bodies; include a small snippet.
        return resp.text[:500]
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    if isinstance(data, str):
        return data
    return resp.text[:500]


@dataclass
class ModerationClient:
    base_url: str
    api_key: str
    censor_character: str = "*"
    timeout_s: float = 10.0
    enabled: bool = True
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_env(cls) -> "ModerationClient":
        return cls(
            base_url=config.moderation_base_url(),
            api_key=config.moderation_api_key(),
            censor_character=config.moderation_censor_character(),
            timeout_s=config.moderation_timeout_s(),
            enabled=config.moderation_enabled(),
        )

    async def censor(self, text: str) -> str:
        """
        Return `text` with profane words replaced by the censor character.
        """
        if not self.enabled:
            return text

        try:
            async with httpx.AsyncClient(
                base_url=_normalize_base_url(self.base_url),
                timeout=self.timeout_s,
                transport=self.transport,
            ) as client:
                resp = await client.post(
                    "/bad_words",
                    params={"censor_character": self.censor_character},
                    headers={"apikey": self.api_key},
                    content=text.encode("utf-8"),
                )
        except httpx.HTTPError as exc:
            logger.error("moderation_unreachable base_url=%s error=%s", self.base_url, exc)
            raise ExternalAPIError(exc) from exc

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("moderation_rejected status=%s message=%s", resp.status_code, message)
            if resp.status_code >= 500:
                raise ServerError(resp.status_code, message)
            raise ClientError(resp.status_code, message)

        try:
            data: dict[str, Any] = resp.json()
            censored = data["censored_content"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("moderation_bad_response status=%s error=%r", resp.status_code, exc)
            raise ExternalAPIError(exc) from exc
        if not isinstance(censored, str):
            raise ExternalAPIError(TypeError("censored_content is not a string"))

        logger.debug("moderation_ok bad_words_total=%s", data.get("bad_words_total"))
        return censored
