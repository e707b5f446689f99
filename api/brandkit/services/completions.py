"""Chat completions client for the generation service.

Speaks the OpenAI-compatible ``/chat/completions`` protocol over one shared
``httpx.AsyncClient``. One call per request; failures are not retried.
"""

import httpx
import logging
from typing import Any, Dict, List, Optional

from ..models.exceptions import GenerationCallError

logger = logging.getLogger(__name__)


def _headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _extract_message_text(response: Dict[str, Any]) -> str:
    """Extract text content from a chat completions response."""
    try:
        choices = response.get("choices", [])
        if not choices:
            return ""
        msg = choices[0].get("message", {}) or {}
        content = msg.get("content", "")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = [p.get("text", "") for p in content if isinstance(p, dict) and "text" in p]
            return "\n".join([p for p in parts if p])
        return ""
    except (AttributeError, TypeError):
        return ""


class CompletionsClient:
    def __init__(self,
                 api_key: str,
                 base_url: str = "https://api.openai.com/v1",
                 timeout: float = 60.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout, headers=_headers(api_key))
        if http_client is not None:
            self._client.headers.update(_headers(api_key))

    async def complete(self,
                       messages: List[Dict[str, str]],
                       model: str,
                       temperature: float,
                       max_tokens: int) -> str:
        """Run one completion and return the raw assistant text."""
        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        logger.debug(f"Completion request: model={model}, max_tokens={max_tokens}")
        try:
            resp = await self._client.post(f"{self.base_url}/chat/completions", json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                f"Completion API error {status}",
                extra={"model": model, "upstream_status": status, "upstream_body": e.response.text[:500]},
            )
            raise GenerationCallError(upstream_status=status, model=model) from e
        except httpx.TimeoutException as e:
            logger.error("Completion API request timed out", extra={"model": model})
            raise GenerationCallError(model=model, details={"reason": "timeout"}) from e
        except httpx.HTTPError as e:
            logger.error(f"Completion API request failed: {e}", extra={"model": model})
            raise GenerationCallError(model=model, details={"reason": type(e).__name__}) from e
        except ValueError as e:
            # Provider answered 2xx with a non-JSON envelope
            logger.error("Completion API returned an unreadable envelope", extra={"model": model})
            raise GenerationCallError(model=model, details={"reason": "invalid_envelope"}) from e

        if not isinstance(data, dict):
            raise GenerationCallError(model=model, details={"reason": "invalid_envelope"})

        usage = data.get("usage") or {}
        logger.info(
            f"Completion call successful using {model}",
            extra={"model": model, "total_tokens": usage.get("total_tokens")},
        )
        return _extract_message_text(data)

    async def health_check(self) -> bool:
        """Check that the completions endpoint accepts our credential."""
        try:
            response = await self._client.get(f"{self.base_url}/models", timeout=10.0)
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"Completions health check failed: {e}")
            return False

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
