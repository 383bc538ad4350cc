"""Text-generation client (Gemini ``generateContent`` REST endpoint)."""
from typing import Optional

import httpx

from cafe_pos.core.exceptions import InsightUnavailableError


class GeminiClient:
    """Sends one prompt, returns the generated text."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model = model
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def generate_text(self, prompt: str) -> str:
        """
        Generate text for a single-turn prompt.

        Raises:
            InsightUnavailableError: transport error, non-2xx status or a
                response without any text part
        """
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = await self._http.post(f"/models/{self.model}:generateContent", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise InsightUnavailableError(
                f"generateContent returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise InsightUnavailableError(f"generateContent failed: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts).strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise InsightUnavailableError("generateContent response has no candidates") from e

        if not text:
            raise InsightUnavailableError("generateContent returned empty text")
        return text
