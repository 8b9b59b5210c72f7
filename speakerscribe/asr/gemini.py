"""
GeminiTranscriptionClient: speaker-labelled transcription via Gemini generateContent.

Sends the audio as inline base64 data plus a fixed instruction prompt.
Single shot: one HTTP request, no retry, no client-side timeout unless configured.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from speakerscribe.asr.base import TranscriptionClient
from speakerscribe.config import get_settings
from speakerscribe.errors import TranscriptionAPIError

logger = logging.getLogger(__name__)


def _build_payload(base64_audio: str, mime_type: str, prompt: str) -> dict[str, Any]:
    """Request body: audio part first, instruction second."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"inlineData": {"mimeType": mime_type, "data": base64_audio}},
                    {"text": prompt},
                ],
            }
        ]
    }


def _error_detail(resp: httpx.Response) -> str:
    """Best-effort message from a Gemini error body: {"error": {"message": ...}}."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason_phrase
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return resp.reason_phrase


def _extract_text(data: Any) -> str:
    """
    Concatenate text parts of the first candidate. Empty string if there are none.
    Raises TranscriptionAPIError when the body does not have the generateContent shape.
    """
    if not isinstance(data, dict):
        raise TranscriptionAPIError("Gemini API returned an unexpected response")
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise TranscriptionAPIError("Gemini API returned an unexpected response")
    if not candidates:
        return ""
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        raise TranscriptionAPIError("Gemini API returned an unexpected response")
    content = candidate.get("content")
    if content is None:
        # Candidate without content (e.g. finishReason=SAFETY)
        return ""
    if not isinstance(content, dict):
        raise TranscriptionAPIError("Gemini API returned an unexpected response")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise TranscriptionAPIError("Gemini API returned an unexpected response")
    texts = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text", "")
        if not isinstance(text, str):
            raise TranscriptionAPIError("Gemini API returned an unexpected response")
        texts.append(text)
    return "".join(texts)


class GeminiTranscriptionClient(TranscriptionClient):
    """
    Remote transcription via the Gemini REST API.
    transport is only for tests (httpx.MockTransport); production uses the default.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        api_base: str | None = None,
        prompt: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = (api_key if api_key is not None else settings.GEMINI_API_KEY).strip()
        self._model = model or settings.GEMINI_MODEL
        self._api_base = (api_base or settings.GEMINI_API_BASE).rstrip("/")
        self._prompt = prompt or settings.TRANSCRIBE_PROMPT
        self._timeout = timeout if timeout is not None else settings.TRANSCRIBE_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    @property
    def url(self) -> str:
        return f"{self._api_base}/models/{self._model}:generateContent"

    async def transcribe(self, base64_audio: str, mime_type: str) -> str:
        """POST audio + prompt; return raw text. Raises TranscriptionAPIError on any failure."""
        if not self._api_key:
            raise TranscriptionAPIError("GEMINI_API_KEY is not configured")

        payload = _build_payload(base64_audio, mime_type, self._prompt)
        headers = {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}
        logger.info(
            "Gemini transcription request: model=%s mime=%s payload_chars=%d",
            self._model,
            mime_type,
            len(base64_audio),
        )
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Gemini request failed: %s", e)
            raise TranscriptionAPIError(f"Gemini API call failed: {e}") from e

        if resp.status_code != 200:
            detail = _error_detail(resp)
            logger.warning("Gemini returned %s: %s", resp.status_code, detail)
            raise TranscriptionAPIError(f"Gemini API call failed ({resp.status_code}): {detail}")

        try:
            data = resp.json()
        except ValueError as e:
            raise TranscriptionAPIError("Gemini API returned a non-JSON response") from e

        text = _extract_text(data)
        if not text.strip():
            feedback = data.get("promptFeedback")
            block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if block_reason:
                raise TranscriptionAPIError(f"Gemini API blocked the request: {block_reason}")
            raise TranscriptionAPIError("Gemini API returned no transcription text")
        logger.info("Gemini transcription received: %d chars", len(text))
        return text
