"""Answer generation via the Google GenAI SDK (Gemini)."""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.auth.exceptions import GoogleAuthError
from google.genai import errors, types

from src.config import Settings, settings

logger = logging.getLogger(__name__)


class AnswerGenerationError(Exception):
    """Raised when the LLM fails to produce an answer."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


def create_genai_client(config: Settings = settings) -> genai.Client:
    """API key auth when GOOGLE_API_KEY is set, Vertex AI via ADC otherwise."""
    if config.google_api_key:
        return genai.Client(api_key=config.google_api_key)
    return genai.Client(
        vertexai=True,
        project=config.gcp_project_id,
        location=config.gcp_location,
    )


class AnswerGenerator:
    """Single-turn completion: system prompt + user prompt -> text."""

    def __init__(self, client: genai.Client, default_model: str) -> None:
        self._client = client
        self.default_model = default_model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
        model: str | None = None,
    ) -> str:
        model = model or self.default_model
        logger.info(
            "Generating answer: model=%s max_tokens=%d temperature=%.2f prompt=%d chars",
            model,
            max_tokens,
            temperature,
            len(user_prompt),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    max_output_tokens=max_tokens,
                    temperature=temperature,
                ),
            )
        except errors.APIError as e:
            raise AnswerGenerationError(
                code="LLM_API_ERROR",
                message=f"Model API returned an error: {e}",
            ) from e
        except httpx.HTTPError as e:
            raise AnswerGenerationError(
                code="LLM_CONNECTION_ERROR",
                message=f"Failed to reach the model API: {e}",
            ) from e
        except GoogleAuthError as e:
            raise AnswerGenerationError(
                code="LLM_ERROR",
                message=f"Model API credentials unavailable: {e}",
            ) from e
        except Exception as e:
            logger.exception("Unexpected error from the model SDK")
            raise AnswerGenerationError(
                code="LLM_ERROR",
                message=f"Unexpected model error: {e}",
            ) from e

        text = response.text
        if not text:
            raise AnswerGenerationError(
                code="EMPTY_RESPONSE",
                message="Model returned an empty response",
            )
        logger.info("Answer generated (%d chars)", len(text))
        return text
