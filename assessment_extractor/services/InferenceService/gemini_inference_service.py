from __future__ import annotations

import logging

from google import genai
from google.genai import chats, types
from langfuse import observe

from assessment_extractor.entities.payload import (
    FilePart,
    GenerationSettings,
    InferenceResponse,
    RequestPart,
    RequestPayload,
    UsageMetadata,
)
from assessment_extractor.services.InferenceService.inference_service_interface import (
    InferenceServiceInterface,
)


def to_genai_part(part: RequestPart) -> types.Part:
    if isinstance(part, FilePart):
        return types.Part.from_uri(file_uri=part.remote_uri, mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


def to_usage(usage: types.GenerateContentResponseUsageMetadata | None) -> UsageMetadata:
    if usage is None:
        return UsageMetadata()

    return UsageMetadata(
        prompt_tokens=usage.prompt_token_count or 0,
        completion_tokens=usage.candidates_token_count or 0,
        total_tokens=usage.total_token_count or 0,
    )


class GeminiInferenceService(InferenceServiceInterface):
    """
    Chat sessions against a Gemini model.

    Every session shares the same generation settings; only the system
    instruction and the seeded history vary with the payload.
    """

    def __init__(
        self,
        client: genai.Client,
        settings: GenerationSettings,
        logger: logging.Logger,
    ) -> None:
        self.client = client
        self.settings = settings
        self.logger = logger

        self.logger.info(
            "GeminiInferenceService initialized. Model: %s, temperature: %s, max tokens: %d",
            self.settings.model_name,
            self.settings.temperature,
            self.settings.max_output_tokens,
        )

    def _build_config(self, instruction: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=instruction,
            temperature=self.settings.temperature,
            max_output_tokens=self.settings.max_output_tokens,
            response_mime_type=self.settings.response_mime_type,
        )

    def create_session(self, payload: RequestPayload) -> chats.AsyncChat:
        history = [
            types.Content(
                role="user",
                parts=[to_genai_part(part) for part in payload.parts],
            )
        ]

        return self.client.aio.chats.create(
            model=self.settings.model_name,
            config=self._build_config(payload.instruction),
            history=history,
        )

    @observe()
    async def send(self, session: chats.AsyncChat, message: str) -> InferenceResponse:
        response = await session.send_message(message)

        return InferenceResponse(
            text=response.text or "",
            usage=to_usage(response.usage_metadata),
        )
