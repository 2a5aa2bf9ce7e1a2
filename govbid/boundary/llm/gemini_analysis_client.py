"""
Gemini-backed document analysis client.

Sends a system prompt, a user prompt and the base64-encoded document to a
Gemini chat model and returns the generated text.

Dependencies: langchain_google_genai, langchain_core
System role: Analysis service adapter for the job worker
"""

import base64
import logging

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from govbid.core.analysis_queue.models import DocumentPayload
from govbid.core.exceptions import AnalysisServiceError

logger = logging.getLogger(__name__)


def build_chat_model(
    model_name: str,
    temperature: float = 0.3,
    max_output_tokens: int = 2000,
    google_api_key: str | None = None,
) -> ChatGoogleGenerativeAI:
    """Construct the Gemini chat model from analysis settings."""
    kwargs = {}
    if google_api_key:
        kwargs["google_api_key"] = google_api_key
    return ChatGoogleGenerativeAI(
        model=model_name,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        **kwargs,
    )


def _content_to_text(content) -> str:
    """Flatten a chat response content (str or list of parts) into text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiAnalysisClient:
    """Analysis service over an injected ChatGoogleGenerativeAI model."""

    def __init__(self, model: ChatGoogleGenerativeAI) -> None:
        """
        Args:
            model: Configured chat model (see build_chat_model)
        """
        self._model = model

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        document: DocumentPayload,
    ) -> str:
        """
        Analyze one document.

        Args:
            system_prompt: Instructions and output schema
            user_prompt: Per-document request
            document: MIME type and raw bytes

        Returns:
            str: Generated text (may be empty)

        Raises:
            AnalysisServiceError: When the model call fails
        """
        encoded = base64.b64encode(document.data).decode("ascii")
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(
                content=[
                    {"type": "text", "text": user_prompt},
                    {"type": "media", "mime_type": document.mime_type, "data": encoded},
                ]
            ),
        ]

        try:
            response = await self._model.ainvoke(messages)
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise AnalysisServiceError(
                f"Analysis service call failed: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        return _content_to_text(response.content)
