"""
Test suite for GeminiAnalysisClient.

The chat model is an AsyncMock; messages are inspected directly.
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from govbid.boundary.llm.gemini_analysis_client import GeminiAnalysisClient, _content_to_text
from govbid.core.analysis_queue.models import DocumentPayload
from govbid.core.exceptions import AnalysisServiceError


@pytest.fixture
def chat_model() -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=MagicMock(content='{"summary": "ok"}'))
    return model


@pytest.fixture
def document() -> DocumentPayload:
    return DocumentPayload(mime_type="application/pdf", data=b"%PDF-1.7")


class TestGenerate:
    """Test suite for generate."""

    async def test_sends_prompts_and_inline_document(self, chat_model, document) -> None:
        # Arrange
        client = GeminiAnalysisClient(chat_model)

        # Act
        text = await client.generate("system rules", "analyze this", document)

        # Assert
        assert text == '{"summary": "ok"}'
        messages = chat_model.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == "system rules"
        assert isinstance(messages[1], HumanMessage)
        text_part, media_part = messages[1].content
        assert text_part == {"type": "text", "text": "analyze this"}
        assert media_part["mime_type"] == "application/pdf"
        assert base64.b64decode(media_part["data"]) == b"%PDF-1.7"

    async def test_wraps_model_errors(self, chat_model, document) -> None:
        chat_model.ainvoke.side_effect = RuntimeError("quota exceeded")
        client = GeminiAnalysisClient(chat_model)

        with pytest.raises(AnalysisServiceError) as exc_info:
            await client.generate("s", "u", document)

        assert "quota exceeded" in exc_info.value.message
        assert exc_info.value.timed_out is False

    async def test_flattens_list_content(self, chat_model, document) -> None:
        chat_model.ainvoke.return_value = MagicMock(
            content=[{"type": "text", "text": "{\"a\":"}, " 1}", {"type": "image_url"}]
        )
        client = GeminiAnalysisClient(chat_model)

        assert await client.generate("s", "u", document) == '{"a": 1}'


def test_content_to_text_handles_empty() -> None:
    assert _content_to_text(None) == ""
    assert _content_to_text("") == ""
