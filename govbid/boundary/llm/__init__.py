"""Analysis service adapters."""

from govbid.boundary.llm.gemini_analysis_client import GeminiAnalysisClient, build_chat_model

__all__ = ["GeminiAnalysisClient", "build_chat_model"]
