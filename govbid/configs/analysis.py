"""
Analysis service configuration.

Model selection and generation parameters for the document analysis LLM.

Dependencies: pydantic_settings
System role: Generative analysis service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Settings for the Gemini-backed analysis service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ANALYSIS_",
        case_sensitive=False,
        extra="ignore",
    )

    model_name: str = Field(
        default="gemini-2.5-flash",
        description="Google Generative AI model used for document analysis",
    )
    temperature: float = Field(default=0.3, description="Sampling temperature")
    max_output_tokens: int = Field(default=2000, description="Maximum tokens in a response")
    google_api_key: str | None = Field(
        default=None,
        description="Google API key (falls back to GOOGLE_API_KEY in the environment)",
    )
