"""OpenAI integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class OpenAISettings(IntegrationSettings):
    """OpenAI API configuration.

    The orchestrator only checks that a key is present; validating it is the
    wrapped request's concern.

    Environment Variables:
        OPENAI_API_KEY: OpenAI API key used by transcription, chat and image requests

    Example:
        ```python
        from infrastructure.configuration import settings

        api_key = settings.openai.OPENAI_API_KEY
        ```
    """

    OPENAI_API_KEY: str | None = Field(default=None, alias="OPENAI_API_KEY")
