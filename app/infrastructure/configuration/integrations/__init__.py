"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.openai import OpenAISettings

__all__ = [
    "OpenAISettings",
]
