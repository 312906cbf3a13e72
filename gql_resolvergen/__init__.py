"""Generate TypeScript resolver types from GraphQL schemas."""

from .core import TranslationConfig, TranslationError, translate

__all__ = ["TranslationConfig", "TranslationError", "translate"]
