"""wetm configuration models."""

from .config import TranslatorConfig

__all__ = ["TranslatorConfig"]
