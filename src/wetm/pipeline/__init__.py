"""Pipeline architecture for post translation."""

from .base import ConversionError, PostContext, TranslationPipeline, TranslationStep
from .steps import ConvertStep, FrontmatterStep, PostprocessStep, PreprocessStep

__all__ = [
    "ConversionError",
    "PostContext",
    "TranslationPipeline",
    "TranslationStep",
    "PreprocessStep",
    "ConvertStep",
    "PostprocessStep",
    "FrontmatterStep",
]
