"""Core data models for Restgate."""

from .entities import (
    ApiPublishResult,
    ArtifactPair,
    CacheEvaluation,
    CompatibilityInfo,
    CompatibilityReport,
    FileFingerprint,
    GenerationRequest,
    GeneratorResult,
    KindResult,
    ModelGenerationResult,
    PublishResult,
)

__all__ = [
    "ApiPublishResult",
    "ArtifactPair",
    "CacheEvaluation",
    "CompatibilityInfo",
    "CompatibilityReport",
    "FileFingerprint",
    "GenerationRequest",
    "GeneratorResult",
    "KindResult",
    "ModelGenerationResult",
    "PublishResult",
]
