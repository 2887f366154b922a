"""Publishing generated artifacts into the checked-in API tree."""

from .gate import build_artifact_pairs, publish

__all__ = ["build_artifact_pairs", "publish"]
