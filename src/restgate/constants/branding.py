"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "RESTGATE"
CLI_DESCRIPTION: str = "\n".join(
    (
        f">_ {BRAND_NAME}",
        "     // incremental generation and compatibility gating for rest.li style APIs",
    )
)
