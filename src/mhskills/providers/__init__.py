# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""HTTP skill providers and their registry."""

from mhskills.core.constants import FETCH_TIMEOUT, USER_AGENT
from mhskills.providers.base import HostProvider, ProviderMatch
from mhskills.providers.direct import DirectProvider
from mhskills.providers.huggingface import HuggingFaceProvider
from mhskills.providers.mintlify import MintlifyProvider
from mhskills.providers.registry import ProviderRegistry


def build_default_registry(
    *, timeout: float = FETCH_TIMEOUT, user_agent: str = USER_AGENT
) -> ProviderRegistry:
    """Create a registry with the built-in providers in priority order.

    Mintlify comes first because it is the most specific (it rejects
    documents without its site key), HuggingFace next, and Direct last as
    the generic fallback.
    """
    kwargs = {"timeout": timeout, "user_agent": user_agent}
    return ProviderRegistry(
        [
            MintlifyProvider(**kwargs),
            HuggingFaceProvider(**kwargs),
            DirectProvider(**kwargs),
        ]
    )


__all__ = [
    "DirectProvider",
    "HostProvider",
    "HuggingFaceProvider",
    "MintlifyProvider",
    "ProviderMatch",
    "ProviderRegistry",
    "build_default_registry",
]
