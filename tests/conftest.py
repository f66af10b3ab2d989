"""Pytest configuration for the localepages test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 200 examples
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from localepages.store import ResourceEntry
from tests.helpers.stores import CountingStore

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def sample_entries() -> list[ResourceEntry]:
    """Checkout page with a complete English set and partial French/Canadian sets."""
    return [
        ResourceEntry("Checkout", "en", "title", "Checkout"),
        ResourceEntry("Checkout", "en", "pay", "Pay now"),
        ResourceEntry("Checkout", "en", "cancel", "Cancel"),
        ResourceEntry("Checkout", "en", "empty", ""),
        ResourceEntry("Checkout", "fr", "title", "Paiement"),
        ResourceEntry("Checkout", "fr", "pay", "Payer"),
        ResourceEntry("Checkout", "fr-CA", "pay", "Payer maintenant"),
        ResourceEntry("Checkout", "de", "title", "Kasse"),
        ResourceEntry("Home", "en", "title", "Home"),
    ]


@pytest.fixture
def counting_store(sample_entries: list[ResourceEntry]) -> CountingStore:
    """CountingStore preloaded with sample_entries."""
    return CountingStore(sample_entries)
