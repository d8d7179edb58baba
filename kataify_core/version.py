"""
Kataify Version Management - Centralized version for all components

This module provides a single source of truth for the Kataify version.
All components should import from here to ensure consistency.

Author: Kataify maintainers | 2026-10-18
"""

# =============================================================================
# Kataify Version - Single Source of Truth
# =============================================================================

__version__ = "0.3.0"

# Semantic versioning components
VERSION_MAJOR = 0
VERSION_MINOR = 3
VERSION_PATCH = 0
VERSION_SUFFIX = ""  # e.g., "alpha", "beta", "rc1", ""

BUILD_DATE = "2026-10-18"

VERSION_FULL = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
if VERSION_SUFFIX:
    VERSION_FULL = f"{VERSION_FULL}-{VERSION_SUFFIX}"


def get_short_banner() -> str:
    """Get a compact version banner."""
    return f"Kataify v{VERSION_FULL} | {BUILD_DATE}"
