#!/usr/bin/env python3
"""
security_utils.py (quarjar)

Shared helpers for input validation and safe display of credentials.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from quarjar.errors import ValidationError


# ============================================================================
# Request Timeout Constants
# ============================================================================

# Default timeouts for HTTP requests (connect, read)
DEFAULT_TIMEOUT = (10, 30)
UPLOAD_TIMEOUT = (10, 120)  # Longer read timeout for asset uploads


# ============================================================================
# API Key Masking for Logs
# ============================================================================

def mask_sensitive(value: str, visible_chars: int = 4) -> str:
    """
    Mask a sensitive value for safe logging.

    Args:
        value: The sensitive string to mask
        visible_chars: Number of characters to show at start and end

    Returns:
        Masked string like "abc1****xyz9"
    """
    if not value:
        return "****"

    if len(value) <= visible_chars * 2:
        return "****"

    return f"{value[:visible_chars]}****{value[-visible_chars:]}"


# ============================================================================
# Input Validation
# ============================================================================

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def validate_url(url: str, field: str = "url") -> str:
    """
    Validate an HTTP(S) URL and strip surrounding whitespace.

    Raises:
        ValidationError: If the URL is empty or not http/https
    """
    if not url or not str(url).strip():
        raise ValidationError(f"{field} is required")

    url = str(url).strip()
    if not _URL_RE.match(url):
        raise ValidationError(
            f"{field} must be a valid HTTP or HTTPS URL",
            context={field: url},
        )

    if "\x00" in url or any(c.isspace() for c in url):
        raise ValidationError(f"Invalid {field}: {url!r}")

    return url


def require_value(value, field: str) -> str:
    """
    Ensure an identifier or title was supplied and return it as a string.

    Numeric ids are accepted and converted, so ``123`` and ``"123"`` are
    equivalent.
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        raise ValidationError(f"{field} is required")
    return str(value)


def is_safe_path(base_dir: Path, target_path: Path) -> bool:
    """
    Check if target_path is safely within base_dir (no symlink escape).
    """
    try:
        target_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


def as_path(value: Union[str, Path]) -> Path:
    """Expand ``~`` and return a Path."""
    return Path(value).expanduser()
