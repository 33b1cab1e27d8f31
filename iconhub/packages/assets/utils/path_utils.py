"""Path utilities: reduce untrusted names to a single safe path segment.

Every user supplied ``category`` and file name goes through ``sanitize_segment``
before touching the filesystem:
- both '/' and '\\' are separators, trailing separators are ignored;
- only the final segment survives;
- '.', '..', blank segments and segments with NUL collapse to ''.
"""

from __future__ import annotations

from typing import Optional

from iconhub.packages.assets.core.constants import TEMP_FILE_PREFIX
from iconhub.packages.assets.core.enums import AssetErrorKind
from iconhub.packages.assets.core.exceptions import AssetError

_UNSAFE_SEGMENTS = frozenset({".", ".."})


def sanitize_segment(raw: Optional[str]) -> str:
    s = str(raw or "").replace("\\", "/").rstrip("/")
    segment = s.rsplit("/", 1)[-1]
    if segment in _UNSAFE_SEGMENTS or "\x00" in segment or not segment.strip():
        return ""
    return segment


def require_segment(raw: Optional[str]) -> str:
    """Like ``sanitize_segment`` but raises ``INVALID_NAME`` instead of returning ''."""
    segment = sanitize_segment(raw)
    if not segment:
        raise AssetError(AssetErrorKind.INVALID_NAME, name=raw)
    return segment


def is_reserved_name(name: str) -> bool:
    return name.startswith(TEMP_FILE_PREFIX)
