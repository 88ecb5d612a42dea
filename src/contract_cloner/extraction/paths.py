"""Relative path sanitizing for explorer-supplied file names."""

import re

from ..errors import UnsafePath

_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def sanitize_path(raw: str) -> str:
    """
    Normalize an explorer file key into a safe POSIX relative path.

    Backslashes are treated as separators, empty and "." segments are dropped
    and ".." segments are collapsed. Anything that would land outside the
    project root raises UnsafePath.

    Args:
        raw: File key as it appears in the explorer payload

    Returns:
        Normalized relative path, e.g. "contracts/Token.sol"
    """
    if not isinstance(raw, str) or "\x00" in raw:
        raise UnsafePath(str(raw))

    path = raw.replace("\\", "/")
    if path.startswith("/") or _DRIVE_RE.match(path):
        raise UnsafePath(raw)

    parts = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not parts:
                raise UnsafePath(raw)
            parts.pop()
            continue
        parts.append(segment)

    if not parts:
        raise UnsafePath(raw)

    return "/".join(parts)
