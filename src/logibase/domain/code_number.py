"""Business code numbering (e.g. ``VN-00042``)."""

from typing import Optional

SEQUENCE_WIDTH = 5


def next_code(prefix: str, last_code: Optional[str], width: int = SEQUENCE_WIDTH) -> str:
    """Return the code that follows ``last_code`` for ``prefix``.

    Args:
        prefix: Code prefix such as "CU", "SU" or "VN"
        last_code: Highest existing code with that prefix, or None

    Returns:
        ``<prefix>-<zero padded sequence>``; the sequence starts at 1 and
        restarts at 1 when the last code has no numeric suffix
    """
    sequence = 1
    if last_code:
        suffix = last_code.rsplit("-", 1)[-1]
        if suffix.isdigit():
            sequence = int(suffix) + 1
    return f"{prefix}-{sequence:0{width}d}"
