"""UI formatting helpers."""

from datetime import datetime


def format_timestamp(ts: datetime | None) -> str:
    """Render a timestamp in the local timezone using the locale's format."""
    if ts is None:
        return "-"
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.strftime("%c")


def format_size(size: int | None) -> str:
    """Human-readable byte count (``3 B``, ``12.5 KB``, ``1.2 MB``)."""
    if size is None:
        return "-"
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def preview_text(text: str, limit: int = 120) -> str:
    """Collapse whitespace and cut ``text`` to ``limit`` characters."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 1].rstrip() + "…"
