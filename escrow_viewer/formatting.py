"""Display helpers for transaction rows."""

from datetime import datetime, timezone


def _parse_timestamp(timestamp: str | int | float) -> datetime:
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    text = str(timestamp).strip()
    if text.isdigit():
        return datetime.fromtimestamp(int(text), tz=timezone.utc)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_display_time(timestamp: str | int | float) -> str:
    """
    Render a createdAt value as e.g. "Oct 19, 07:20:05 AM".
    Accepts ISO-8601 strings or unix seconds. On failure returns the error message instead.
    """
    try:
        dt = _parse_timestamp(timestamp)
        return f"{dt:%b} {dt.day}, {dt:%I:%M:%S %p}"
    except Exception as e:
        return str(e) or "Invalid date"


def truncate_for_display(tx_hash: str, compact: bool = False) -> str:
    if not tx_hash:
        return "N/A"
    if compact:
        return f"{tx_hash[:6]}...{tx_hash[-4:]}"
    return f"{tx_hash[:8]}...{tx_hash[-6:]}"
