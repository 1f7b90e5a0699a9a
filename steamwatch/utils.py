"""Utility functions for formatting Steam values."""

from datetime import datetime, timezone


PERSONA_STATES = {
    0: "Offline",
    1: "Online",
    2: "Busy",
    3: "Away",
    4: "Snooze",
    5: "Looking to trade",
    6: "Looking to play",
}


def persona_state_to_text(personastate: int | None) -> str:
    """Map Steam's numeric persona state to its label, "Unknown" otherwise."""
    return PERSONA_STATES.get(personastate, "Unknown")


def format_playtime(minutes: int) -> str:
    """
    Format minutes into a human-readable playtime string.

    Args:
        minutes: Total minutes played.

    Returns:
        "Xh Ym" when there is at least one full hour (e.g., "2h 5m"),
        otherwise "Ym" (e.g., "59m", "0m").
    """
    hours = minutes // 60
    mins = minutes % 60
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def to_iso(dt: datetime) -> str:
    # Millisecond precision, "Z" suffix
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def iso_from_unix(seconds: int | None) -> str | None:
    """
    Convert Unix epoch seconds into an ISO-8601 UTC string.

    Returns None when Steam omitted the value.
    """
    if seconds is None:
        return None
    return to_iso(datetime.fromtimestamp(seconds, tz=timezone.utc))


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))
