"""Text formatting for durations and the voice statistics table."""

from collections.abc import Sequence

from utils.types import VoiceRecord

_USERNAME_WIDTH = 20


def format_duration(milliseconds: int | float) -> str:
    """Render a duration as ``1h 2m 3s``, ``2m 3s`` or ``3s`` (floored)."""
    seconds = int(milliseconds // 1000) if milliseconds > 0 else 0
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        return f"{hours}h {minutes % 60}m {seconds % 60}s"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"


def format_leaderboard_table(records: Sequence[VoiceRecord]) -> str:
    """Fixed-width table of ranked records, wrapped in a code block."""
    lines = [
        "```",
        f"Rank | {'Username'.ljust(_USERNAME_WIDTH)} | {'Total Time'.ljust(11)} | {'Avg Time'.ljust(11)} | Sessions",
        f"-----|{'-' * (_USERNAME_WIDTH + 2)}|{'-' * 13}|{'-' * 13}|{'-' * 10}",
    ]
    for index, record in enumerate(records, start=1):
        rank = str(index).rjust(4)
        username = record.username[:_USERNAME_WIDTH].ljust(_USERNAME_WIDTH)
        total = format_duration(record.total_voice_time).rjust(11)
        average = format_duration(record.average_time).rjust(11)
        sessions = str(record.session_count).rjust(8)
        lines.append(f"{rank} | {username} | {total} | {average} | {sessions}")
    lines.append("```")
    return "\n".join(lines)
