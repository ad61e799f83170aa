from datetime import datetime, timezone


def now_iso() -> str:
    # fixed precision keeps lexical order equal to chronological order
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")
