"""
Utility functions
"""
import time


def normalize_alias(value) -> str:
    """
    Normalize a participant alias (trimmed, lower-cased)

    Example:
        >>> normalize_alias("  GrifJom ")
        'grifjom'
    """
    return str(value or "").strip().lower()


def title_case(value: str) -> str:
    """
    Upper-case the first letter of each whitespace-separated word

    The rest of each word is left as-is.

    Example:
        >>> title_case("max winkler")
        'Max Winkler'
    """
    return " ".join(word[:1].upper() + word[1:] for word in str(value or "").split())


def now_ms() -> int:
    """Current time as epoch milliseconds"""
    return int(time.time() * 1000)
