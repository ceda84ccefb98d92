"""
Key/value assembly shared by the engine builders.
Not part of the public API.
"""
from typing import Iterable, Optional, Tuple


def join_pairs(
    pairs: Iterable[Tuple[str, Optional[str]]],
    delimiter: str,
    terminator: str = "",
) -> str:
    """
    Render ``key=value`` tokens, skipping pairs whose value is None.

    Values are emitted verbatim, without quoting or escaping.

    Args:
        pairs: (key, value) tuples in output order
        delimiter: Text placed between tokens
        terminator: Text appended to every token (e.g. ";" for SQL Server)

    Returns:
        The assembled string, empty when no pair has a value
    """
    tokens = [f"{key}={value}{terminator}" for key, value in pairs if value is not None]
    return delimiter.join(tokens)
