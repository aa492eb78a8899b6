from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

REDACTED_PREFIX_LENGTH = 2


def candidate_passwords(configured: Iterable[str] | None) -> Iterator[str]:
    """Yield the empty password followed by ``configured`` in order.

    The configured iterable is consumed lazily, so a caller that stops at the
    first success never pulls more candidates than it tried.
    """

    yield ""
    if configured is None:
        return
    for password in configured:
        yield str(password)


def redact_password(password: str) -> str:
    if len(password) <= REDACTED_PREFIX_LENGTH:
        return "***"
    return f"{password[:REDACTED_PREFIX_LENGTH]}***"


def resolve_password(path: str, default: str | None, mapping: Mapping[str, str] | None) -> str | None:
    if not mapping:
        return default

    p = Path(path)
    candidates = [str(path), str(p), str(p.resolve()), p.name]
    seen: set[str] = set()
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)
        if candidate in mapping:
            return mapping[candidate]
    return default


def passwords_for_path(
    path: str,
    configured: Iterable[str] | None,
    mapping: Mapping[str, str] | None,
) -> list[str]:
    """Configured list for one file: its mapped password first, then the global list."""

    result: list[str] = []
    mapped = resolve_password(path, None, mapping)
    if mapped:
        result.append(mapped)
    for password in configured or ():
        result.append(password)
    return result
