"""Utilities for reporting progress events from core operations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable


ProgressHook = Callable[[str, dict[str, object]], None]


def emit_progress(hooks: Sequence[ProgressHook], event: str, **payload: object) -> None:
    """Notify all hooks about a progress event.

    Parameters
    ----------
    hooks:
        Callbacks invoked in order. Each receives the event name followed by a
        payload dictionary describing the event.
    event:
        Name of the event, e.g. ``attempt_started`` or ``document_released``.
    payload:
        Keyword arguments describing the event context. Passwords never appear
        here in clear text.
    """

    if not hooks:
        return
    for hook in hooks:
        hook(event, dict(payload))
