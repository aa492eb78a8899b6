"""Strip password protection from a buffered document.

Candidates are tried strictly in order, starting with the empty password. The
first candidate that opens the document wins; a protected winner is
re-serialized without its protection, anything else passes through untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from docunlock.core.errors import CorruptOrUnsupportedDocument, PasswordMismatch
from docunlock.core.models import UnlockResult
from docunlock.core.passwords import candidate_passwords, redact_password
from docunlock.core.progress import ProgressHook, emit_progress
from docunlock.ports.logs import EventLogger, NullLogger
from docunlock.ports.security import DocumentHandle, DocumentOpener


def _release(handle: DocumentHandle, logger: EventLogger, hooks: Sequence[ProgressHook], attempt: int) -> None:
    try:
        handle.close()
    except Exception as exc:
        logger.warn("release_failed", attempt=attempt, error=str(exc))
        return
    emit_progress(hooks, "document_released", attempt=attempt)


@contextmanager
def opened_document(
    opener: DocumentOpener,
    data: bytes,
    password: str,
    *,
    logger: EventLogger,
    hooks: Sequence[ProgressHook] = (),
    attempt: int = 0,
) -> Iterator[DocumentHandle]:
    """Open ``data`` with ``password`` and release the handle on every exit path.

    ``PasswordMismatch`` and ``CorruptOrUnsupportedDocument`` raised by the
    opener propagate unchanged; the opener has already freed anything it
    allocated before raising.
    """

    handle = opener.open(data, password)
    try:
        yield handle
    finally:
        _release(handle, logger, hooks, attempt)


def remove_encryption(
    data: bytes,
    passwords: Iterable[str] | None,
    opener: DocumentOpener,
    *,
    logger: EventLogger | None = None,
    hooks: Sequence[ProgressHook] = (),
) -> UnlockResult:
    log = logger or NullLogger()
    attempts = 0

    for index, password in enumerate(candidate_passwords(passwords)):
        attempts += 1
        if password:
            log.debug("open_attempt", kind=opener.kind, password=redact_password(password))
        emit_progress(hooks, "attempt_started", attempt=index)
        try:
            with opened_document(opener, data, password, logger=log, hooks=hooks, attempt=index) as handle:
                if not handle.is_encrypted:
                    output = UnlockResult(
                        data=data,
                        status="passthrough",
                        attempts=attempts,
                        password_index=index,
                        document_kind=opener.kind,  # type: ignore[arg-type]
                    )
                else:
                    try:
                        plain = handle.remove_protection()
                    except PasswordMismatch as exc:
                        # the winning handle already opened; a late key failure ends the search
                        raise CorruptOrUnsupportedDocument(f"Failed to remove protection: {exc}") from exc
                    log.debug("protection_removed", kind=opener.kind, attempt=index)
                    output = UnlockResult(
                        data=plain,
                        status="decrypted",
                        attempts=attempts,
                        password_index=index,
                        document_kind=opener.kind,  # type: ignore[arg-type]
                    )
        except PasswordMismatch:
            emit_progress(hooks, "attempt_mismatch", attempt=index)
            continue
        emit_progress(hooks, "completed", status=output.status, attempts=attempts)
        return output

    log.info("no_matching_password", kind=opener.kind, attempts=attempts)
    emit_progress(hooks, "completed", status="passthrough", attempts=attempts)
    return UnlockResult(
        data=data,
        status="passthrough",
        attempts=attempts,
        document_kind=opener.kind,  # type: ignore[arg-type]
    )


def remove_encryption_stream(
    chunks: Iterable[bytes],
    passwords: Iterable[str] | None,
    opener: DocumentOpener,
    *,
    logger: EventLogger | None = None,
    hooks: Sequence[ProgressHook] = (),
) -> Iterator[bytes]:
    """Pipe form: buffer the whole input, then yield the output as one chunk."""

    data = b"".join(chunks)
    result = remove_encryption(data, passwords, opener, logger=logger, hooks=hooks)
    yield result.data
