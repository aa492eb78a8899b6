import os
from collections.abc import Callable, Iterable, Sequence

from docunlock.core.errors import CorruptOrUnsupportedDocument, DocUnlockError
from docunlock.core.models import UnlockPlan
from docunlock.core.passwords import passwords_for_path
from docunlock.core.progress import ProgressHook, emit_progress
from docunlock.core.remove_encryption import remove_encryption
from docunlock.ports.logs import EventLogger, NullLogger
from docunlock.ports.security import DocumentOpener
from docunlock.ports.storage import DocumentStore

OpenerFactory = Callable[[bytes, str], DocumentOpener]


def _iter_input_files(
    store: DocumentStore, inputs: Iterable[str], glob: str | None, recursive: bool
) -> Iterable[tuple[str, str]]:
    """Yield ``(path, relative name)`` pairs; the name keeps subfolders below a directory input."""

    for item in inputs:
        if os.path.basename(item).startswith("~$"):
            continue
        if os.path.isdir(item):
            for path in store.iter_files(item, glob, recursive):
                yield path, os.path.relpath(path, item)
        else:
            yield item, os.path.basename(item)


def _output_path(plan: UnlockPlan, source: str, name: str, total: int) -> str:
    if plan.inplace:
        return source
    if plan.output_dir is not None:
        return os.path.join(plan.output_dir, name)
    if plan.output_path is not None:
        if total > 1:
            raise DocUnlockError("--out accepts a single input; use --out-dir for several files.")
        return plan.output_path
    root, ext = os.path.splitext(source)
    return f"{root}.unlocked{ext}"


def unlock(
    plan: UnlockPlan,
    store: DocumentStore,
    opener_factory: OpenerFactory,
    *,
    logger: EventLogger | None = None,
    hooks: Sequence[ProgressHook] = (),
) -> dict:
    """Run the encryption-removal stage over every input file of ``plan``.

    Files whose passwords are all wrong are still written (unchanged) so the
    output set mirrors the input set; corrupt files abort the run.
    """

    log = logger or NullLogger()
    files = list(_iter_input_files(store, plan.inputs, plan.glob, plan.recursive))
    if not files:
        raise DocUnlockError("No input files matched.")

    targets = [_output_path(plan, path, name, len(files)) for path, name in files]
    seen: dict[str, str] = {}
    for (path, _), target in zip(files, targets):
        key = os.path.normpath(os.path.abspath(target))
        if key in seen:
            raise DocUnlockError(f"{seen[key]} and {path} would both be written to {target}.")
        seen[key] = path

    reports: list[dict[str, object]] = []
    for (path, _), target in zip(files, targets):
        data = store.read_bytes(path)
        opener = opener_factory(data, plan.kind)
        passwords = passwords_for_path(path, plan.passwords, plan.password_map)
        try:
            result = remove_encryption(data, passwords, opener, logger=log, hooks=hooks)
        except CorruptOrUnsupportedDocument as exc:
            raise CorruptOrUnsupportedDocument(f"{path}: {exc}") from exc

        if not plan.dry_run:
            if not (plan.inplace and result.status == "passthrough"):
                store.write_bytes(target, result.data)
        log.info("file_processed", path=path, status=result.status, attempts=result.attempts)
        emit_progress(hooks, "file_processed", path=path, status=result.status)
        reports.append(
            {
                "path": path,
                "output": target,
                "kind": result.document_kind,
                "status": result.status,
                "attempts": result.attempts,
            }
        )

    return {
        "files": len(reports),
        "decrypted": sum(1 for r in reports if r["status"] == "decrypted"),
        "passthrough": sum(1 for r in reports if r["status"] == "passthrough"),
        "dry_run": plan.dry_run,
        "results": reports,
    }
