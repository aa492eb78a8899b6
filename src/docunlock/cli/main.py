from __future__ import annotations

import json
import logging
import sys
from typing import Annotated

import typer
from rich import print_json

from docunlock.adapters.json_logger import JsonLogger
from docunlock.adapters.local_storage import LocalDocumentStore
from docunlock.adapters.registry import opener_for
from docunlock.config.settings import LOG_LEVEL_CHOICES, normalize_log_level, settings
from docunlock.core.errors import DocUnlockError
from docunlock.core.models import UnlockPlan
from docunlock.core.password_maps import load_password_list
from docunlock.core.remove_encryption import remove_encryption
from docunlock.core.unlock import unlock as unlock_command

app = typer.Typer(no_args_is_help=True, add_completion=False, rich_markup_mode=None)

STDIO_MARKER = "-"


def _make_logger(fmt: str, level: str, file: str | None):
    level_num = getattr(logging, level.upper(), logging.INFO)
    return JsonLogger(level=level_num, fmt=fmt, file=file)


@app.callback()
def main(
    log_format: Annotated[str, typer.Option("--log")] = settings.log_format,
    log_level: Annotated[str, typer.Option("--log-level")] = settings.log_level,
    log_file: Annotated[str | None, typer.Option("--log-file")] = None,
):
    if log_format not in {"json", "text"}:
        raise typer.BadParameter("--log must be either 'json' or 'text'.")
    log_level = normalize_log_level(log_level)
    if log_level not in LOG_LEVEL_CHOICES:
        raise typer.BadParameter("--log-level must be DEBUG, INFO, WARN, or ERROR.")
    app.state = {"logger": _make_logger(log_format, log_level, log_file)}


def _unlock_stdio(passwords: list[str], kind: str, logger: JsonLogger) -> None:
    data = typer.get_binary_stream("stdin").read()
    result = remove_encryption(data, passwords, opener_for(data, kind), logger=logger)
    logger.info("unlock_completed", path=STDIO_MARKER, status=result.status, attempts=result.attempts)
    out = typer.get_binary_stream("stdout")
    out.write(result.data)
    out.flush()


@app.command(help="Remove password protection from PDF and Office documents.")
def unlock(
    inputs: Annotated[list[str], typer.Argument(help="Files or directories; '-' reads stdin and writes stdout.")],
    out: Annotated[str | None, typer.Option("--out", help="Output file for a single input.")] = None,
    out_dir: Annotated[str | None, typer.Option("--out-dir")] = None,
    inplace: Annotated[bool, typer.Option("--inplace")] = False,
    password: Annotated[list[str] | None, typer.Option("--password", help="Candidate password; repeatable.")] = None,
    password_env: Annotated[str | None, typer.Option("--password-env")] = None,
    password_file: Annotated[str | None, typer.Option("--password-file")] = None,
    password_list: Annotated[str | None, typer.Option("--password-list")] = None,
    password_map: Annotated[str | None, typer.Option("--password-map")] = None,
    kind: Annotated[str, typer.Option("--kind")] = settings.kind,
    glob: Annotated[str | None, typer.Option("--glob")] = None,
    recursive: Annotated[bool, typer.Option("--recursive")] = settings.recursive,
    dry_run: Annotated[bool, typer.Option("--dry-run")] = False,
):
    logger = app.state["logger"]
    from .options import read_password_map, read_passwords

    try:
        if kind not in {"auto", "pdf", "office"}:
            raise DocUnlockError("--kind must be auto, pdf, or office.")
        if sum(1 for flag in (out is not None, out_dir is not None, inplace) if flag) > 1:
            raise DocUnlockError("Use only one of --out, --out-dir, or --inplace.")

        configured = list(settings.passwords)
        if settings.password_list_file:
            configured.extend(load_password_list(settings.password_list_file))
        passwords = read_passwords(password, password_env, password_file, password_list, configured)

        if STDIO_MARKER in inputs and len(inputs) > 1:
            raise DocUnlockError("'-' (stdin) cannot be combined with other inputs.")
        if inputs == [STDIO_MARKER]:
            _unlock_stdio(passwords, kind, logger)
            return

        plan = UnlockPlan(
            inputs=inputs,
            passwords=passwords,
            password_map=read_password_map(password_map),
            kind=kind,  # type: ignore[arg-type]
            output_path=out,
            output_dir=out_dir,
            inplace=inplace,
            glob=glob or settings.glob,
            recursive=recursive,
            dry_run=dry_run,
        )
        result = unlock_command(plan, LocalDocumentStore(settings.temp_dir), opener_for, logger=logger)
        logger.info("unlock_completed", files=result["files"], decrypted=result["decrypted"])
        print_json(data=result)
    except typer.Exit:
        raise
    except typer.BadParameter:
        raise
    except DocUnlockError as e:
        logger.error("unlock_failed", error=str(e))
        raise typer.Exit(code=2)
    except Exception as e:
        logger.error("unlock_crash", error=str(e))
        raise typer.Exit(code=1)


@app.command(help="Print environment diagnostics.")
def diagnose():
    import platform

    import msoffcrypto
    import pikepdf

    info = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "pikepdf": pikepdf.__version__,
        "qpdf": pikepdf.__libqpdf_version__,
        "msoffcrypto": getattr(msoffcrypto, "__version__", None),
        "settings": {
            "kind": settings.kind,
            "glob": settings.glob,
            "recursive": settings.recursive,
            "log_format": settings.log_format,
            "passwords_configured": len(settings.passwords),
            "password_list_file": settings.password_list_file,
        },
    }
    print(json.dumps(info, indent=2))


@app.command(help="Show version.")
def version():
    from docunlock import __version__

    print(__version__)
