import os

import typer

from docunlock.core.errors import DocUnlockError
from docunlock.core.password_maps import load_password_list, load_password_map


def read_passwords(
    passwords: list[str] | None,
    password_env: str | None,
    password_file: str | None,
    password_list: str | None,
    configured: list[str] | None = None,
) -> list[str]:
    """Collect candidates in priority order: flags, env var, secret file, list file, settings."""

    result: list[str] = list(passwords or [])
    if password_env:
        value = os.environ.get(password_env)
        if value:
            result.append(value)
    if password_file:
        try:
            with open(password_file, encoding="utf-8") as f:
                secret = f.read().strip()
        except FileNotFoundError:
            raise typer.BadParameter(f"Password file not found: {password_file}") from None
        if secret:
            result.append(secret)
    if password_list:
        try:
            result.extend(load_password_list(password_list))
        except DocUnlockError as exc:
            raise typer.BadParameter(str(exc)) from exc
    result.extend(configured or [])
    return result


def read_password_map(password_map: str | None) -> dict[str, str] | None:
    if not password_map:
        return None

    try:
        return load_password_map(password_map)
    except DocUnlockError as exc:
        raise typer.BadParameter(str(exc)) from exc
