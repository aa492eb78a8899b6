"""Utilities for loading the passwords used to unlock documents."""

from __future__ import annotations

import csv
import json
from collections.abc import Mapping, Sequence
from pathlib import Path

from docunlock.core.errors import PasswordSourceError


def _resolve_source(source: str | Path, base_dir: str | Path | None) -> Path:
    path = Path(source)
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path
    path = path.expanduser().resolve()
    if not path.exists():
        raise PasswordSourceError(f"Password file not found: {source}")
    return path


def load_password_map(
    source: str | Mapping[str, str] | None,
    *,
    base_dir: str | Path | None = None,
) -> dict[str, str] | None:
    """Load a password map from JSON/CSV data or a path.

    The ``source`` parameter accepts either a mapping object that is already loaded
    in memory or a filesystem path (absolute or relative) pointing to a JSON or
    CSV document.  When a relative path is provided, ``base_dir`` is used as the
    anchor directory.  The resulting dictionary normalizes keys and values to
    plain strings.
    """

    if source is None:
        return None

    if isinstance(source, Mapping):
        return {str(key): str(value) for key, value in source.items()}

    path = _resolve_source(source, base_dir)

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise PasswordSourceError(f"Failed to parse password map JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise PasswordSourceError("Password map JSON must be an object mapping paths to passwords.")
        return {str(key): str(value) for key, value in data.items()}

    if path.suffix.lower() != ".csv":
        raise PasswordSourceError("Unsupported password map format. Use .json or .csv files.")

    with open(path, encoding="utf-8", newline="") as fh:
        reader = csv.DictReader(fh)
        if reader.fieldnames is None:
            raise PasswordSourceError("Password CSV must include a header row with 'path' and 'password'.")
        normalized = {name.strip().lower() for name in reader.fieldnames if name}
        if not {"path", "password"}.issubset(normalized):
            raise PasswordSourceError("Password CSV must include 'path' and 'password' columns.")
        result: dict[str, str] = {}
        for row in reader:
            lowered = {k.strip().lower(): (v or "") for k, v in row.items() if k}
            key = lowered.get("path", "").strip()
            if not key:
                continue
            result[key] = lowered.get("password", "")
        return result


def load_password_list(
    source: str | Path | Sequence[str] | None,
    *,
    base_dir: str | Path | None = None,
) -> list[str]:
    """Load an ordered list of candidate passwords.

    Accepts an in-memory sequence, a ``.json`` array, a ``.csv`` file with a
    ``password`` column, or any other text file holding one password per line.
    Order is preserved and blank entries are dropped.
    """

    if source is None:
        return []

    if not isinstance(source, (str, Path)):
        return [str(item) for item in source if str(item)]

    path = _resolve_source(source, base_dir)
    suffix = path.suffix.lower()

    if suffix == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise PasswordSourceError(f"Failed to parse password list JSON: {exc}") from exc
        if not isinstance(data, list):
            raise PasswordSourceError("Password list JSON must be an array of strings.")
        return [str(item) for item in data if str(item)]

    if suffix == ".csv":
        with open(path, encoding="utf-8", newline="") as fh:
            reader = csv.DictReader(fh)
            fields = {name.strip().lower(): name for name in reader.fieldnames or [] if name}
            if "password" not in fields:
                raise PasswordSourceError("Password CSV must include a 'password' column.")
            column = fields["password"]
            return [row[column] for row in reader if row.get(column)]

    lines = path.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]
