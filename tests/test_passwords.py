from pathlib import Path

from docunlock.core.passwords import candidate_passwords, passwords_for_path, redact_password, resolve_password


def test_candidates_start_with_empty_password():
    assert list(candidate_passwords(["a", "b"])) == ["", "a", "b"]
    assert list(candidate_passwords([])) == [""]
    assert list(candidate_passwords(None)) == [""]


def test_candidates_keep_order_and_duplicates():
    assert list(candidate_passwords(["b", "a", "b", ""])) == ["", "b", "a", "b", ""]


def test_redact_password_keeps_fixed_prefix():
    assert redact_password("secret2") == "se***"
    assert redact_password("abc") == "ab***"
    assert len(redact_password("a-very-long-passphrase")) == 5


def test_redact_password_hides_short_passwords_entirely():
    assert redact_password("x") == "***"
    assert redact_password("ab") == "***"
    assert redact_password("") == "***"


def test_resolve_password_prefers_exact_path(tmp_path: Path) -> None:
    file_a = tmp_path / "a.pdf"
    mapping = {
        str(file_a): "alpha",
        file_a.name: "beta",
        "other.pdf": "gamma",
    }

    assert resolve_password(str(file_a), None, mapping) == "alpha"
    assert resolve_password(str(tmp_path / "b.pdf"), "fallback", mapping) == "fallback"
    nested = tmp_path / "nested" / "a.pdf"
    nested.parent.mkdir()
    nested.touch()
    assert resolve_password(str(nested), None, mapping) == "beta"


def test_passwords_for_path_puts_mapped_password_first(tmp_path: Path) -> None:
    target = tmp_path / "statement.pdf"
    mapping = {"statement.pdf": "per-file"}

    assert passwords_for_path(str(target), ["global"], mapping) == ["per-file", "global"]
    assert passwords_for_path(str(tmp_path / "x.pdf"), ["global"], mapping) == ["global"]
    assert passwords_for_path(str(target), None, None) == []
