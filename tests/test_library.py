"""Tests for template library loading and matching."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.intent.schema import IntentType
from src.sql.library import TemplateLibrary, TemplateLibraryError, load_library, match_template


def test_load_library_reads_sorted_visible_files(tmp_path: Path) -> None:
    (tmp_path / "b.sql").write_text("UPDATE b;", encoding="utf-8")
    (tmp_path / "a.sql").write_text("UPDATE a;", encoding="utf-8")
    (tmp_path / ".hidden").write_text("UPDATE hidden;", encoding="utf-8")
    (tmp_path / "nested").mkdir()

    assert load_library(tmp_path) == ("UPDATE a;", "UPDATE b;")


def test_load_library_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(TemplateLibraryError):
        load_library(tmp_path / "missing")


def test_cached_provider_reads_once(tmp_path: Path) -> None:
    (tmp_path / "a.sql").write_text("DELETE FROM users;", encoding="utf-8")
    cached = TemplateLibrary(tmp_path)
    fresh = TemplateLibrary(tmp_path, cache=False)

    first = cached.templates()
    (tmp_path / "b.sql").write_text("INSERT INTO users VALUES (1);", encoding="utf-8")

    assert cached.templates() is first
    assert len(cached.templates()) == 1
    assert len(fresh.templates()) == 2


def test_bundled_library_has_a_template_per_type(library: tuple[str, ...]) -> None:
    for intent_type in IntentType:
        template = match_template(library, intent_type)
        assert template is not None
        assert intent_type.value in template.lower()


def test_update_types_require_set_or_update() -> None:
    library = (
        "SELECT first_name, last_name FROM users;",
        "UPDATE users SET last_name = 'x' WHERE user_id = 1;",
    )
    assert match_template(library, IntentType.name) == library[1]


def test_first_matching_template_wins() -> None:
    library = ("DELETE FROM a WHERE user_id = 1;", "DELETE FROM b WHERE user_id = 1;")
    assert match_template(library, IntentType.delete) == library[0]


def test_no_template_for_type() -> None:
    library = ("UPDATE users SET email = 'x' WHERE user_id = 1;",)
    assert match_template(library, IntentType.phone) is None
    assert match_template((), IntentType.insert) is None
