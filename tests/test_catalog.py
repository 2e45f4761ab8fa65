from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from catalog.properties import (
    DuplicateKeyError,
    MessageCatalog,
    find_key_location,
    insert_key,
    load_catalog,
    parse_properties,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_parse_properties_skips_comments_and_blank_lines() -> None:
    text = "# header\n\ngreeting=Hello {0}\n  \nfarewell = Bye\n"

    assert parse_properties(text) == {"greeting": "Hello {0}", "farewell": "Bye"}


def test_parse_properties_first_definition_wins() -> None:
    assert parse_properties("k=first\nk=second\n") == {"k": "first"}


def test_parse_properties_keeps_equals_in_value() -> None:
    assert parse_properties("expr=a=b\n") == {"expr": "a=b"}


def test_parse_properties_line_without_separator_defines_empty_value() -> None:
    assert parse_properties("flag\n") == {"flag": ""}


def test_message_catalog_lookup_and_membership() -> None:
    catalog = MessageCatalog({"a.b": "x {0}", "a.c": "y"})

    assert catalog.lookup("a.b") == "x {0}"
    assert catalog.lookup("missing") is None
    assert catalog.is_defined("a.c")
    assert not catalog.is_defined("missing")
    assert len(catalog) == 2
    assert dict(catalog) == {"a.b": "x {0}", "a.c": "y"}


def test_keys_matching_is_case_insensitive_and_sorted() -> None:
    catalog = MessageCatalog({"Task.Done": "", "task.archived": "", "greeting": ""})

    assert catalog.keys_matching("TASK") == ["Task.Done", "task.archived"]


def test_load_catalog_orders_files_and_keeps_first_definition(tmp_path: Path) -> None:
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "b.properties").write_text("shared=from b\nonly.b=B\n", "utf-8")
    (resources / "a.properties").write_text("shared=from a\n", "utf-8")

    catalog = load_catalog(tmp_path, ["resources/*.properties"])

    assert catalog.lookup("shared") == "from a"
    assert catalog.lookup("only.b") == "B"


def test_load_catalog_glob_order_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "base.properties").write_text("k=base\n", "utf-8")
    (tmp_path / "override.properties").write_text("k=override\n", "utf-8")

    catalog = load_catalog(tmp_path, ["override.properties", "*.properties"])

    assert catalog.lookup("k") == "override"


def test_load_catalog_skips_unreadable_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "bad.properties").write_bytes(b"k=\xff\xfe\n")
    (tmp_path / "good.properties").write_text("ok=yes\n", "utf-8")

    with caplog.at_level(logging.WARNING, logger="catalog.properties"):
        catalog = load_catalog(tmp_path, ["*.properties"])

    assert dict(catalog) == {"ok": "yes"}
    assert any("bad.properties" in record.getMessage() for record in caplog.records)


def test_load_catalog_without_globs_is_empty(tmp_path: Path) -> None:
    assert len(load_catalog(tmp_path, [])) == 0


def test_find_key_location_reports_first_defining_file(tmp_path: Path) -> None:
    (tmp_path / "a.properties").write_text("# a\nother=x\nshared=A\n", "utf-8")
    (tmp_path / "b.properties").write_text("shared=B\nonly.b=B\n", "utf-8")

    assert find_key_location(tmp_path, ["*.properties"], "shared") == (
        tmp_path / "a.properties",
        3,
    )
    assert find_key_location(tmp_path, ["*.properties"], "only.b") == (
        tmp_path / "b.properties",
        2,
    )


def test_find_key_location_requires_exact_key(tmp_path: Path) -> None:
    (tmp_path / "m.properties").write_text("greeting.hello=Hi\n", "utf-8")

    assert find_key_location(tmp_path, ["*.properties"], "greeting") is None


@pytest.mark.parametrize(
    ("original", "key", "line", "expected"),
    [
        ("alpha=1\ncharlie=3\n", "bravo", 2, "alpha=1\nbravo=\ncharlie=3\n"),
        ("alpha=1\ncharlie=3\n", "Aardvark", 1, "Aardvark=\nalpha=1\ncharlie=3\n"),
        ("# header\nbeta=2\n", "alpha", 2, "# header\nalpha=\nbeta=2\n"),
        ("b=1\r\nd=2\r\n", "c", 2, "b=1\r\nc=\r\nd=2\r\n"),
        ("", "first", 1, "first=\n"),
    ],
)
def test_insert_key_keeps_sorted_order(
    tmp_path: Path, original: str, key: str, line: int, expected: str
) -> None:
    target = tmp_path / "messages.properties"
    target.write_bytes(original.encode("utf-8"))

    assert insert_key(target, key) == line
    assert target.read_bytes().decode("utf-8") == expected


def test_insert_key_appends_when_sorting_last(tmp_path: Path) -> None:
    target = tmp_path / "messages.properties"
    target.write_text("alpha=1\ncharlie=3", encoding="utf-8")

    assert insert_key(target, "delta") == 3
    assert target.read_text(encoding="utf-8") == "alpha=1\ncharlie=3\ndelta="


def test_insert_key_refuses_duplicate(tmp_path: Path) -> None:
    target = tmp_path / "messages.properties"
    target.write_text("alpha=1\nbeta = 2\n", encoding="utf-8")

    with pytest.raises(
        DuplicateKeyError, match="already exists in messages.properties"
    ):
        insert_key(target, "beta")

    assert target.read_text(encoding="utf-8") == "alpha=1\nbeta = 2\n"
