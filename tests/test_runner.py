from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from catalog.properties import MessageCatalog
from check.diagnostics import DiagnosticKind, Severity
from check.runner import check_repository, check_source
from rules.config import ChecksConfig, MsgKeysConfig, load_config

_FIXTURE = Path(__file__).parent / "fixtures" / "mini_repo"
_GREETER = "src/main/java/com/example/Greeter.java"
_LABELS = "src/main/java/com/example/Labels.java"


def _copy_mini_repo_fixture(root: Path) -> None:
    shutil.copytree(_FIXTURE, root)


def test_check_repository_on_fixture(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    result = check_repository(repo_root)

    assert result.files_checked == 2
    assert not result.ok
    assert [item.location() for item in result.diagnostics] == [
        f"{_GREETER}:7:21",
        f"{_GREETER}:10:21",
        f"{_LABELS}:5:30",
    ]
    assert [item.diagnostic.kind for item in result.diagnostics] == [
        DiagnosticKind.PLACEHOLDER_COUNT_MISMATCH,
        DiagnosticKind.UNDEFINED_MESSAGE_KEY,
        DiagnosticKind.PLACEHOLDER_COUNT_MISMATCH,
    ]
    assert len(result.errors) == 2
    assert len(result.warnings) == 1


def test_check_repository_skips_test_sources(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    result = check_repository(repo_root)

    assert all("src/test/" not in item.path for item in result.diagnostics)


def test_check_repository_respects_disabled_checks(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    config = load_config(repo_root).model_copy(
        update={"checks": ChecksConfig(undefined_keys=False)}
    )

    result = check_repository(repo_root, config)

    assert result.warnings == []
    assert len(result.errors) == 2


def test_check_repository_warnings_only_is_ok(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)
    config = load_config(repo_root).model_copy(
        update={"checks": ChecksConfig(placeholders=False)}
    )

    result = check_repository(repo_root, config)

    assert result.ok
    assert len(result.warnings) == 1


def test_check_repository_skips_undecodable_source(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "Broken.java").write_bytes(b'log("k", \xff);\n')
    (tmp_path / "Fine.java").write_text("class Fine {}\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="check.runner"):
        result = check_repository(tmp_path, MsgKeysConfig())

    assert result.files_checked == 1
    assert any("Broken.java" in record.getMessage() for record in caplog.records)


def test_check_source_runs_undefined_keys_before_placeholders() -> None:
    config = MsgKeysConfig(message_key_extraction_patterns=["log"])
    catalog = MessageCatalog({"known": "Hi {0} {1}"})
    text = 'log("known", a);\nlog("unknown", a);\n'

    diagnostics = check_source(text, config, catalog)

    assert [d.kind for d in diagnostics] == [
        DiagnosticKind.UNDEFINED_MESSAGE_KEY,
        DiagnosticKind.PLACEHOLDER_COUNT_MISMATCH,
    ]
    assert diagnostics[0].severity is Severity.WARNING
    assert diagnostics[1].severity is Severity.ERROR


def test_check_result_to_dict(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    payload = check_repository(repo_root).to_dict()

    assert payload["ok"] is False
    assert payload["files_checked"] == 2
    first = payload["diagnostics"][0]
    assert first == {
        "path": _GREETER,
        "line": 7,
        "column": 21,
        "start": first["start"],
        "end": first["start"] + len("greeting.hello"),
        "message": (
            "Placeholder count (2) doesn't match provided argument count (1)."
        ),
        "severity": "error",
        "kind": "placeholder_count_mismatch",
    }
