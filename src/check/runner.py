"""Repository-level checking: config, catalog and sources tied together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catalog.properties import load_catalog
from check.diagnostics import Diagnostic, Severity
from check.engine import validate_placeholders
from check.undefined_keys import find_undefined_keys
from rules.config import load_config
from scan.files import find_source_files
from utils import line_starts, offset_to_line_col

if TYPE_CHECKING:
    from pathlib import Path

    from catalog.properties import MessageCatalog
    from rules.config import MsgKeysConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileDiagnostic:
    path: str
    line: int
    column: int
    diagnostic: Diagnostic

    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            **self.diagnostic.to_dict(),
        }


@dataclass
class CheckResult:
    diagnostics: list[FileDiagnostic] = field(default_factory=list)
    files_checked: int = 0

    @property
    def errors(self) -> list[FileDiagnostic]:
        return [
            item
            for item in self.diagnostics
            if item.diagnostic.severity is Severity.ERROR
        ]

    @property
    def warnings(self) -> list[FileDiagnostic]:
        return [
            item
            for item in self.diagnostics
            if item.diagnostic.severity is Severity.WARNING
        ]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "files_checked": self.files_checked,
            "diagnostics": [item.to_dict() for item in self.diagnostics],
        }


def check_source(
    text: str, config: MsgKeysConfig, catalog: MessageCatalog
) -> list[Diagnostic]:
    """Run the enabled checks over one document."""
    diagnostics: list[Diagnostic] = []

    if config.checks.undefined_keys:
        diagnostics.extend(
            find_undefined_keys(
                text,
                config.message_key_extraction_patterns,
                config.annotation_key_extraction_patterns,
                catalog.is_defined,
            )
        )

    if config.checks.placeholders:
        diagnostics.extend(
            validate_placeholders(
                text,
                config.message_key_extraction_patterns,
                catalog.lookup,
            )
        )

    return diagnostics


def _sort_key(item: FileDiagnostic) -> tuple[str, int, int, str, str]:
    return (
        item.path,
        item.diagnostic.range[0],
        item.diagnostic.range[1],
        item.diagnostic.kind.value,
        item.diagnostic.message,
    )


def check_repository(root: Path, config: MsgKeysConfig | None = None) -> CheckResult:
    """Check every source file under ``root``.

    Args:
        root: Repository root; catalog globs and config are relative to it
        config: Optional configuration (default: loaded from msgkeys.toml)

    Returns:
        CheckResult with diagnostics sorted by path, then position.
    """
    if config is None:
        config = load_config(root)

    catalog = load_catalog(root, config.property_file_globs)
    result = CheckResult()

    for file_path in find_source_files(
        root,
        suffixes=config.source_suffixes,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        relative_path = file_path.relative_to(root).as_posix()
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable source %s: %s", relative_path, exc)
            continue

        result.files_checked += 1
        starts = line_starts(text)
        for diagnostic in check_source(text, config, catalog):
            line, column = offset_to_line_col(starts, diagnostic.range[0])
            result.diagnostics.append(
                FileDiagnostic(
                    path=relative_path,
                    line=line,
                    column=column,
                    diagnostic=diagnostic,
                )
            )

    result.diagnostics.sort(key=_sort_key)
    logger.info(
        "Checked %d files: %d errors, %d warnings",
        result.files_checked,
        len(result.errors),
        len(result.warnings),
    )
    return result


__all__ = ["CheckResult", "FileDiagnostic", "check_repository", "check_source"]
