"""Pipeline orchestration: convert, segment, number, and emit each source document."""

from __future__ import annotations

import logging
import re
import shutil
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import DocSplitConfig, validate_config
from .convert import ConversionError, Converter, PandocConverter
from .logging import get_logger
from .models import FileInfo
from .naming import Sequencer, slugify
from .parsing import StructureError, extract_frontmatter, normalize_lines, segment_lines
from .render import DocumentEmitter, WriteFailure
from .render.emitter import write_text

CONVERTED = "converted"
CONVERSION_FAILED = "conversion_failed"
STRUCTURE_ERROR = "structure_error"
FAILED = "failed"

SOURCE_SUFFIXES = (".docx",)
_LOCK_FILE_PREFIX = "~$"
OUTPUT_MARKER = ".docsplit-output"
_MARKER_TEXT = "Created by docsplit. This folder is deleted and rebuilt on every run.\n"


@dataclass
class DocumentPlan:
    """Everything derived from one source before anything touches the disk."""

    title: str
    custom_metadata: List[str]
    files: List[FileInfo]


@dataclass
class DocumentOutcome:
    """Result of processing a single source document."""

    source: Path
    status: str
    output_root: Optional[Path] = None
    planned: List[str] = field(default_factory=list)
    written: int = 0
    failures: List[WriteFailure] = field(default_factory=list)
    reason: Optional[str] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.status == CONVERTED and not self.failures

    def summary(self) -> str:
        name = self.source.name
        if self.status == CONVERSION_FAILED:
            return f"{name}: skipped, conversion failed ({self.reason})"
        if self.status == STRUCTURE_ERROR:
            return f"{name}: skipped, no part headings found ({self.reason})"
        if self.status == FAILED:
            return f"{name}: skipped, unexpected error ({self.reason})"
        if self.dry_run:
            return f"{name}: {len(self.planned)} file(s) planned (dry-run)"
        message = f"{name}: {self.written} file(s) written to {self.output_root}"
        if self.failures:
            message += f", {len(self.failures)} failed"
        return message


@dataclass
class BatchReport:
    """Aggregated outcomes for a run over several source documents."""

    outcomes: List[DocumentOutcome] = field(default_factory=list)

    @property
    def converted(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)


def document_title(source: Path) -> str:
    """Derive a display title from a source file name."""
    words = re.sub(r"[_\-]+", " ", source.stem)
    return string.capwords(words)


def document_folder(source: Path) -> str:
    """Derive the per-document output folder name from a source file name."""
    return slugify(source.stem) or "document"


def discover_sources(paths: Iterable[Path]) -> List[Path]:
    """Expand directories into their source documents; keep explicit paths as given."""
    sources: List[Path] = []
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.iterdir()):
                if not candidate.is_file():
                    continue
                if candidate.name.startswith(_LOCK_FILE_PREFIX):
                    continue
                if candidate.suffix.lower() in SOURCE_SUFFIXES:
                    sources.append(candidate)
        else:
            sources.append(path)
    return sources


class Orchestrator:
    """Runs the split pipeline over source documents, one at a time."""

    def __init__(
        self,
        config: DocSplitConfig,
        *,
        converter: Converter | None = None,
        emitter: DocumentEmitter | None = None,
    ) -> None:
        self.config = validate_config(config)
        self.converter = converter or PandocConverter(
            executable=config.converter.executable,
            extra_args=config.converter.extra_args,
            timeout=config.converter.timeout,
        )
        self.emitter = emitter or DocumentEmitter(
            link_style=config.link_style,
            templates_dir=config.templates_dir,
        )
        self.sequencer = Sequencer(config.padding)
        self.logger = get_logger("orchestrator")

    @property
    def output_dir(self) -> Path:
        return self.config.output_dir or Path.cwd()

    def run(self, sources: Sequence[Path], *, dry_run: bool = False) -> BatchReport:
        """Process every source; a failing document never stops the batch."""
        report = BatchReport()
        for source in sources:
            try:
                outcome = self.process(source, dry_run=dry_run)
            except Exception as exc:  # pragma: no cover - defensive guard
                self._log_exception(f"Unexpected failure processing {source}", exc)
                outcome = DocumentOutcome(source=source, status=FAILED, reason=str(exc))
            report.outcomes.append(outcome)
        self.logger.info(
            "Finished: %d of %d document(s) converted", report.converted, len(report.outcomes)
        )
        return report

    def process(self, source: Path, *, dry_run: bool = False) -> DocumentOutcome:
        """Convert and split one source document."""
        self.logger.info("Processing %s", source)
        try:
            lines = self.converter.convert(source)
        except ConversionError as exc:
            self.logger.warning("Skipping %s: conversion failed: %s", source.name, exc)
            return DocumentOutcome(source=source, status=CONVERSION_FAILED, reason=str(exc))

        try:
            plan = self.plan(source, lines)
        except StructureError as exc:
            self.logger.warning("Skipping %s: structural error: %s", source.name, exc)
            return DocumentOutcome(source=source, status=STRUCTURE_ERROR, reason=str(exc))

        output_root = self.output_dir / document_folder(source)
        outcome = DocumentOutcome(
            source=source,
            status=CONVERTED,
            output_root=output_root,
            planned=[info.relative_path for info in plan.files],
            dry_run=dry_run,
        )
        if dry_run:
            for relative_path in outcome.planned:
                self.logger.info("Would write %s", relative_path)
            return outcome

        owned = not output_root.exists() or (output_root / OUTPUT_MARKER).is_file()
        if self.config.clean:
            self._clean(output_root, owned=owned)
        emitted = self.emitter.emit(
            plan.files,
            output_root,
            title=plan.title,
            custom_metadata=plan.custom_metadata,
        )
        if owned:
            self._mark(output_root)
        outcome.written = len(emitted.written)
        outcome.failures = list(emitted.failures)
        if emitted.failures:
            self.logger.warning(
                "%s: %d of %d file(s) could not be written",
                source.name,
                len(emitted.failures),
                len(plan.files),
            )
        return outcome

    def plan(self, source: Path, lines: Sequence[str]) -> DocumentPlan:
        """Run the in-memory stages for one document's converted lines."""
        normalized = normalize_lines(lines)
        frontmatter = extract_frontmatter(normalized)
        parts = segment_lines(normalized[frontmatter.body_start :])
        files = self.sequencer.number(parts)
        self.logger.debug(
            "%s: %d line(s), %d metadata line(s), %d part(s)",
            source.name,
            len(normalized),
            len(frontmatter.lines),
            len(parts),
        )
        return DocumentPlan(
            title=document_title(source),
            custom_metadata=list(frontmatter.lines),
            files=list(files),
        )

    def _clean(self, output_root: Path, *, owned: bool) -> None:
        """Remove a previous run's output; folders without the marker are never touched."""
        if not output_root.is_dir():
            return
        if not owned:
            self.logger.warning(
                "Not cleaning %s: it has no %s marker, so docsplit did not create it",
                output_root,
                OUTPUT_MARKER,
            )
            return
        try:
            shutil.rmtree(output_root)
        except OSError as exc:
            self.logger.warning("Could not remove previous output at %s: %s", output_root, exc)
        else:
            self.logger.debug("Removed previous output at %s", output_root)

    def _mark(self, output_root: Path) -> None:
        try:
            write_text(output_root / OUTPUT_MARKER, _MARKER_TEXT)
        except OSError as exc:
            self.logger.warning("Could not write %s in %s: %s", OUTPUT_MARKER, output_root, exc)

    def _log_exception(self, message: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.exception("%s: %s", message, exc)
        else:
            self.logger.error("%s: %s", message, exc)


__all__ = [
    "OUTPUT_MARKER",
    "BatchReport",
    "DocumentOutcome",
    "DocumentPlan",
    "Orchestrator",
    "discover_sources",
    "document_folder",
    "document_title",
]
