"""Assembly and writing of the linked output documents."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, Template, TemplateError

from ..config import ConfigError
from ..logging import get_logger
from ..models import SIMPLE_LINKS, FileInfo
from ..parsing.normalize import unescape_apostrophes
from .links import build_navigation

TEMPLATE_NAME = "part.md.j2"
DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")

Writer = Callable[[Path, str], None]


@dataclass(frozen=True)
class RenderedDocument:
    """Final text for one output file, addressed relative to the document root."""

    relative_path: str
    text: str


@dataclass(frozen=True)
class WriteFailure:
    """An output file that could not be written."""

    path: Path
    error: str


@dataclass
class EmitReport:
    """Outcome of writing one document's output tree."""

    written: List[Path] = field(default_factory=list)
    failures: List[WriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def yaml_quote(value: object) -> str:
    """Render ``value`` as a double-quoted YAML scalar."""
    text = "" if value is None else str(value)
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def write_text(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` verbatim, creating parent folders first."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")


class DocumentEmitter:
    """Renders FileInfo records into linked markdown files and writes them."""

    def __init__(
        self,
        *,
        link_style: str = SIMPLE_LINKS,
        templates_dir: Path | None = None,
        writer: Writer | None = None,
        line_separator: str | None = None,
    ) -> None:
        self.link_style = link_style
        self.templates_dir = templates_dir
        self.line_separator = line_separator or os.linesep
        self._writer = writer or write_text
        self._env = self._create_env(templates_dir, self.line_separator)
        self._template = self._load_template(self._env)
        self.logger = get_logger("emitter")

    def render(
        self,
        infos: Sequence[FileInfo],
        *,
        title: str,
        custom_metadata: Sequence[str] = (),
    ) -> List[RenderedDocument]:
        """Return the text of every output document, in input order."""
        navigation = build_navigation(infos, self.link_style)
        metadata = [unescape_apostrophes(line) for line in custom_metadata]
        rendered: List[RenderedDocument] = []
        for info, links in zip(infos, navigation):
            # Escaped apostrophes go before quoting; quoting doubles backslashes.
            text = self._template.render(
                custom_metadata=metadata,
                title=unescape_apostrophes(title),
                book=unescape_apostrophes(info.book_name),
                chapter=unescape_apostrophes(info.chapter_name),
                part=unescape_apostrophes(info.part_name),
                previous=unescape_apostrophes(links.previous),
                next=unescape_apostrophes(links.next),
                body=[unescape_apostrophes(line) for line in info.content_lines[1:]],
            )
            rendered.append(RenderedDocument(relative_path=info.relative_path, text=text))
        return rendered

    def write(self, documents: Sequence[RenderedDocument], output_root: Path) -> EmitReport:
        """Write every document under ``output_root``; failures never stop the batch."""
        report = EmitReport()
        for document in documents:
            target = output_root.joinpath(*document.relative_path.split("/"))
            try:
                self._writer(target, document.text)
            except OSError as exc:
                self.logger.warning("Failed to write %s: %s", document.relative_path, exc)
                report.failures.append(WriteFailure(path=target, error=str(exc)))
                continue
            self.logger.info("Wrote %s", document.relative_path)
            report.written.append(target)
        return report

    def emit(
        self,
        infos: Sequence[FileInfo],
        output_root: Path,
        *,
        title: str,
        custom_metadata: Sequence[str] = (),
    ) -> EmitReport:
        """Render and write one document's parts."""
        documents = self.render(infos, title=title, custom_metadata=custom_metadata)
        return self.write(documents, output_root)

    @staticmethod
    def _create_env(templates_dir: Optional[Path], line_separator: str) -> Environment:
        search_path = [str(DEFAULT_TEMPLATES_DIR)]
        if templates_dir is not None:
            search_path.insert(0, str(templates_dir))
        env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence=line_separator,
        )
        env.filters["quote"] = yaml_quote
        return env

    @staticmethod
    def _load_template(env: Environment) -> Template:
        try:
            return env.get_template(TEMPLATE_NAME)
        except TemplateError as exc:
            raise ConfigError(f"Cannot load template {TEMPLATE_NAME}: {exc}") from exc


__all__ = [
    "DocumentEmitter",
    "EmitReport",
    "RenderedDocument",
    "WriteFailure",
    "write_text",
    "yaml_quote",
]
