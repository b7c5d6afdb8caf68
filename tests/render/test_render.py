"""Tests for navigation links and document emission."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from docsplit.config import ConfigError
from docsplit.models import FULL_LINKS, LINK_STYLES, SIMPLE_LINKS, FileInfo
from docsplit.naming import Sequencer
from docsplit.parsing import normalize_lines, segment_lines
from docsplit.render import NO_LINK, DocumentEmitter, build_navigation, link_to
from docsplit.render.emitter import write_text, yaml_quote
from tests._fixtures.documents import TWO_BOOKS


@pytest.fixture
def infos():
    return Sequencer(3).number(segment_lines(TWO_BOOKS))


def test_link_to_simple_uses_file_stem(infos) -> None:
    assert link_to(infos[1], SIMPLE_LINKS) == "[[002-part-ii|Part II]]"


def test_link_to_full_uses_relative_path(infos) -> None:
    assert link_to(infos[2], FULL_LINKS) == "[[002-book-two/001-chapter-002/001-part-iii|Part III]]"


def test_link_styles_are_the_two_supported_constants() -> None:
    assert LINK_STYLES == (SIMPLE_LINKS, FULL_LINKS) == ("simple", "full")


def test_link_to_rejects_unknown_style(infos) -> None:
    with pytest.raises(ValueError):
        link_to(infos[0], "fancy")


def test_build_navigation_links_neighbours(infos) -> None:
    navigation = build_navigation(infos, SIMPLE_LINKS)
    assert navigation[0].previous == NO_LINK
    assert navigation[0].next == link_to(infos[1], SIMPLE_LINKS)
    assert navigation[1].previous == link_to(infos[0], SIMPLE_LINKS)
    assert navigation[1].next == link_to(infos[2], SIMPLE_LINKS)
    assert navigation[2].previous == link_to(infos[1], SIMPLE_LINKS)
    assert navigation[2].next == NO_LINK


def test_build_navigation_single_part_has_no_links(infos) -> None:
    (only,) = build_navigation(infos[:1], FULL_LINKS)
    assert only.previous == NO_LINK
    assert only.next == NO_LINK


def test_yaml_quote_escapes_quotes_and_backslashes() -> None:
    assert yaml_quote("") == '""'
    assert yaml_quote('say "hi"') == '"say \\"hi\\""'
    assert yaml_quote("a\\b") == '"a\\\\b"'


def test_render_builds_metadata_and_body(infos) -> None:
    emitter = DocumentEmitter(link_style=SIMPLE_LINKS, line_separator="\n")
    documents = emitter.render(infos, title="My Book", custom_metadata=["author: \"Jane\""])

    assert [doc.relative_path for doc in documents] == [info.relative_path for info in infos]
    assert documents[1].text == (
        "---\n"
        "author: \"Jane\"\n"
        "title: \"My Book\"\n"
        "book: \"Book One\"\n"
        "chapter: \"Chapter A\"\n"
        "part: \"Part II\"\n"
        "previous: \"[[001-part-i|Part I]]\"\n"
        "next: \"[[001-part-iii|Part III]]\"\n"
        "---\n"
        "# Part II\n"
        "text2\n"
    )


def test_render_uses_empty_literal_at_chain_ends(infos) -> None:
    documents = DocumentEmitter(line_separator="\n").render(infos, title="T")
    assert 'previous: ""\n' in documents[0].text
    assert 'next: ""\n' in documents[-1].text
    assert 'chapter: ""\n' in documents[-1].text


def test_render_honours_line_separator(infos) -> None:
    documents = DocumentEmitter(line_separator="\r\n").render(infos, title="T")
    text = documents[0].text
    assert text.startswith("---\r\n")
    assert "\n" not in text.replace("\r\n", "")


def test_render_replaces_escaped_apostrophes() -> None:
    (info,) = Sequencer(3).number(segment_lines(["### Part", "it\\'s here"]))
    (document,) = DocumentEmitter(line_separator="\n").render([info], title="T")
    assert document.text.endswith("# Part\nit's here\n")
    assert "\\'" not in document.text


def _metadata(text: str) -> dict:
    return yaml.safe_load(text.split("---\n")[1])


def test_render_metadata_stays_valid_yaml_after_doubled_escapes() -> None:
    lines = normalize_lines(["### It\\\\'s \"done\"", "body"])
    (info,) = Sequencer(3).number(segment_lines(lines))
    (document,) = DocumentEmitter(line_separator="\n").render([info], title="Tom\\'s")

    metadata = _metadata(document.text)
    assert metadata["part"] == "It's \"done\""
    assert metadata["title"] == "Tom's"


def test_render_cleans_escaped_apostrophes_in_records_built_directly() -> None:
    info = FileInfo(
        file_name="001-it-s.md",
        relative_path="001-it-s.md",
        book_name="Bob\\\\'s Book",
        chapter_name="",
        part_name="It\\'s",
        content_lines=("### It\\'s", "a\\'b"),
    )
    (document,) = DocumentEmitter(line_separator="\n").render([info], title="T")

    metadata = _metadata(document.text)
    assert metadata["book"] == "Bob's Book"
    assert metadata["part"] == "It's"
    assert document.text.endswith("# It's\na'b\n")


def test_render_uses_template_override(tmp_path: Path, infos) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "part.md.j2").write_text("{{ part }}|{{ next }}\n", encoding="utf-8")
    documents = DocumentEmitter(templates_dir=templates, line_separator="\n").render(infos, title="T")
    assert documents[0].text == "Part I|[[002-part-ii|Part II]]\n"


def test_template_override_can_use_quote_filter(tmp_path: Path, infos) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "part.md.j2").write_text("part: {{ part | quote }}\n", encoding="utf-8")
    documents = DocumentEmitter(templates_dir=templates, line_separator="\n").render(infos, title="T")
    assert documents[0].text == 'part: "Part I"\n'


@pytest.mark.parametrize(
    "source",
    ["{{ part | shout }}\n", "{% for line in body %}{{ line }}\n"],
)
def test_broken_template_is_a_config_error(tmp_path: Path, source: str) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "part.md.j2").write_text(source, encoding="utf-8")
    with pytest.raises(ConfigError, match="part.md.j2"):
        DocumentEmitter(templates_dir=templates)


def test_emit_writes_tree(tmp_path: Path, infos) -> None:
    report = DocumentEmitter(line_separator="\n").emit(infos, tmp_path, title="T")

    assert report.ok
    assert len(report.written) == 3
    target = tmp_path / "002-book-two" / "001-chapter-002" / "001-part-iii.md"
    assert target.read_text(encoding="utf-8").endswith("# Part III\ntext3\n")


def test_emit_continues_after_write_failure(tmp_path: Path, infos) -> None:
    def flaky_writer(path: Path, text: str) -> None:
        if path.name == "002-part-ii.md":
            raise PermissionError("read-only")
        write_text(path, text)

    emitter = DocumentEmitter(writer=flaky_writer, line_separator="\n")
    report = emitter.emit(infos, tmp_path, title="T")

    assert not report.ok
    assert [failure.path.name for failure in report.failures] == ["002-part-ii.md"]
    assert "read-only" in report.failures[0].error
    assert [path.name for path in report.written] == ["001-part-i.md", "001-part-iii.md"]
    assert (tmp_path / "002-book-two" / "001-chapter-002" / "001-part-iii.md").exists()
