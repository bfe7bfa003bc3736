from __future__ import annotations

import pytest

from docsync.config import DEFAULT_WORD_BOUNDARIES, DocSyncConfig
from docsync.errors import UnknownItemError
from docsync.offset_index import OffsetIndex
from docsync.parser import parse_document
from docsync.tree_model import Node, TextRun

SAMPLE = '<article><title>Welcome</title><para>Hi <emphasis role="bold">there</emphasis></para></article>'
PROSE = """<article>
  <para>
    Hello, brave new world. Is this right?!  Yes;indeed.
  </para>
  <para>Second <emphasis>block</emphasis> here.</para>
</article>"""


def _index(text: str, config: DocSyncConfig | None = None) -> OffsetIndex:
    result = parse_document(text, config)
    assert result.ok, result.error
    return OffsetIndex.build(result, config)


def test_run_at_finds_text_run() -> None:
    index = _index(SAMPLE)
    offset = SAMPLE.index("there") + 2

    run = index.run_at(offset)
    assert isinstance(run, TextRun)
    assert run.content == "there"
    assert index.locate(offset) is run


def test_run_at_includes_trimmed_trailing_whitespace() -> None:
    index = _index(SAMPLE)
    space = SAMPLE.index("Hi ") + 2

    assert index.run_at(space).content == "Hi"


def test_locate_falls_back_to_enclosing_node() -> None:
    index = _index(SAMPLE)
    offset = SAMPLE.index('<emphasis role="bold">') + 3

    assert index.run_at(offset) is None
    located = index.locate(offset)
    assert isinstance(located, Node)
    assert located.tag == "para"


def test_locate_outside_root_content_is_none() -> None:
    index = _index(SAMPLE)
    assert index.locate(0) is None
    assert index.locate(len(SAMPLE)) is None


def test_node_at_returns_deepest_node() -> None:
    index = _index(SAMPLE)
    assert index.node_at(SAMPLE.index("there")).tag == "emphasis"
    assert index.node_at(SAMPLE.index("Welcome")).tag == "title"


def test_span_of_accepts_items_and_ids() -> None:
    index = _index(SAMPLE)
    run = index.run_at(SAMPLE.index("Welcome"))

    assert index.span_of(run) == (run.start, run.end)
    assert index.span_of(run.id) == (SAMPLE.index("Welcome"), SAMPLE.index("</title>"))
    assert index.span_of(0) == (0, len(SAMPLE))


def test_unknown_ids_raise_key_error() -> None:
    index = _index(SAMPLE)
    with pytest.raises(UnknownItemError):
        index.span_of(999)
    with pytest.raises(KeyError):
        index.get(-1)


def test_parent_of() -> None:
    index = _index(SAMPLE)
    run = index.run_at(SAMPLE.index("there"))

    assert index.parent_of(run.id).tag == "emphasis"
    assert index.parent_of(0) is None


def test_empty_index_answers_nothing() -> None:
    index = OffsetIndex(None)
    assert index.runs == []
    assert index.locate(0) is None
    assert index.word_span(0) is None


@pytest.mark.parametrize(
    "needle, expected",
    [
        ("brave", "brave"),
        ("rave", "brave"),
        ("Hello", "Hello"),
        ("orld", "world"),
        ("indeed", "indeed"),
        ("Yes", "Yes"),
    ],
)
def test_word_span_snaps_to_word(needle: str, expected: str) -> None:
    index = _index(PROSE)
    offset = PROSE.index(needle)

    start, end = index.word_span(offset)
    assert PROSE[start:end] == expected


def test_word_span_stays_inside_run() -> None:
    index = _index(PROSE)
    start, end = index.word_span(PROSE.index("Second"))
    assert PROSE[start:end] == "Second"

    start, end = index.word_span(PROSE.index("block"))
    assert PROSE[start:end] == "block"


def test_word_span_on_boundary_keeps_offset() -> None:
    index = _index(PROSE)
    comma = PROSE.index(",")

    start, end = index.word_span(comma)
    assert start <= comma < end
    assert PROSE[start:end] == "Hello,"


def test_word_span_properties_for_every_offset() -> None:
    index = _index(PROSE)
    boundaries = set(DEFAULT_WORD_BOUNDARIES)

    for run in index.runs:
        for offset in range(run.start, run.end):
            start, end = index.word_span(offset)
            assert start <= offset < end
            assert run.start <= start and end <= run.end
            if start > run.start:
                assert PROSE[start - 1] in boundaries
            if end < run.end:
                assert PROSE[end] in boundaries


def test_custom_word_boundaries() -> None:
    config = DocSyncConfig(word_boundaries=" -")
    text = "<para>well-known fact.</para>"
    index = _index(text, config)

    start, end = index.word_span(text.index("known"))
    assert text[start:end] == "known"
    start, end = index.word_span(text.index("fact"))
    assert text[start:end] == "fact."
