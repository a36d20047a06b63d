"""Tests for chunk card rendering."""
from rag_playground.core.models.search import RankedEntry, Segment
from rag_playground.core.services.search_service import SearchService
from rag_playground.core.services.session_service import ChunkView
from rag_playground.presentation.formatting import (
    escape_markdown,
    plural,
    render_card,
    render_segments,
    render_summary,
    size_label,
)

from .helpers import make_chunks


def _view(match_count=0, expanded=False):
    chunk = make_chunks("Lorem Lorem")[0]
    return ChunkView(
        entry=RankedEntry(chunk=chunk, original_index=2, match_count=match_count),
        segments=[Segment("Lorem", True), Segment(" "), Segment("Lorem", True)],
        expanded=expanded,
        preview="0.1000, 0.2000",
        full_vector="0.100000, 0.200000",
    )


def test_plural():
    assert plural(1, "chunk") == "1 chunk"
    assert plural(3, "hit") == "3 hits"


def test_render_segments_marks_matches():
    segments = [Segment("a"), Segment("b", True), Segment("c")]
    assert render_segments(segments) == "a**b**c"
    assert render_segments(segments, "[", "]") == "a[b]c"


def test_render_card_collapsed():
    text = render_card(_view(match_count=2))

    assert text.startswith("### Chunk 3 · 2 dims · 2 hits")
    assert "**Lorem** **Lorem**" in text
    assert "Embedding preview: `0.1000, 0.2000`" in text
    assert "0.100000" not in text


def test_render_card_expanded_without_hits():
    text = render_card(_view(expanded=True))

    assert "hit" not in text.splitlines()[0]
    assert "0.100000, 0.200000" in text


def test_render_summary():
    assert render_summary(10, 45, []) == "Showing 10 of 45 chunks"
    assert render_summary(1, 1, ["Lorem", "ipsum"]) == "Showing 1 of 1 chunk matching Lorem, ipsum"
    assert render_summary(0, 0, ["zzz"]).startswith("No chunks match")


def test_size_label():
    assert size_label(10, 45) == "10"
    assert size_label(45, 45) == "All (45)"


def test_markdown_in_chunk_text_is_escaped():
    segments = SearchService.highlight("# T **b** a*b*c `x`", ["b"])

    rendered = render_segments(segments)

    assert rendered == r"\# T \*\***b**\*\* a\***b**\*c \`x\`"


def test_escape_markdown_keeps_plain_words():
    assert escape_markdown("plain words 42") == "plain words 42"
    assert escape_markdown("a_b [c](d)") == r"a\_b \[c\]\(d\)"


def test_unescaped_rendering_for_terminal():
    segments = [Segment("a*"), Segment("b", True)]
    assert render_segments(segments, "[", "]", escape=False) == "a*[b]"
