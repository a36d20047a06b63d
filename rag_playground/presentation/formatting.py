"""Text rendering for chunk cards, shared by the chat app and the CLI."""
import re

from ..core.models.search import Segment
from ..core.services.session_service import ChunkView

_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~])")


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def escape_markdown(text: str) -> str:
    """Backslash-escape characters markdown would interpret."""
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


def render_segments(
    segments: list[Segment],
    open_mark: str = "**",
    close_mark: str = "**",
    escape: bool = True,
) -> str:
    """Join segments, wrapping matched ones in the given markers.

    With ``escape`` the segment text is markdown-escaped first, so the
    document's own markup cannot merge with the markers.
    """
    parts = []
    for s in segments:
        text = escape_markdown(s.text) if escape else s.text
        parts.append(f"{open_mark}{text}{close_mark}" if s.matched else text)
    return "".join(parts)


def render_card(
    view: ChunkView,
    open_mark: str = "**",
    close_mark: str = "**",
    escape: bool = True,
) -> str:
    header = f"### Chunk {view.number} · {view.dimension} dims"
    if view.entry.match_count > 0:
        header += f" · {plural(view.entry.match_count, 'hit')}"

    lines = [
        header,
        "",
        render_segments(view.segments, open_mark, close_mark, escape),
        "",
        f"Embedding preview: `{view.preview}`",
    ]
    if view.expanded:
        lines += ["", "```", view.full_vector, "```"]
    return "\n".join(lines)


def render_summary(display_count: int, total: int, tokens: list[str]) -> str:
    if total == 0:
        return (
            "No chunks match your search terms. "
            "Try different keywords or clear the search."
        )
    summary = f"Showing {display_count} of {plural(total, 'chunk')}"
    if tokens:
        summary += f" matching {', '.join(tokens)}"
    return summary


def size_label(option: int, total: int) -> str:
    return f"All ({total})" if option == total else str(option)
