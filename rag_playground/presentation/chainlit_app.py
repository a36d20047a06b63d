import logging
from pathlib import Path

import chainlit as cl

from rag_playground.config.settings import settings
from rag_playground.container import configure_container, container
from rag_playground.core.exceptions import PlaygroundError
from rag_playground.core.models.document import UploadedFile
from rag_playground.core.protocols.embedder import EmbedderProtocol
from rag_playground.core.services.session_service import DocumentSession
from rag_playground.presentation.formatting import (
    plural,
    render_card,
    render_summary,
    size_label,
)

logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

configure_container(settings)

_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
    "md": "text/markdown",
    "json": "application/json",
}

_HELP = (
    "Type keywords to search the chunks in real time (separate them with "
    "spaces or commas). `/remove <word>` drops a keyword, `/back` drops the "
    "last one and `/clear` empties the search."
)


def _accept() -> dict[str, list[str]]:
    accept: dict[str, list[str]] = {}
    for ext in settings.allowed_extensions:
        media_type = _MEDIA_TYPES.get(ext, "application/octet-stream")
        accept.setdefault(media_type, []).append(f".{ext}")
    return accept


def _session() -> DocumentSession:
    session = cl.user_session.get("document_session")
    if session is None:
        session = container.resolve(DocumentSession)
        cl.user_session.set("document_session", session)
    return session


async def _notify(message: str, error: bool = False) -> None:
    if error:
        await cl.ErrorMessage(content=message).send()
    else:
        await cl.Message(content=message).send()


async def _clear_rendered() -> None:
    for msg in cl.user_session.get("rendered_messages", []):
        await msg.remove()
    cl.user_session.set("rendered_messages", [])


async def _render() -> None:
    """Redraw the chunk explorer for the current search input."""
    session = _session()
    await _clear_rendered()
    if not session.chunks:
        return

    response = session.search()
    window = session.window
    cards = session.view()

    actions = [
        cl.Action(name="reset", payload={}, label="Reset"),
    ]
    options = window.options()
    if len(options) > 1:
        actions += [
            cl.Action(
                name="select_size",
                payload={"size": option},
                label=size_label(option, window.total),
            )
            for option in options
        ]

    header = [f"**Chunk explorer** · {session.file_name}"]
    if response.tokens:
        header.append("Keywords: " + " ".join(f"`{t}`" for t in response.tokens))
    header.append(render_summary(window.display_count, window.total, response.tokens))

    rendered = [cl.Message(content="\n\n".join(header), actions=actions)]
    for card in cards:
        rendered.append(
            cl.Message(
                content=render_card(card),
                actions=[
                    cl.Action(
                        name="toggle_chunk",
                        payload={"index": card.entry.original_index},
                        label="Collapse" if card.expanded else "Expand",
                    )
                ],
            )
        )
    if window.has_hidden:
        rendered.append(
            cl.Message(
                content=f"{window.total - window.display_count} more hidden.",
                actions=[cl.Action(name="show_more", payload={}, label="Show more")],
            )
        )

    for msg in rendered:
        await msg.send()
    cl.user_session.set("rendered_messages", rendered)


async def _handle_upload(name: str, path: str, media_type: str | None) -> None:
    session = _session()
    if session.upload_locked:
        await _notify("Still processing the previous file, please wait.", error=True)
        return

    file = UploadedFile(
        name=name, content=Path(path).read_bytes(), media_type=media_type or ""
    )

    status = cl.Message(content="Preparing the embedding model and generating embeddings…")
    await status.send()
    try:
        chunks = await session.upload(file)
    except PlaygroundError as e:
        logger.error(f"Upload failed for {name}: {e}")
        await status.remove()
        await _notify(str(e), error=True)
        if not session.chunks:
            await _ask_for_file()
        return
    except Exception as e:
        logger.exception(f"Unexpected error while processing {name}")
        await status.remove()
        await _notify(f"Something went wrong while processing the file: {e}", error=True)
        await _ask_for_file()
        return

    await status.remove()
    await _notify(f"Processed {plural(len(chunks), 'chunk')} from {name}. {_HELP}")
    await _render()


async def _warmup_embedder(embedder: EmbedderProtocol) -> bool:
    """Load the model up front; a failure is reported, uploads stay possible."""
    try:
        await cl.make_async(embedder.warmup)()
    except Exception as e:
        logger.error(f"Embedding model failed to load: {e}")
        await _notify(
            f"The embedding model could not be loaded: {e}. "
            "Uploading a file will retry.",
            error=True,
        )
        return False
    return True


async def _ask_for_file() -> None:
    allowed = ", ".join(f".{ext}" for ext in settings.allowed_extensions)
    files = await cl.AskFileMessage(
        content=(
            "Upload a document to split it into overlapping windows and embed "
            f"each chunk. Supported extensions: {allowed}. Everything stays in "
            "memory; starting a new chat clears it."
        ),
        accept=_accept(),
        max_size_mb=20,
        timeout=3600,
    ).send()
    if files:
        f = files[0]
        await _handle_upload(f.name, f.path, f.type)


@cl.on_chat_start
async def start():
    cl.user_session.set("document_session", container.resolve(DocumentSession))
    cl.user_session.set("rendered_messages", [])

    await _warmup_embedder(container.resolve(EmbedderProtocol))
    await _ask_for_file()


@cl.on_message
async def main(message: cl.Message):
    files = [el for el in (message.elements or []) if getattr(el, "path", None)]
    if files:
        f = files[0]
        await _handle_upload(f.name, f.path, getattr(f, "mime", None))
        return

    session = _session()
    if not session.chunks:
        await _notify("Upload a document first.", error=True)
        await _ask_for_file()
        return

    text = message.content.strip()
    if text == "/clear":
        session.clear_search()
    elif text == "/back":
        session.drop_last_token()
    elif text.startswith("/remove "):
        session.remove_token(text[len("/remove "):].strip())
    else:
        session.set_search(text)

    await _render()


@cl.action_callback("reset")
async def on_reset(action: cl.Action):
    _session().reset()
    await _clear_rendered()
    await _notify("Cleared uploaded file and embeddings.")
    await _ask_for_file()


@cl.action_callback("select_size")
async def on_select_size(action: cl.Action):
    _session().select_size(int(action.payload["size"]))
    await _render()


@cl.action_callback("show_more")
async def on_show_more(action: cl.Action):
    _session().show_more()
    await _render()


@cl.action_callback("toggle_chunk")
async def on_toggle_chunk(action: cl.Action):
    _session().toggle_expanded(int(action.payload["index"]))
    await _render()
