
import asyncio
import logging
import mimetypes
import subprocess
import sys
from pathlib import Path

from rag_playground.config.settings import settings
from rag_playground.container import configure_container, container
from rag_playground.core.exceptions import PlaygroundError
from rag_playground.core.models.document import UploadedFile
from rag_playground.core.services.session_service import DocumentSession
from rag_playground.presentation.formatting import render_card, render_summary

logging.basicConfig(level=settings.log_level, format="%(message)s")
logger = logging.getLogger(__name__)

APP_PATH = Path(__file__).with_name("chainlit_app.py")


def cmd_startup():
    """Startup command - run the chat app; it loads the model itself."""
    logger.info("Starting RAG Playground...")

    logger.info("Starting Chainlit...")
    subprocess.run(
        [
            sys.executable,
            "-m",
            "chainlit",
            "run",
            str(APP_PATH),
            "--host",
            settings.chainlit_host,
            "--port",
            str(settings.chainlit_port),
        ]
    )


async def inspect_file(path: Path, query: str, show_all: bool = False) -> DocumentSession:
    """Upload a local file into a fresh session and apply a search."""
    configure_container(settings)
    session = container.resolve(DocumentSession)

    media_type, _ = mimetypes.guess_type(path.name)
    file = UploadedFile(name=path.name, content=path.read_bytes(), media_type=media_type or "")
    await session.upload(file)

    session.set_search(query)
    if show_all:
        session.select_size(session.search().total)
    return session


def cmd_inspect(args: list[str]):
    """Inspect command - chunk, embed and search a local file."""
    show_all = "--all" in args
    args = [a for a in args if a != "--all"]
    if not args:
        print("Usage: rag-playground inspect <file> [keywords...] [--all]")
        sys.exit(1)

    path = Path(args[0])
    if not path.is_file():
        logger.error(f"File not found: {path}")
        sys.exit(1)

    try:
        session = asyncio.run(inspect_file(path, " ".join(args[1:]), show_all))
    except PlaygroundError as e:
        logger.error(str(e))
        sys.exit(1)

    cards = session.view()
    print(render_summary(session.window.display_count, session.window.total, session.tokens))
    for card in cards:
        print()
        print(render_card(card, open_mark="[", close_mark="]", escape=False))


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: rag-playground <command>")
        print("Commands: startup, inspect")
        sys.exit(1)

    command = sys.argv[1]

    if command == "startup":
        cmd_startup()
    elif command == "inspect":
        cmd_inspect(sys.argv[2:])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
