"""Main application entry point.

Runs the FastAPI backend (port 8000) or an interactive terminal chat.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

TERMINAL_HELP = "/new 新对话  /pinyin 切换拼音  /quit 退出"


def run_server() -> None:
    """Run the FastAPI backend with uvicorn."""
    import uvicorn

    from wenwen.api.app import create_app

    app = create_app()
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting API server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_terminal() -> None:
    """Chat from the terminal, printing replies as they stream in.

    Resumes the most recently active session, or starts a new one.
    """
    import asyncio

    from wenwen.chat.service import CONVERSATION_STARTERS, get_conversation_service
    from wenwen.pinyin import get_pinyin_dictionary, render_text

    async def chat_loop() -> None:
        service = get_conversation_service()
        store = service.store
        dictionary = get_pinyin_dictionary()
        show_pinyin = os.getenv("SHOW_PINYIN", "true").lower() != "false"

        history = store.list_sessions()
        session = store.select_session(history[0].id) if history else store.create_session()

        print(f"欢迎使用问问 - {session.title}")
        print("试试这些话题：")
        for starter in CONVERSATION_STARTERS:
            print(f"  {starter}")
        print(TERMINAL_HELP)

        while True:
            try:
                text = (await asyncio.to_thread(input, "你: ")).strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not text:
                continue
            if text in ("/quit", "/exit"):
                break
            if text == "/new":
                session = store.create_session()
                print("（新对话）")
                continue
            if text == "/pinyin":
                show_pinyin = not show_pinyin
                continue

            print("问问: ", end="", flush=True)
            reply = await service.send_message(
                session.id, text, on_partial=lambda f: print(f, end="", flush=True)
            )
            print()
            if reply is not None and show_pinyin:
                print(render_text(reply, dictionary))

    asyncio.run(chat_loop())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=terminal to chat from the command line.
    Default is server mode (HTTP API on port 8000).
    """
    mode = os.getenv("RUN_MODE", "server").lower()

    logger.info(f"Starting WenWen in {mode} mode")

    if mode == "terminal":
        run_terminal()
    else:
        run_server()


if __name__ == "__main__":
    main()
