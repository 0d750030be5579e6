"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI game page mounted on it.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Serve the completion API and the game page from one process."""
    import uvicorn
    from nicegui import ui

    port = int(os.getenv("PORT", "8000"))
    # The page posts back to this same server unless told otherwise
    os.environ.setdefault("API_BASE_URL", f"http://localhost:{port}")

    from chatgame.api.app import create_app
    from chatgame.ui.game_page import game_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Chat Game",
        favicon="🎲",
    )

    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"Game available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API (port 8000) and the game page (port 8080) as two processes.

    The page reaches the API through API_BASE_URL.
    """
    import subprocess

    logger.info("Starting FastAPI on http://localhost:8000")
    logger.info("Starting NiceGUI on http://localhost:8080")

    processes = [
        subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "chatgame.api.app:app",
                "--host",
                os.getenv("HOST", "0.0.0.0"),
                "--port",
                "8000",
            ]
        ),
        subprocess.Popen([sys.executable, "-m", "chatgame.ui.game_page"]),
    ]

    try:
        # Stop both as soon as either exits
        while all(proc.poll() is None for proc in processes):
            try:
                processes[0].wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes:
            proc.terminate()
        for proc in processes:
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Chat Game in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
