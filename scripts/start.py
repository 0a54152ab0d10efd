"""Production startup script for the PageLens API.

Optionally installs the Chromium build Playwright renders with, then
replaces this process with uvicorn.
"""

import os
import signal
import subprocess
import sys

from api.config import get_settings


def install_browser() -> bool:
    """Download Chromium for Playwright. Returns False when the install fails."""
    print("Installing Playwright Chromium...")
    try:
        subprocess.run(
            [sys.executable, "-m", "playwright", "install", "--with-deps", "chromium"],
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        print(f"Browser install failed: {e.stderr}")
        return False
    print("Chromium ready.")
    return True


def start_api() -> None:
    settings = get_settings()
    port = os.getenv("PORT", str(settings.api_port))
    workers = os.getenv("API_WORKERS", "1")
    host = settings.api_host

    print(f"PageLens listening on {host}:{port} ({workers} worker(s), env={settings.env})")

    os.execvp(
        "uvicorn",
        [
            "uvicorn",
            "api.main:app",
            "--host",
            host,
            "--port",
            port,
            "--workers",
            workers,
            "--log-level",
            settings.log_level.lower(),
            "--proxy-headers",
        ],
    )


def signal_handler(signum: int, _frame: object) -> None:
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    if os.getenv("INSTALL_BROWSERS", "false").lower() == "true" and not install_browser():
        print("Rendering will fail until Chromium is installed; starting anyway...")

    start_api()


if __name__ == "__main__":
    main()
