"""Console entry point that starts uvicorn with the PORT from the environment."""

import logging
import os

import uvicorn

DEFAULT_PORT = 8000


def resolve_port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        return int(value)
    except ValueError:
        logging.warning(f"Invalid PORT value '{value}', using default {DEFAULT_PORT}")
        return DEFAULT_PORT


def run() -> None:
    port = resolve_port(os.environ.get("PORT"))
    logging.info(f"Starting server on port {port}...")
    uvicorn.run(
        "swapdesk.main:app",
        host="0.0.0.0",
        port=port,
        proxy_headers=True,  # trust proxy headers from the hosting platform
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    run()
