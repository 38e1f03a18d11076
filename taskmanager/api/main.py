"""Process entrypoint: exposes the ASGI app and serves it with uvicorn."""

from __future__ import annotations

import uvicorn

from taskmanager.api.api_config import get_api_config
from taskmanager.api.app import create_app

app = create_app()


def run() -> None:
    """Serve the API on the configured host and port."""

    config = get_api_config()
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    run()
