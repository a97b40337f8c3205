"""Entrypoint: run the DocVault API server."""

import uvicorn

from docvault.api.app import create_app
from docvault.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
