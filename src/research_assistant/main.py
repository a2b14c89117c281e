"""Entrypoint: run the research assistant server."""

import uvicorn

from research_assistant.api.app import create_app
from research_assistant.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
