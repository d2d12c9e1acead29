"""Run the API with uvicorn: ``python -m storefront``.

Host, port and log level come from the same settings the app reads
(``HOST``, ``PORT``, ``LOG_LEVEL`` or a ``.env`` file).
"""

import asyncio

from uvicorn import Config, Server

from storefront.config import get_settings


async def serve() -> None:
    settings = get_settings()
    config = Config(
        app="storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(serve())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
