import uvicorn

from docserver.app import App
from docserver.config import Config
from docserver.web.server import create_fastapi_app


def build_server(app: App, config: Config) -> uvicorn.Server:
    """Uvicorn server for the API.

    log_config is None so uvicorn's loggers go through the handlers installed
    by setup_logging; per-request access lines only in debug mode.
    """
    return uvicorn.Server(
        uvicorn.Config(
            create_fastapi_app(app, config),
            host=config.host,
            port=config.port,
            log_config=None,
            access_log=config.debug,
            proxy_headers=True,
        )
    )


def run_server(app: App, config: Config) -> None:
    build_server(app, config).run()
