"""Application entry point for the docserver backend."""

from docserver.app import App
from docserver.config import Config
from docserver.logging import setup_logging
from docserver.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
