"""Application entry point for the Blogspace API server."""

from blogspace.app import App
from blogspace.config import Config
from blogspace.logging import setup_logging
from blogspace.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
