"""Development server entry point: ``python -m kanban``."""

import click

from kanban import create_app
from kanban.config import Config


@click.command()
@click.option("--host", default=Config.HOST, show_default=True, help="Interface to bind.")
@click.option("--port", default=Config.PORT, show_default=True, type=int, help="Port to listen on.")
def main(host: str, port: int) -> None:
    """Serve the kanban API."""
    app = create_app()
    app.run(host=host, port=port, debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
