"""Flask application factory."""

import logging

from flask import Flask

from decisionmatrix.config import configure_logging

from .config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application."""
    app = Flask(
        __name__,
        template_folder="templates",
    )
    app.config.from_object(config_class)

    # Register blueprints
    from .routes import api, matrix

    app.register_blueprint(matrix.bp)
    app.register_blueprint(api.bp)

    logger.info(f"Created decision matrix webapp (testing={app.config.get('TESTING', False)})")
    return app


def main():
    """Entry point for `decisionmatrix-web` command."""
    configure_logging()
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)


if __name__ == "__main__":
    main()
