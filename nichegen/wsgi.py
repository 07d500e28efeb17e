# nichegen/wsgi.py
import logging

from waitress import serve

from .app import create_app

logger = logging.getLogger(__name__)


def main():
    app = create_app()
    host = app.config['API_HOST']
    port = app.config['API_PORT']
    logger.info(f"NicheGen API server is running at http://{host}:{port}")
    serve(app, host=host, port=port, threads=app.config['API_THREADS'])


if __name__ == "__main__":
    main()
