"""
Health check handlers for API routes.
"""

import logging
import time

from sqlalchemy import text

from ... import __version__
from ...services import get_services
from .common import create_error_response, create_success_response

# Create logger
logger = logging.getLogger(__name__)


def handle_health_check():
    """Handler for API health check endpoint"""
    try:
        with get_services().engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check error: {str(e)}", exc_info=True)
        return create_error_response('unhealthy', 503)

    return create_success_response({
        'status': 'healthy',
        'version': __version__,
        'timestamp': time.time()
    })
