"""
Image generation handler.
"""

import logging

from ...exceptions import RequestValidationError
from ...modules.image_generation import ImageGenerationError
from ...schemas import ImageRequestSchema
from ...services import get_services
from .common import create_error_response, create_success_response, load_request

# Create logger
logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = 'Image service is rate limited. Please try again shortly.'
AUTH_FAILURE_MESSAGE = 'Image service authentication failed.'
GENERIC_IMAGE_MESSAGE = 'Image generation failed.'


def handle_generate_image():
    """Handler for a single pass-through image generation call"""
    try:
        data = load_request(ImageRequestSchema)
    except RequestValidationError:
        return create_error_response('Prompt is required')

    try:
        image_url = get_services().image_client.generate(data.prompt)
    except ImageGenerationError as e:
        logger.error(f"Image generation error (status {e.status_code}): {str(e)}")
        if e.is_rate_limited:
            return create_error_response(RATE_LIMIT_MESSAGE, 500)
        if e.is_auth_failure:
            return create_error_response(AUTH_FAILURE_MESSAGE, 500)
        return create_error_response(GENERIC_IMAGE_MESSAGE, 500)
    except Exception as e:
        logger.error(f"Unexpected image generation error: {str(e)}", exc_info=True)
        return create_error_response(GENERIC_IMAGE_MESSAGE, 500)

    return create_success_response({'imageUrl': image_url})
