"""
Authentication handlers for API routes.

This module contains handlers for login, registration, and the current user endpoint.
"""

import logging

from ...exceptions import RequestValidationError
from ...schemas import LoginSchema, RegisterSchema
from ...services import get_services
from ...utils.auth_utils import authenticate_user, generate_token, get_user, register_user
from .common import create_error_response, create_success_response, load_request

# Create logger
logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = 'User already exists'
INVALID_CREDENTIALS_MESSAGE = 'Invalid credentials'


def handle_register():
    """Handler for user registration"""
    try:
        data = load_request(RegisterSchema)
    except RequestValidationError as e:
        return create_error_response(e.message)

    try:
        services = get_services()
        logger.info(f"Registration attempt for email: {data.email}")
        user_data = register_user(services.session_factory, data.name, data.email, data.password)

        if not user_data:
            return create_error_response(USER_EXISTS_MESSAGE)

        token = generate_token(user_data['id'], services.config.JWT_SECRET, services.config.JWT_EXPIRATION_DAYS)
        return create_success_response({'token': token, 'user': user_data}, 201)
    except Exception as e:
        logger.error(f"Registration error: {str(e)}", exc_info=True)
        return create_error_response('Server error during registration', 500)


def handle_login():
    """Handler for user login"""
    try:
        data = load_request(LoginSchema)
    except RequestValidationError as e:
        logger.warning("Login attempt with missing credentials")
        return create_error_response(e.message)

    try:
        services = get_services()
        logger.info(f"Login attempt for user: {data.email}")
        user_data = authenticate_user(services.session_factory, data.email, data.password)

        if not user_data:
            return create_error_response(INVALID_CREDENTIALS_MESSAGE, 401)

        token = generate_token(user_data['id'], services.config.JWT_SECRET, services.config.JWT_EXPIRATION_DAYS)
        return create_success_response({'token': token, 'user': user_data})
    except Exception as e:
        logger.error(f"Login error: {str(e)}", exc_info=True)
        return create_error_response('Server error during login', 500)


def handle_get_current_user(user_id):
    """Handler to get current user info"""
    try:
        user_data = get_user(get_services().session_factory, user_id)
        if not user_data:
            return create_error_response('Not authorized, token failed', 401)
        return create_success_response({'user': user_data})
    except Exception as e:
        logger.error(f"Error getting current user: {str(e)}", exc_info=True)
        return create_error_response('Error retrieving user info', 500)
