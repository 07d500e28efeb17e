"""
Common utilities for API handlers.

This file contains shared functionality for all API handlers.
"""

import logging
from typing import Any, Type, TypeVar

from flask import jsonify, request
from pydantic import BaseModel, ValidationError

from ...exceptions import RequestValidationError

# Create logger
logger = logging.getLogger(__name__)

SchemaT = TypeVar('SchemaT', bound=BaseModel)


def create_error_response(message: str, status_code: int = 400) -> tuple:
    """Create a standardized error response"""
    return jsonify({
        'status': 'error',
        'message': message
    }), status_code


def create_success_response(data: Any = None, status_code: int = 200) -> tuple:
    """Create a JSON response from a dict or a list"""
    return jsonify(data if data is not None else {'status': 'success'}), status_code


def load_request(schema: Type[SchemaT]) -> SchemaT:
    """
    Validate the JSON body of the current request.

    Raises:
        RequestValidationError: with a short message naming the first bad field
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestValidationError('Request body must be a JSON object')

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = '.'.join(str(part) for part in first.get('loc', ())) or 'body'
        if first.get('type') == 'missing':
            message = f"'{field}' is required"
        else:
            message = f"Invalid '{field}': {first.get('msg', 'invalid value')}"
        raise RequestValidationError(message) from e
