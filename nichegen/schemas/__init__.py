"""
Pydantic schemas used to validate request bodies at the HTTP boundary.
"""

from .user import RegisterSchema, LoginSchema
from .chat import GenerateRequestSchema, ImageRequestSchema

__all__ = [
    'RegisterSchema',
    'LoginSchema',
    'GenerateRequestSchema',
    'ImageRequestSchema',
]
