"""
Frontend API routes for the NicheGen backend.

This module serves as the single entry point for all JSON API interactions,
but delegates actual implementation to handler modules.
"""

import logging

from flask import Blueprint

from ..middleware.auth import token_required
from .handlers.auth import handle_get_current_user, handle_login, handle_register
from .handlers.chat import handle_delete_chat, handle_generate, handle_get_chat, handle_get_chats
from .handlers.health import handle_health_check

# Create logger
logger = logging.getLogger(__name__)

# Create blueprint for API routes
frontend_api = Blueprint('frontend_api', __name__, url_prefix='/api')

# --------------------------------
# Authentication Endpoints
# --------------------------------

@frontend_api.route('/auth/register', methods=['POST'])
def register():
    return handle_register()

@frontend_api.route('/auth/login', methods=['POST'])
def login():
    return handle_login()

@frontend_api.route('/auth/me', methods=['GET'])
@token_required
def get_current_user(user_id):
    return handle_get_current_user(user_id)

# --------------------------------
# Chat Endpoints
# --------------------------------

@frontend_api.route('/chats', methods=['GET'])
@token_required
def get_chats(user_id):
    return handle_get_chats(user_id)

@frontend_api.route('/chats/<chat_id>', methods=['GET'])
@token_required
def get_chat(user_id, chat_id):
    return handle_get_chat(user_id, chat_id)

@frontend_api.route('/chats/<chat_id>', methods=['DELETE'])
@token_required
def delete_chat(user_id, chat_id):
    return handle_delete_chat(user_id, chat_id)

@frontend_api.route('/generate', methods=['POST'])
@token_required
def generate(user_id):
    return handle_generate(user_id)

# --------------------------------
# Health Check Endpoint
# --------------------------------

@frontend_api.route('/health', methods=['GET'])
def health_check():
    return handle_health_check()
