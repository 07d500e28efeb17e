"""
Chat handlers for API routes.

This module contains handlers for chat history and the content generation endpoint.
"""

import logging

from ...exceptions import GenerationError, RequestValidationError
from ...managers.generation_manager import GENERIC_FAILURE_MESSAGE
from ...schemas import GenerateRequestSchema
from ...services import get_services
from .common import create_error_response, create_success_response, load_request

# Create logger
logger = logging.getLogger(__name__)

CHAT_NOT_FOUND_MESSAGE = 'Chat not found'


def handle_get_chats(user_id):
    """Handler to list the user's chats, most recent first"""
    try:
        chats = get_services().conversation_store.list_owned(user_id)
        return create_success_response([chat.to_summary() for chat in chats])
    except Exception as e:
        logger.error(f"Error retrieving chats: {str(e)}", exc_info=True)
        return create_error_response('Error fetching chats', 500)


def handle_get_chat(user_id, chat_id):
    """Handler to get a specific chat with its messages"""
    try:
        chat = get_services().conversation_store.find_owned(user_id, chat_id)
        if not chat:
            return create_error_response(CHAT_NOT_FOUND_MESSAGE, 404)
        return create_success_response(chat.to_dict())
    except Exception as e:
        logger.error(f"Error retrieving chat {chat_id}: {str(e)}", exc_info=True)
        return create_error_response('Error fetching chat history', 500)


def handle_delete_chat(user_id, chat_id):
    """Handler to delete a chat"""
    try:
        if not get_services().conversation_store.delete_owned(user_id, chat_id):
            return create_error_response(CHAT_NOT_FOUND_MESSAGE, 404)
        return create_success_response({'message': 'Chat deleted', 'id': chat_id})
    except Exception as e:
        logger.error(f"Error deleting chat {chat_id}: {str(e)}", exc_info=True)
        return create_error_response('Error deleting chat', 500)


def handle_generate(user_id):
    """Handler for the search + draft + refinement pipeline"""
    try:
        data = load_request(GenerateRequestSchema)
    except RequestValidationError as e:
        return create_error_response(e.message)

    try:
        result = get_services().generation_manager.generate(
            user_id,
            data.prompt,
            chat_id=data.chat_id,
            overrides=data.directive_overrides(),
        )
    except GenerationError as e:
        logger.error(f"Generation failed for user {user_id}: {str(e)}")
        return create_error_response(GENERIC_FAILURE_MESSAGE, 500)
    except Exception as e:
        logger.error(f"Unexpected generation error for user {user_id}: {str(e)}", exc_info=True)
        return create_error_response(GENERIC_FAILURE_MESSAGE, 500)

    return create_success_response(result.to_dict())
