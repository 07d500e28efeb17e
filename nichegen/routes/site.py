"""
Non-API routes: static pages and the image generation endpoint.
"""

from flask import Blueprint

from .handlers.image import handle_generate_image
from .handlers.pages import handle_auth_page, handle_dashboard, handle_home

site = Blueprint('site', __name__)


@site.route('/', methods=['GET'])
def home():
    return handle_home()

@site.route('/auth', methods=['GET'])
def auth_page():
    return handle_auth_page()

@site.route('/dashboard', methods=['GET'])
def dashboard():
    return handle_dashboard()

@site.route('/generate-image', methods=['POST'])
def generate_image():
    return handle_generate_image()
