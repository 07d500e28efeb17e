"""
Static page handlers.

The dashboard page is served without a server-side token check; it holds no
user data and every API call it makes is protected by ``token_required``.
"""

from flask import current_app, send_from_directory


def _send_page(filename):
    return send_from_directory(current_app.static_folder, filename)


def handle_home():
    return _send_page('index.html')


def handle_auth_page():
    return _send_page('auth.html')


def handle_dashboard():
    return _send_page('dashboard.html')
