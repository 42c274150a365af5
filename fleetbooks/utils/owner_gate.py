"""
Password gate for the owner dashboards.

The owner is recognised either by a session flag (set after a successful
password check) or by the password sent in a request header.
"""
import hmac
import logging
from functools import wraps

from flask import current_app, jsonify, redirect, request, session, url_for

logger = logging.getLogger(__name__)

SESSION_FLAG = 'owner_authenticated'


def check_owner_password(password) -> bool:
    expected = current_app.config['OWNER_PASSWORD']
    if not password or not expected:
        return False
    return hmac.compare_digest(str(password).encode('utf-8'), str(expected).encode('utf-8'))


def login_owner(password) -> bool:
    if check_owner_password(password):
        session[SESSION_FLAG] = True
        return True
    logger.warning(f"Failed owner password attempt from {request.remote_addr}")
    return False


def logout_owner():
    session.pop(SESSION_FLAG, None)


def is_owner() -> bool:
    if session.get(SESSION_FLAG):
        return True
    header = current_app.config['OWNER_PASSWORD_HEADER']
    return check_owner_password(request.headers.get(header))


def owner_required(f):
    """JSON 401 for /api routes, redirect to the password form for pages."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not is_owner():
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Owner authentication required'}), 401
            return redirect(url_for('views.owner_login', next=request.path))
        return f(*args, **kwargs)
    return decorated
