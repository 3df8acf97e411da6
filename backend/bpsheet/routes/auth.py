"""
Login route.
"""
from flask import Blueprint, jsonify

from bpsheet.errors import AuthError
from bpsheet.routes import json_body
from bpsheet.utils.audit_logger import audit_log
from bpsheet.utils.auth import check_credentials, generate_token

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange the configured username and password for a bearer token."""
    data = json_body()

    username = data.get('username')
    if not check_credentials(username, data.get('password')):
        audit_log('LOGIN_FAILED', 'session', username=str(username or 'anonymous'))
        raise AuthError('Invalid username or password', 401)

    token = generate_token(username)
    audit_log('LOGIN', 'session', username=username)
    return jsonify({'token': token}), 200
