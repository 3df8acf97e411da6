"""
Authentication utilities: the configured admin login and JWT bearer tokens.
"""
import hmac
import re
import secrets
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, current_app, g

from bpsheet.errors import AuthError

_DURATION_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {'': 1, 's': 1, 'm': 60, 'h': 3600, 'd': 86400}


def parse_duration(value) -> int:
    """Seconds from '3600', '90m', '12h' or '365d'."""
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f'Invalid duration: {value!r}')
    amount, unit = match.groups()
    return int(amount) * _DURATION_UNITS[unit]


def check_credentials(username, password) -> bool:
    """Compare against the single configured account in constant time."""
    expected_user = current_app.config['ADMIN_USERNAME']
    expected_password = current_app.config['ADMIN_PASSWORD']
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    user_ok = hmac.compare_digest(username.encode(), expected_user.encode())
    password_ok = hmac.compare_digest(password.encode(), expected_password.encode())
    return user_ok and password_ok


def generate_token(username: str) -> str:
    """Sign a token for `username` that expires after JWT_ACCESS_TOKEN_EXPIRES."""
    config = current_app.config
    now = datetime.now(timezone.utc)
    payload = {
        'username': username,
        'jti': secrets.token_hex(16),
        'iat': now,
        'exp': now + timedelta(seconds=config['JWT_ACCESS_TOKEN_EXPIRES']),
    }
    return jwt.encode(payload, config['JWT_SECRET_KEY'], algorithm='HS256')


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Returns None if invalid or expired."""
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def token_required(f):
    """Decorator to require a valid bearer token.

    401 when the Authorization header or token is missing, 403 when the token
    does not verify or has expired.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        parts = auth_header.split()
        token = parts[1] if len(parts) == 2 else None
        if not token:
            raise AuthError('Missing authorization token', 401)

        payload = decode_token(token)
        if not payload:
            raise AuthError('Invalid or expired token', 403)

        g.username = payload.get('username')
        g.token_jti = payload.get('jti')
        return f(*args, **kwargs)
    return wrapper
