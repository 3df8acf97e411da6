from flask import request

from bpsheet.errors import ValidationError


def json_body() -> dict:
    """The request's JSON object; anything else is a 400."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise ValidationError('Request body is required')
    return data
