"""
Data API routes.
"""
from flask import Blueprint, current_app

from bpsheet.routes import json_body  # noqa: F401

api_bp = Blueprint('api', __name__)


def repositories():
    """Repositories built by create_app around the shared SheetsStore."""
    return current_app.extensions['bpsheet']


# Import submodules to register routes on api_bp
from . import readings    # noqa: E402, F401
from . import categories  # noqa: E402, F401
from . import threshold   # noqa: E402, F401
