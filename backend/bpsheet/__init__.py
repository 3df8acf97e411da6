import os
import logging
from flask import Flask, request, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Configuration keys read from the environment, with their defaults
ENV_DEFAULTS = {
    'JWT_SECRET_KEY': None,
    'JWT_ACCESS_TOKEN_EXPIRES': '365d',
    'ADMIN_USERNAME': None,
    'ADMIN_PASSWORD': None,
    'GOOGLE_SHEET_ID': None,
    'GOOGLE_TRANSACTION_RANGE': "'transactions'!A:G",
    'GOOGLE_CATEGORY_RANGE': "'categories'!A:C",
    'GOOGLE_BUDGET_RANGE': "'budgets'!A:B",
    'GOOGLE_APPLICATION_CREDENTIALS': None,
    'GOOGLE_SA_TYPE': None,
    'GOOGLE_SA_PROJECT_ID': None,
    'GOOGLE_SA_PRIVATE_KEY_ID': None,
    'GOOGLE_SA_PRIVATE_KEY': None,
    'GOOGLE_SA_CLIENT_EMAIL': None,
    'GOOGLE_SA_CLIENT_ID': None,
    'ALLOWED_ORIGINS': '',
    'AUDIT_LOG_FILE': 'logs/audit.log',
}


def create_app(config=None, store=None):
    """
    Build the application.

    `config` overrides values read from the environment. `store` replaces the
    Google Sheets client, which is otherwise opened here so that bad
    credentials fail at startup.
    """
    app = Flask(__name__)

    for key, default in ENV_DEFAULTS.items():
        app.config[key] = os.getenv(key, default)
    if config:
        app.config.update(config)

    for key in ('JWT_SECRET_KEY', 'ADMIN_USERNAME', 'ADMIN_PASSWORD'):
        if not app.config.get(key):
            raise RuntimeError(f'{key} environment variable is required')

    from bpsheet.utils.auth import parse_duration
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = parse_duration(app.config['JWT_ACCESS_TOKEN_EXPIRES'])

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    # CORS
    allowed_origins = app.config.get('ALLOWED_ORIGINS') or ''
    origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()] or '*'
    CORS(app, resources={
        r"/api/*": {"origins": origins_list},
        r"/auth/*": {"origins": origins_list},
    })

    # Security headers
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Referrer-Policy'] = 'no-referrer'
        return response

    # Validate Content-Type on POST/PUT requests
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PUT'):
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'message': 'Content-Type must be application/json'}), 415

    from bpsheet.errors import register_error_handlers
    register_error_handlers(app)

    from bpsheet.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    # Spreadsheet client and repositories, shared for the process lifetime
    from bpsheet.models import reading_table, category_table, threshold_table
    from bpsheet.repositories import ReadingRepository, CategoryRepository, ThresholdRepository

    if store is None:
        from bpsheet.store import SheetsStore
        store = SheetsStore.from_config(app.config)

    app.extensions['bpsheet'] = {
        'store': store,
        'readings': ReadingRepository(store, reading_table(app.config['GOOGLE_TRANSACTION_RANGE'])),
        'categories': CategoryRepository(store, category_table(app.config['GOOGLE_CATEGORY_RANGE'])),
        'threshold': ThresholdRepository(store, threshold_table(app.config['GOOGLE_BUDGET_RANGE'])),
    }

    # Register blueprints
    from bpsheet.routes.auth import auth_bp
    from bpsheet.routes.api import api_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    @app.cli.command('check-sheets')
    def check_sheets():
        """Write missing header rows and report headers that differ from the declared columns."""
        from bpsheet.store.sheet_check import check_tables
        repos = app.extensions['bpsheet']
        tables = [repos[name].table for name in ('readings', 'categories', 'threshold')]
        for line in check_tables(store, tables):
            print(line)

    return app
