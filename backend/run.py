"""
Flask development server entry point.
"""
import os
import logging
from bpsheet import create_app

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('bpsheet.run')

app = create_app()


def log_routes(flask_app):
    """Log the method/path table of every registered endpoint."""
    for rule in sorted(flask_app.url_map.iter_rules(), key=lambda r: r.rule):
        if rule.endpoint == 'static':
            continue
        methods = ','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))
        logger.info('%-14s %-28s %s', methods, rule.rule, rule.endpoint)


if __name__ == '__main__':
    host = os.getenv('FLASK_HOST', '0.0.0.0')
    port = int(os.getenv('FLASK_PORT', os.getenv('PORT', 3000)))
    debug = os.getenv('FLASK_ENV') != 'production'

    logger.info('Blood pressure sheet server running on port %s', port)
    log_routes(app)

    app.run(host=host, port=port, debug=debug)
