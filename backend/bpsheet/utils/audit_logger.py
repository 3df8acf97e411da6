"""
Audit logging for logins and changes to spreadsheet data.
"""
import os
import logging
import structlog
from flask import request, g, has_request_context


def _has_file_handler(logger, log_file) -> bool:
    """One handler per file, however many apps the process creates."""
    path = os.path.abspath(log_file)
    return any(isinstance(h, logging.FileHandler) and h.baseFilename == path
               for h in logger.handlers)


def setup_audit_logging(app):
    """Configure structured JSON audit logging.

    Events go to AUDIT_LOG_FILE; an empty value keeps them on the standard
    logging handlers only.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    audit_logger = logging.getLogger('audit')
    audit_logger.setLevel(logging.INFO)

    log_file = app.config.get('AUDIT_LOG_FILE')
    if log_file and not _has_file_handler(audit_logger, log_file):
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        audit_logger.addHandler(file_handler)

    app.config['AUDIT_LOGGER'] = structlog.get_logger('audit')


def get_audit_logger():
    """Get the audit logger instance."""
    from flask import current_app
    return current_app.config.get('AUDIT_LOGGER', structlog.get_logger('audit'))


def audit_log(action: str, resource_type: str, resource_id: str = None,
              details: dict = None, username: str = None):
    """
    Log an audit event.

    Args:
        action: The action performed (CREATE, UPDATE, DELETE, LOGIN, LOGIN_FAILED)
        resource_type: Type of resource touched (reading, category, threshold, session)
        resource_id: ID of the specific row (optional)
        details: Additional details about the action (optional)
        username: Acting user (optional, uses g.username if not provided)
    """
    logger = get_audit_logger()

    if username is None:
        username = getattr(g, 'username', None) or 'anonymous'

    if has_request_context():
        client_ip = request.remote_addr or 'unknown'
        user_agent = request.headers.get('User-Agent', 'unknown')
    else:
        client_ip = user_agent = 'unknown'

    logger.info(
        "audit_event",
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        username=username,
        client_ip=client_ip,
        user_agent=user_agent,
        details=details or {},
    )
