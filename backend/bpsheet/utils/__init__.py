from .audit_logger import audit_log, setup_audit_logging
from .auth import check_credentials, generate_token, token_required
from .validators import validate_reading, validate_category, validate_threshold
