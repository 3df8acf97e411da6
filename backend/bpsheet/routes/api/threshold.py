"""Warning threshold routes. The URL keeps its legacy /budget name."""
from flask import jsonify

from bpsheet.errors import ValidationError
from bpsheet.utils.audit_logger import audit_log
from bpsheet.utils.auth import token_required
from bpsheet.utils.validators import validate_threshold
from . import api_bp, repositories, json_body


# No token check: the threshold is public.
@api_bp.route('/budget', methods=['GET'])
def get_threshold():
    return jsonify({'data': repositories()['threshold'].get()}), 200


@api_bp.route('/budget', methods=['PUT'])
@token_required
def update_threshold():
    data = json_body()
    errors = validate_threshold(data)
    if errors:
        raise ValidationError(errors)

    threshold = repositories()['threshold'].save(data['amount'])
    audit_log('UPDATE', 'threshold', resource_id=threshold['id'],
              details={'amount': str(data['amount'])})
    return jsonify({'message': 'Threshold updated', 'data': threshold}), 200
