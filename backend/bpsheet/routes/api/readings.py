"""Reading routes. The URL keeps its legacy /transactions name."""
from flask import jsonify

from bpsheet.errors import ValidationError
from bpsheet.utils.audit_logger import audit_log
from bpsheet.utils.auth import token_required
from bpsheet.utils.validators import validate_reading, validate_reading_update
from . import api_bp, repositories, json_body


@api_bp.route('/transactions', methods=['GET'])
@token_required
def list_readings():
    """All readings with their category name and color."""
    repos = repositories()
    data = repos['readings'].list_with_categories(repos['categories'])
    return jsonify({'data': data}), 200


@api_bp.route('/transactions', methods=['POST'])
@token_required
def create_reading():
    data = json_body()
    errors = validate_reading(data)
    if errors:
        raise ValidationError(errors)

    reading = repositories()['readings'].append(data)
    audit_log('CREATE', 'reading', resource_id=str(reading['id']))
    return jsonify({'message': 'Reading created', 'data': reading}), 200


@api_bp.route('/transactions/<id>', methods=['PUT'])
@token_required
def update_reading(id):
    data = json_body()
    errors = validate_reading_update(data)
    if errors:
        raise ValidationError(errors)

    reading = repositories()['readings'].update(id, data)
    audit_log('UPDATE', 'reading', resource_id=id, details={'fields': sorted(data)})
    return jsonify({'message': 'Reading updated', 'data': reading}), 200


@api_bp.route('/transactions/<id>', methods=['DELETE'])
@token_required
def delete_reading(id):
    repositories()['readings'].delete(id)
    audit_log('DELETE', 'reading', resource_id=id)
    return jsonify({'message': 'Reading deleted'}), 200
