"""Category routes."""
from flask import jsonify

from bpsheet.errors import ValidationError
from bpsheet.utils.audit_logger import audit_log
from bpsheet.utils.auth import token_required
from bpsheet.utils.validators import validate_category, validate_category_update
from . import api_bp, repositories, json_body

EDITABLE_FIELDS = ('name', 'color_hex')


@api_bp.route('/categories', methods=['GET'])
@token_required
def list_categories():
    return jsonify({'data': repositories()['categories'].list_all()}), 200


@api_bp.route('/categories', methods=['POST'])
@token_required
def create_category():
    data = json_body()
    errors = validate_category(data)
    if errors:
        raise ValidationError(errors)

    category = repositories()['categories'].create(data['name'], data['color_hex'])
    audit_log('CREATE', 'category', resource_id=category['id'])
    return jsonify({'message': 'Category created', 'data': category}), 200


@api_bp.route('/categories/<id>', methods=['PUT'])
@token_required
def update_category(id):
    data = json_body()
    changes = {key: data[key] for key in EDITABLE_FIELDS if key in data}
    errors = validate_category_update(changes)
    if errors:
        raise ValidationError(errors)

    category = repositories()['categories'].update(id, changes)
    audit_log('UPDATE', 'category', resource_id=id, details={'fields': sorted(changes)})
    return jsonify({'message': 'Category updated', 'data': category}), 200


@api_bp.route('/categories/<id>', methods=['DELETE'])
@token_required
def delete_category(id):
    repositories()['categories'].delete(id)
    audit_log('DELETE', 'category', resource_id=id)
    return jsonify({'message': 'Category deleted'}), 200
