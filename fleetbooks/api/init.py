from flask import Blueprint, current_app, request, jsonify
from marshmallow import ValidationError
from fleetbooks.extensions import db, limiter
from fleetbooks.services.driver_service import DriverService, ServiceError
from fleetbooks.schemas.driver_schema import DriverSchema
from fleetbooks.schemas.dashboard_schema import OwnerAuthSchema
from fleetbooks.utils.owner_gate import login_owner, logout_owner
import logging

init_bp = Blueprint('init', __name__)
driver_schema_many = DriverSchema(many=True, session=db.session)
owner_auth_schema = OwnerAuthSchema()


@init_bp.route('/init', methods=['POST'])
def initialize():
    try:
        drivers, existing = DriverService.seed_defaults()
        if existing:
            return jsonify({'message': 'Drivers already initialized', 'count': existing}), 200
        return jsonify({
            'message': 'Fleet management system initialized successfully',
            'drivers': driver_schema_many.dump(drivers),
            'drivers_count': len(drivers),
        }), 201
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in initialize: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@init_bp.route('/owner-auth', methods=['POST'])
@limiter.limit(lambda: current_app.config['OWNER_AUTH_RATE_LIMIT'])
def owner_auth():
    try:
        data = owner_auth_schema.load(request.get_json(silent=True) or {})
    except ValidationError as ve:
        return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
    if not login_owner(data['password']):
        return jsonify({'error': 'Invalid owner password'}), 401
    return jsonify({'message': 'Owner authenticated'}), 200


@init_bp.route('/owner-auth', methods=['DELETE'])
def owner_logout():
    logout_owner()
    return jsonify({'message': 'Owner logged out'}), 200
