from flask import Blueprint, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.driver_service import DriverService, ServiceError
from fleetbooks.schemas.driver_schema import (
    DriverSchema, DriverCreateSchema, DriverUpdateSchema, DriverActiveSchema,
)
import logging
from fleetbooks.extensions import db

driver_bp = Blueprint('driver', __name__)
schema = DriverSchema(session=db.session)
schema_many = DriverSchema(many=True, session=db.session)
create_schema = DriverCreateSchema()
update_schema = DriverUpdateSchema()
active_schema = DriverActiveSchema()


@driver_bp.route('/drivers', methods=['GET'])
def list_drivers():
    try:
        drivers = DriverService.get_all()
        return jsonify({'drivers': schema_many.dump(drivers)}), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in list_drivers: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@driver_bp.route('/drivers/<int:driver_id>', methods=['GET'])
def get_driver(driver_id):
    try:
        driver = DriverService.get_by_id(driver_id, include_inactive=True)
        if not driver:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({'driver': schema.dump(driver)}), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in get_driver: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@driver_bp.route('/drivers', methods=['POST'])
def create_driver():
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'error': 'Name and commission percentage are required'}), 400
        try:
            data = create_schema.load(data)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        driver = DriverService.create(data)
        return jsonify({'driver': schema.dump(driver)}), 201
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in create_driver: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@driver_bp.route('/drivers/<int:driver_id>', methods=['PUT'])
def update_driver(driver_id):
    try:
        data = request.get_json(silent=True) or {}
        try:
            data = update_schema.load(data)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        driver = DriverService.update(driver_id, data)
        if not driver:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({'driver': schema.dump(driver)}), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in update_driver: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@driver_bp.route('/drivers/<int:driver_id>/active', methods=['PUT'])
def set_driver_active(driver_id):
    try:
        try:
            data = active_schema.load(request.get_json(silent=True) or {})
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        driver = DriverService.set_active(driver_id, data['is_active'])
        if not driver:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({
            'message': f'Driver {"reactivated" if driver.is_active else "deactivated"} successfully',
            'driver': schema.dump(driver)
        }), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in set_driver_active: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
