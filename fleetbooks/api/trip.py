from flask import Blueprint, current_app, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.trip_service import TripService, ServiceError
from fleetbooks.schemas.trip_schema import TripSchema, TripInputSchema, TripPreviewSchema, TripQuerySchema
from fleetbooks.schemas.common_schema import resolve_limit
import logging
from fleetbooks.extensions import db

trip_bp = Blueprint('trip', __name__)
schema = TripSchema(session=db.session)
schema_many = TripSchema(many=True, session=db.session)
input_schema = TripInputSchema()
preview_schema = TripPreviewSchema()
query_schema = TripQuerySchema()


@trip_bp.route('/trips', methods=['GET'])
def list_trips():
    try:
        try:
            args = query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        result = TripService.list_trips(
            driver_id=args['driver_id'],
            platform=args['platform'],
            trip_date=args['date'],
            page=args['page'],
            limit=resolve_limit(args['limit'], current_app.config),
        )
        result['trips'] = schema_many.dump(result['trips'])
        return jsonify(result), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in list_trips: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@trip_bp.route('/trips', methods=['POST'])
def create_trip():
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'error': 'Driver ID and trip date are required'}), 400
        try:
            data = input_schema.load(data)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        trip = TripService.create(data)
        if not trip:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({'trip': schema.dump(trip)}), 201
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in create_trip: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@trip_bp.route('/trips/preview', methods=['POST'])
def preview_trip():
    """Calculator output for the trip form, nothing is saved."""
    try:
        try:
            data = preview_schema.load(request.get_json(silent=True) or {})
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        financials = TripService.preview(data)
        if financials is None:
            return jsonify({'error': 'Driver not found'}), 404
        result = financials.model_dump()
        result['is_negative'] = financials.is_negative
        result['shortfall'] = financials.shortfall
        return jsonify(result), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in preview_trip: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
