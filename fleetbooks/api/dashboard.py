from datetime import date, datetime
from flask import Blueprint, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.analytics_service import AnalyticsService, ServiceError
from fleetbooks.schemas.dashboard_schema import (
    DashboardQuerySchema, BusinessAnalyticsQuerySchema, OwnerDashboardQuerySchema,
)
from fleetbooks.schemas.trip_schema import TripSchema
from fleetbooks.schemas.salary_payment_schema import SalaryPaymentSchema
from fleetbooks.utils.owner_gate import owner_required
import logging
from fleetbooks.extensions import db

dashboard_bp = Blueprint('dashboard', __name__)
trip_schema_many = TripSchema(many=True, session=db.session)
payment_schema_many = SalaryPaymentSchema(many=True, session=db.session)
dashboard_query_schema = DashboardQuerySchema()
analytics_query_schema = BusinessAnalyticsQuerySchema()
owner_query_schema = OwnerDashboardQuerySchema()


def isoformat_dates(value):
    """Recursively render dates and datetimes as ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: isoformat_dates(item) for key, item in value.items()}
    if isinstance(value, list):
        return [isoformat_dates(item) for item in value]
    return value


@dashboard_bp.route('/dashboard', methods=['GET'])
def get_dashboard():
    try:
        try:
            args = dashboard_query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        data = AnalyticsService.dashboard(args['driver_id'], args['date_from'], args['date_to'])
        for driver in data['drivers']:
            driver['recent_trips'] = trip_schema_many.dump(driver['recent_trips'])
            driver['recent_payments'] = payment_schema_many.dump(driver['recent_payments'])
        return jsonify(isoformat_dates(data)), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in get_dashboard: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@dashboard_bp.route('/business-analytics', methods=['GET'])
@owner_required
def get_business_analytics():
    try:
        try:
            args = analytics_query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        analytics = AnalyticsService.business_analytics(args['period'])
        return jsonify(isoformat_dates(analytics)), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in get_business_analytics: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@dashboard_bp.route('/owner-dashboard', methods=['GET'])
@owner_required
def get_owner_dashboard():
    try:
        try:
            args = owner_query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        metrics = AnalyticsService.owner_dashboard(args['period'])
        return jsonify(isoformat_dates(metrics)), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in get_owner_dashboard: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
