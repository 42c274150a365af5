from flask import Blueprint, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.monthly_salary_service import MonthlySalaryService, ServiceError
from fleetbooks.schemas.monthly_salary_schema import (
    MonthlySalarySummarySchema, MonthlySalaryQuerySchema, MonthlySummaryRangeSchema,
)
from fleetbooks.schemas.salary_payment_schema import SalaryPaymentSchema
import logging
from fleetbooks.extensions import db

monthly_salary_bp = Blueprint('monthly_salary', __name__)
schema = MonthlySalarySummarySchema(session=db.session)
schema_many = MonthlySalarySummarySchema(many=True, session=db.session)
payment_schema_many = SalaryPaymentSchema(many=True, session=db.session)
query_schema = MonthlySalaryQuerySchema()
range_schema = MonthlySummaryRangeSchema()


@monthly_salary_bp.route('/monthly-salary', methods=['GET'])
def get_monthly_salary():
    try:
        try:
            args = query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        result = MonthlySalaryService.get_monthly(args['driver_id'], args['month'], args['year'])
        if result is None:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({
            'monthly_summary': schema.dump(result['monthly_summary']),
            'payment_history': payment_schema_many.dump(result['payment_history']),
            'calculated_data': result['calculated_data'],
        }), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in get_monthly_salary: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@monthly_salary_bp.route('/monthly-salary', methods=['POST'])
def list_monthly_summaries():
    try:
        try:
            data = range_schema.load(request.get_json(silent=True) or {})
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        summaries = MonthlySalaryService.list_summaries(
            driver_ids=data['drivers'],
            start_month=data['start_month'],
            start_year=data['start_year'],
            end_month=data['end_month'],
            end_year=data['end_year'],
        )
        return jsonify({'summaries': schema_many.dump(summaries)}), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in list_monthly_summaries: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
