from flask import Blueprint, current_app, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.salary_payment_service import SalaryPaymentService, ServiceError
from fleetbooks.schemas.salary_payment_schema import (
    SalaryPaymentSchema, SalaryPaymentInputSchema, SalaryPaymentQuerySchema,
)
from fleetbooks.schemas.common_schema import resolve_limit
import logging
from fleetbooks.extensions import db

salary_payment_bp = Blueprint('salary_payment', __name__)
schema = SalaryPaymentSchema(session=db.session)
schema_many = SalaryPaymentSchema(many=True, session=db.session)
input_schema = SalaryPaymentInputSchema()
query_schema = SalaryPaymentQuerySchema()


@salary_payment_bp.route('/salary-payments', methods=['GET'])
def list_salary_payments():
    try:
        try:
            args = query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        result = SalaryPaymentService.list_payments(
            driver_id=args['driver_id'],
            page=args['page'],
            limit=resolve_limit(args['limit'], current_app.config),
        )
        result['payments'] = schema_many.dump(result['payments'])
        return jsonify(result), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in list_salary_payments: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@salary_payment_bp.route('/salary-payments', methods=['POST'])
def create_salary_payment():
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'error': 'Driver ID, amount, payment date, and payment method are required'}), 400
        try:
            data = input_schema.load(data)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        payment = SalaryPaymentService.create(data)
        if not payment:
            return jsonify({'error': 'Driver not found'}), 404
        return jsonify({'payment': schema.dump(payment)}), 201
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in create_salary_payment: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
