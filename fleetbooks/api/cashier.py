from flask import Blueprint, current_app, request, jsonify
from marshmallow import ValidationError
from fleetbooks.services.cashier_service import CashierService, ServiceError
from fleetbooks.schemas.cashier_schema import CashierTransactionSchema, CashierInputSchema, CashierQuerySchema
from fleetbooks.schemas.common_schema import resolve_limit
import logging
from fleetbooks.extensions import db

cashier_bp = Blueprint('cashier', __name__)
schema = CashierTransactionSchema(session=db.session)
schema_many = CashierTransactionSchema(many=True, session=db.session)
input_schema = CashierInputSchema()
query_schema = CashierQuerySchema()


@cashier_bp.route('/cashier', methods=['GET'])
def list_transactions():
    try:
        try:
            args = query_schema.load(request.args)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        result = CashierService.list_transactions(
            tx_type=args['type'],
            page=args['page'],
            limit=resolve_limit(args['limit'], current_app.config),
        )
        result['transactions'] = schema_many.dump(result['transactions'])
        return jsonify(result), 200
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in list_transactions: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500


@cashier_bp.route('/cashier', methods=['POST'])
def create_transaction():
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'error': 'All fields are required'}), 400
        try:
            data = input_schema.load(data)
        except ValidationError as ve:
            return jsonify({'error': 'Validation failed', 'details': ve.messages}), 400
        transaction, new_balance = CashierService.create(data)
        return jsonify({'transaction': schema.dump(transaction), 'new_balance': new_balance}), 201
    except ServiceError as se:
        return jsonify({'error': se.message}), se.status_code
    except Exception as e:
        logging.error(f"Unhandled error in create_transaction: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred. Please try again later.'}), 500
