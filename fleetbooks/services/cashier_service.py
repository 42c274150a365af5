import logging
import math
from fleetbooks.extensions import db
from fleetbooks.models.cashier import CashierTransaction, CashBalance, TransactionType
from fleetbooks.services.errors import ServiceError
from fleetbooks.utils.timezone_utils import utc_now


class CashierService:
    @staticmethod
    def get_balance():
        balance = CashBalance.current()
        return balance.current_balance if balance else 0.0

    @staticmethod
    def _balance_row():
        balance = CashBalance.current()
        if balance is None:
            balance = CashBalance(current_balance=0.0)
            db.session.add(balance)
        return balance

    @staticmethod
    def apply_transaction(tx_type, amount, description, cashier_name, transaction_date,
                          owner_authenticated=False, trip_id=None):
        """
        Add a ledger row and move the balance, without committing.
        Callers own the transaction boundary.
        """
        transaction = CashierTransaction(
            type=tx_type,
            amount=amount,
            description=description,
            cashier_name=cashier_name,
            owner_authenticated=owner_authenticated,
            transaction_date=transaction_date,
            trip_id=trip_id,
        )
        db.session.add(transaction)

        balance = CashierService._balance_row()
        change = amount if tx_type == TransactionType.DEPOSIT.value else -amount
        balance.current_balance = (balance.current_balance or 0.0) + change
        balance.last_updated = utc_now()
        return transaction, balance

    @staticmethod
    def create(data):
        balance = CashierService.get_balance()
        if data['type'] == TransactionType.WITHDRAWAL.value and data['amount'] > balance:
            raise ServiceError(f"Insufficient balance. Current balance: ₹{balance}")
        try:
            transaction, balance_row = CashierService.apply_transaction(
                data['type'],
                data['amount'],
                data['description'],
                data['cashier_name'],
                data['transaction_date'],
                owner_authenticated=data['owner_authenticated'],
            )
            db.session.commit()
            logging.info(f"Cashier {transaction.type} of ₹{transaction.amount} by {transaction.cashier_name}, "
                         f"balance now ₹{balance_row.current_balance}")
            return transaction, balance_row.current_balance
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating cashier transaction: {e}", exc_info=True)
            raise ServiceError("Could not create cashier transaction. Please try again later.", status_code=500)

    @staticmethod
    def list_transactions(tx_type=None, page=1, limit=50):
        try:
            query = CashierTransaction.query
            if tx_type in (TransactionType.DEPOSIT.value, TransactionType.WITHDRAWAL.value):
                query = query.filter(CashierTransaction.type == tx_type)
            query = query.order_by(CashierTransaction.transaction_date.desc(), CashierTransaction.created_at.desc())
            pagination = query.paginate(page=page, per_page=limit, error_out=False)
            return {
                'transactions': pagination.items,
                'total_transactions': pagination.total,
                'current_page': page,
                'total_pages': math.ceil(pagination.total / limit) if limit else 0,
                'current_balance': CashierService.get_balance(),
            }
        except Exception as e:
            logging.error(f"Error fetching cashier transactions: {e}", exc_info=True)
            raise ServiceError("Could not fetch cashier transactions. Please try again later.", status_code=500)

    @staticmethod
    def recent(limit=5, date_from=None):
        query = CashierTransaction.query
        if date_from:
            query = query.filter(CashierTransaction.transaction_date >= date_from)
        return query.order_by(CashierTransaction.created_at.desc()).limit(limit).all()
