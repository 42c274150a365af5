from enum import Enum
from fleetbooks.extensions import db
from fleetbooks.utils.timezone_utils import utc_now


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class CashierTransaction(db.Model):
    __tablename__ = 'cashier_transaction'
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(16), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    description = db.Column(db.String(512), nullable=False)
    cashier_name = db.Column(db.String(128), nullable=False)
    owner_authenticated = db.Column(db.Boolean, nullable=False, default=False)
    transaction_date = db.Column(db.Date, nullable=False, index=True)
    trip_id = db.Column(db.Integer, db.ForeignKey('trip.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=utc_now, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<CashierTransaction {self.id} {self.type} ₹{self.amount}>"


class CashBalance(db.Model):
    """Single-row running balance of the cashier's till."""
    __tablename__ = 'cash_balance'
    id = db.Column(db.Integer, primary_key=True)
    current_balance = db.Column(db.Float, nullable=False, default=0.0)
    last_updated = db.Column(db.DateTime, default=utc_now)

    @classmethod
    def current(cls):
        return cls.query.order_by(cls.id).first()

    def __repr__(self):
        return f"<CashBalance ₹{self.current_balance}>"
