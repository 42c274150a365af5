from enum import Enum
from fleetbooks.extensions import db
from fleetbooks.utils.timezone_utils import utc_now


class PaymentMethod(Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"


class SalaryPayment(db.Model):
    __tablename__ = 'salary_payment'
    id = db.Column(db.Integer, primary_key=True)
    driver_id = db.Column(db.Integer, db.ForeignKey('driver.id'), nullable=False, index=True)
    driver_name = db.Column(db.String(128), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    payment_date = db.Column(db.Date, nullable=False, index=True)
    payment_method = db.Column(db.String(32), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    # Calendar bucket of payment_date, kept for monthly filtering
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=utc_now, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    driver = db.relationship('Driver', back_populates='salary_payments')

    __table_args__ = (
        db.CheckConstraint('month >= 1 AND month <= 12', name='ck_salary_payment_month'),
        db.Index('ix_salary_payment_driver_month', 'driver_id', 'year', 'month'),
    )

    def __repr__(self):
        return f"<SalaryPayment {self.id} - {self.driver_name} ₹{self.amount} {self.payment_date}>"
