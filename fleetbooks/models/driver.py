from fleetbooks.extensions import db
from fleetbooks.utils.timezone_utils import utc_now
from sqlalchemy import true


class Driver(db.Model):
    __tablename__ = 'driver'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True)
    commission_percentage = db.Column(db.Float, nullable=False)
    total_earnings = db.Column(db.Float, nullable=False, default=0.0)
    total_salary_paid = db.Column(db.Float, nullable=False, default=0.0)
    pending_salary = db.Column(db.Float, nullable=False, default=0.0)
    is_active = db.Column(db.Boolean, nullable=False, default=True, server_default=true())
    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    trips = db.relationship('Trip', back_populates='driver', lazy='dynamic')
    salary_payments = db.relationship('SalaryPayment', back_populates='driver', lazy='dynamic')

    @classmethod
    def query_active(cls):
        """Query active (not deactivated) drivers only"""
        return cls.query.filter_by(is_active=True)

    def __repr__(self):
        return f"<Driver {self.id} - {self.name} ({self.commission_percentage}%)>"
