from enum import Enum
from fleetbooks.extensions import db
from fleetbooks.utils.timezone_utils import utc_now


class Platform(Enum):
    UBER = "uber"
    INDRIVE = "indrive"
    YATRI = "yatri"
    RAPIDO = "rapido"
    OFFLINE = "offline"
    MULTIPLE = "multiple"

    @classmethod
    def earning_platforms(cls):
        """Platforms that carry their own earnings/cash columns on a trip."""
        return [p.value for p in cls if p is not cls.MULTIPLE]


class NegativeCashOption(Enum):
    SALARY = "salary"
    CASHIER = "cashier"


class Trip(db.Model):
    __tablename__ = 'trip'
    id = db.Column(db.Integer, primary_key=True)
    driver_id = db.Column(db.Integer, db.ForeignKey('driver.id'), nullable=False, index=True)
    driver_name = db.Column(db.String(128), nullable=False)
    platform = db.Column(db.String(16), nullable=False, default=Platform.MULTIPLE.value, index=True)
    trip_date = db.Column(db.Date, nullable=False, index=True)

    start_km = db.Column(db.Float, nullable=True)
    end_km = db.Column(db.Float, nullable=True)
    total_km = db.Column(db.Float, nullable=True)

    trip_amount = db.Column(db.Float, nullable=False)
    commission_amount = db.Column(db.Float, nullable=False, default=0.0)
    fuel_cost = db.Column(db.Float, nullable=False, default=0.0)
    other_expenses = db.Column(db.Float, nullable=False, default=0.0)
    cash_collected = db.Column(db.Float, nullable=False, default=0.0)
    online_payment = db.Column(db.Float, nullable=False, default=0.0)
    net_amount = db.Column(db.Float, nullable=False)
    cash_in_hand = db.Column(db.Float, nullable=False)
    cash_in_driver_hand = db.Column(db.Float, nullable=False, default=0.0)
    driver_salary = db.Column(db.Float, nullable=False)

    driver_took_salary = db.Column(db.Boolean, nullable=False, default=False)
    cash_given_to_cashier = db.Column(db.Boolean, nullable=False, default=False)
    cash_to_cashier = db.Column(db.Float, nullable=False, default=0.0)
    negative_handling_option = db.Column(db.String(16), nullable=True)
    amount_from_cashier = db.Column(db.Float, nullable=False, default=0.0)
    notes = db.Column(db.Text, nullable=True)

    # {"uber": {"earnings": .., "cash": ..}, "yatri": {"earnings": .., "cash": .., "trips": ..}, ...}
    platform_details = db.Column(db.JSON, nullable=True)
    # {"uber": .., "yatri": .., "total": ..}
    commission_details = db.Column(db.JSON, nullable=True)
    # [{"id": .., "amount": .., "description": ..}]
    fuel_entries = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, default=utc_now, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    driver = db.relationship('Driver', back_populates='trips')

    def __repr__(self):
        return f"<Trip {self.id} - {self.driver_name} {self.trip_date} ₹{self.trip_amount}>"
