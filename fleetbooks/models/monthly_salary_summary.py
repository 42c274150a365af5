from fleetbooks.extensions import db
from fleetbooks.utils.timezone_utils import utc_now


class MonthlySalarySummary(db.Model):
    __tablename__ = 'monthly_salary_summary'
    id = db.Column(db.Integer, primary_key=True)
    driver_id = db.Column(db.Integer, db.ForeignKey('driver.id'), nullable=False, index=True)
    driver_name = db.Column(db.String(128), nullable=False)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    total_earnings_this_month = db.Column(db.Float, nullable=False, default=0.0)
    total_salary_this_month = db.Column(db.Float, nullable=False, default=0.0)
    total_paid_this_month = db.Column(db.Float, nullable=False, default=0.0)
    salary_taken_on_trips_this_month = db.Column(db.Float, nullable=False, default=0.0)
    remaining_salary_this_month = db.Column(db.Float, nullable=False, default=0.0)
    payments_this_month = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(db.DateTime, default=utc_now)
    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    driver = db.relationship('Driver')

    __table_args__ = (
        db.UniqueConstraint('driver_id', 'month', 'year', name='_driver_month_year_uc'),
        db.CheckConstraint('month >= 1 AND month <= 12', name='ck_monthly_summary_month'),
    )

    def __repr__(self):
        return f"<MonthlySalarySummary {self.driver_name} {self.month:02d}/{self.year}>"
