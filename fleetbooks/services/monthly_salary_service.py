import logging
from sqlalchemy import and_, or_
from fleetbooks.extensions import db
from fleetbooks.models.driver import Driver
from fleetbooks.models.trip import Trip
from fleetbooks.models.salary_payment import SalaryPayment
from fleetbooks.models.monthly_salary_summary import MonthlySalarySummary
from fleetbooks.services.errors import ServiceError
from fleetbooks.services.reconciliation import summarize_month
from fleetbooks.utils.timezone_utils import display_today, month_bounds, utc_now


class MonthlySalaryService:
    @staticmethod
    def calculate(driver, month, year):
        start, end = month_bounds(month, year)
        trips = Trip.query.filter(
            Trip.driver_id == driver.id,
            Trip.trip_date >= start,
            Trip.trip_date <= end,
        ).all()
        payments = SalaryPayment.query.filter_by(driver_id=driver.id, month=month, year=year).all()
        return summarize_month(trips, payments, driver.commission_percentage)

    @staticmethod
    def refresh(driver, month, year):
        """
        Recompute and upsert the stored summary for one driver-month.
        Does not commit.
        """
        calculated = MonthlySalaryService.calculate(driver, month, year)
        summary = MonthlySalarySummary.query.filter_by(driver_id=driver.id, month=month, year=year).first()
        if summary is None:
            summary = MonthlySalarySummary(driver_id=driver.id, month=month, year=year)
            db.session.add(summary)
        summary.driver_name = driver.name
        summary.total_earnings_this_month = calculated['total_earnings_this_month']
        summary.total_salary_this_month = calculated['total_salary_this_month']
        summary.total_paid_this_month = calculated['total_paid_this_month']
        summary.salary_taken_on_trips_this_month = calculated['salary_taken_on_trips_this_month']
        summary.remaining_salary_this_month = calculated['remaining_salary_this_month']
        summary.payments_this_month = calculated['payments_this_month']
        summary.last_updated = utc_now()
        return summary, calculated

    @staticmethod
    def get_monthly(driver_id, month=None, year=None):
        today = display_today()
        month = month or today.month
        year = year or today.year
        driver = Driver.query.filter_by(id=driver_id).first()
        if not driver:
            return None
        try:
            summary, calculated = MonthlySalaryService.refresh(driver, month, year)
            db.session.commit()
            history = (SalaryPayment.query
                       .filter_by(driver_id=driver.id, month=month, year=year)
                       .order_by(SalaryPayment.payment_date.desc())
                       .all())
            return {
                'monthly_summary': summary,
                'payment_history': history,
                'calculated_data': calculated,
            }
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error fetching monthly salary data: {e}", exc_info=True)
            raise ServiceError("Could not fetch monthly salary data. Please try again later.", status_code=500)

    @staticmethod
    def list_summaries(driver_ids=None, start_month=None, start_year=None, end_month=None, end_year=None):
        try:
            query = MonthlySalarySummary.query
            if driver_ids:
                query = query.filter(MonthlySalarySummary.driver_id.in_(driver_ids))

            if start_month and start_year and end_month and end_year:
                if start_year == end_year:
                    query = query.filter(
                        MonthlySalarySummary.year == start_year,
                        MonthlySalarySummary.month >= start_month,
                        MonthlySalarySummary.month <= end_month,
                    )
                else:
                    query = query.filter(or_(
                        and_(MonthlySalarySummary.year == start_year, MonthlySalarySummary.month >= start_month),
                        and_(MonthlySalarySummary.year > start_year, MonthlySalarySummary.year < end_year),
                        and_(MonthlySalarySummary.year == end_year, MonthlySalarySummary.month <= end_month),
                    ))
            else:
                today = display_today()
                query = query.filter(MonthlySalarySummary.month == today.month,
                                     MonthlySalarySummary.year == today.year)

            return query.order_by(
                MonthlySalarySummary.year.desc(),
                MonthlySalarySummary.month.desc(),
                MonthlySalarySummary.driver_name.asc(),
            ).all()
        except Exception as e:
            logging.error(f"Error fetching monthly summaries: {e}", exc_info=True)
            raise ServiceError("Could not fetch monthly summaries. Please try again later.", status_code=500)
