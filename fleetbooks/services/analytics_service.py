import logging
from flask import current_app
from fleetbooks.models.driver import Driver
from fleetbooks.services.cashier_service import CashierService
from fleetbooks.services.errors import ServiceError
from fleetbooks.services.salary_payment_service import SalaryPaymentService
from fleetbooks.services.trip_service import TripService
from fleetbooks.services.reconciliation import (
    RiskThresholds,
    build_business_analytics,
    build_owner_metrics,
    build_whatsapp_summary,
    summarize_driver,
)
from fleetbooks.utils.timezone_utils import (
    analytics_period_start,
    display_today,
    month_bounds,
    owner_period_start,
)


def _thresholds():
    config = current_app.config
    return RiskThresholds(
        pending_salary_alert=config['PENDING_SALARY_ALERT'],
        pending_salary_critical=config['PENDING_SALARY_CRITICAL'],
        online_payment_alert=config['ONLINE_PAYMENT_ALERT'],
        online_payment_critical=config['ONLINE_PAYMENT_CRITICAL'],
        daily_revenue_target=config['DAILY_REVENUE_TARGET'],
    )


class AnalyticsService:
    @staticmethod
    def dashboard(driver_id=None, date_from=None, date_to=None):
        """
        Per-driver summaries with recent activity and WhatsApp text, plus
        fleet-wide stats. The date window applies to trips and payments.
        """
        try:
            active_drivers = Driver.query_active().order_by(Driver.name.asc()).all()
            if driver_id:
                targets = Driver.query.filter_by(id=driver_id).all()
            else:
                targets = active_drivers

            today = display_today()
            month_start, month_end = month_bounds(today.month, today.year)
            stats = {
                'total_drivers': len(active_drivers),
                'total_earnings': 0.0,
                'total_pending_salary': 0.0,
                'total_trips_today': TripService.count_between(today, today),
                'total_trips_this_month': TripService.count_between(month_start, month_end),
                'cash_balance': CashierService.get_balance(),
            }

            drivers = []
            for driver in targets:
                trips = TripService.trips_between(date_from, date_to, driver_ids=[driver.id])
                payments = SalaryPaymentService.payments_between(date_from, date_to, driver_ids=[driver.id])
                summary = summarize_driver(driver, trips, payments)
                summary['recent_trips'] = trips[:10]
                summary['recent_payments'] = SalaryPaymentService.recent_for_driver(driver.id)
                summary['whatsapp_summary'] = build_whatsapp_summary(
                    summary, trips, date_from if date_to else None, date_to if date_from else None)
                drivers.append(summary)

                stats['total_earnings'] += summary['total_earnings']
                stats['total_pending_salary'] += summary['pending_salary']

            return {
                'drivers': drivers,
                'overall_stats': stats,
                'cash_balance': stats['cash_balance'],
            }
        except Exception as e:
            logging.error(f"Error fetching dashboard data: {e}", exc_info=True)
            raise ServiceError("Could not fetch dashboard data. Please try again later.", status_code=500)

    @staticmethod
    def business_analytics(period='30d'):
        try:
            start = analytics_period_start(period)
            drivers = Driver.query_active().order_by(Driver.name.asc()).all()
            trips = TripService.trips_between(date_from=start)
            payments = SalaryPaymentService.payments_between(date_from=start)
            analytics = build_business_analytics(
                drivers, trips, payments, CashierService.get_balance(), _thresholds())
            analytics['period'] = period
            analytics['period_start'] = start
            return analytics
        except Exception as e:
            logging.error(f"Error fetching business analytics: {e}", exc_info=True)
            raise ServiceError("Could not fetch business analytics. Please try again later.", status_code=500)

    @staticmethod
    def owner_dashboard(period='today'):
        try:
            start = owner_period_start(period)
            drivers = Driver.query_active().order_by(Driver.name.asc()).all()
            trips = TripService.trips_between(date_from=start)
            payments = SalaryPaymentService.payments_between(date_from=start)
            transactions = CashierService.recent(limit=5, date_from=start)
            metrics = build_owner_metrics(
                drivers, trips, payments, CashierService.get_balance(), transactions, _thresholds())
            metrics['period'] = period
            metrics['period_start'] = start
            return metrics
        except Exception as e:
            logging.error(f"Error fetching owner dashboard: {e}", exc_info=True)
            raise ServiceError("Could not fetch owner dashboard. Please try again later.", status_code=500)
