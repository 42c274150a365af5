import logging
import math
from fleetbooks.extensions import db
from fleetbooks.models.driver import Driver
from fleetbooks.models.salary_payment import SalaryPayment
from fleetbooks.services.errors import ServiceError
from fleetbooks.services.monthly_salary_service import MonthlySalaryService
from fleetbooks.services.reconciliation import apply_salary_payment, to_paise


class SalaryPaymentService:
    @staticmethod
    def create(data):
        driver = Driver.query.filter_by(id=data['driver_id']).first()
        if not driver:
            return None

        amount = to_paise(data['amount'])
        pending = to_paise(driver.pending_salary)
        if amount > pending:
            raise ServiceError(f"Payment amount (₹{amount:.2f}) exceeds pending salary (₹{pending:.2f})")

        payment_date = data['payment_date']
        try:
            payment = SalaryPayment(
                driver_id=driver.id,
                driver_name=driver.name,
                amount=amount,
                payment_date=payment_date,
                payment_method=data['payment_method'],
                notes=data.get('notes'),
                month=payment_date.month,
                year=payment_date.year,
            )
            db.session.add(payment)

            driver.total_salary_paid = to_paise((driver.total_salary_paid or 0.0) + amount)
            driver.pending_salary = apply_salary_payment(pending, amount)
            db.session.flush()

            MonthlySalaryService.refresh(driver, payment.month, payment.year)
            db.session.commit()
            logging.info(f"Salary payment of ₹{amount} to {driver.name} via {payment.payment_method}")
            return payment
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating salary payment: {e}", exc_info=True)
            raise ServiceError("Could not create salary payment. Please try again later.", status_code=500)

    @staticmethod
    def list_payments(driver_id=None, page=1, limit=50):
        try:
            query = SalaryPayment.query
            if driver_id:
                query = query.filter(SalaryPayment.driver_id == driver_id)
            query = query.order_by(SalaryPayment.payment_date.desc(), SalaryPayment.created_at.desc())
            pagination = query.paginate(page=page, per_page=limit, error_out=False)
            return {
                'payments': pagination.items,
                'total_payments': pagination.total,
                'current_page': page,
                'total_pages': math.ceil(pagination.total / limit) if limit else 0,
            }
        except Exception as e:
            logging.error(f"Error fetching salary payments: {e}", exc_info=True)
            raise ServiceError("Could not fetch salary payments. Please try again later.", status_code=500)

    @staticmethod
    def payments_between(date_from=None, date_to=None, driver_ids=None):
        query = SalaryPayment.query
        if date_from:
            query = query.filter(SalaryPayment.payment_date >= date_from)
        if date_to:
            query = query.filter(SalaryPayment.payment_date <= date_to)
        if driver_ids is not None:
            query = query.filter(SalaryPayment.driver_id.in_(driver_ids))
        return query.order_by(SalaryPayment.payment_date.desc(), SalaryPayment.created_at.desc()).all()

    @staticmethod
    def recent_for_driver(driver_id, limit=5):
        return (SalaryPayment.query
                .filter_by(driver_id=driver_id)
                .order_by(SalaryPayment.payment_date.desc(), SalaryPayment.created_at.desc())
                .limit(limit)
                .all())
