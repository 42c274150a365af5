"""
Tests for salary payments
"""
import pytest

from fleetbooks.extensions import db
from fleetbooks.models import Driver, MonthlySalarySummary
from fleetbooks.utils.timezone_utils import display_today


def pay(client, driver_id, amount, **extra):
    payload = {
        'driver_id': driver_id,
        'amount': amount,
        'payment_date': display_today().isoformat(),
        'payment_method': 'upi',
    }
    payload.update(extra)
    return client.post('/api/salary-payments', json=payload)


class TestSalaryPayments:

    def test_payment_reduces_pending(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id))

        resp = pay(client, driver_id, 100, notes='advance')
        assert resp.status_code == 201
        payment = resp.get_json()['payment']
        today = display_today()
        assert payment['month'] == today.month
        assert payment['year'] == today.year
        assert payment['driver_name'] == 'Vivek Bali'

        driver = db.session.get(Driver, driver_id)
        assert driver.total_salary_paid == 100
        assert driver.pending_salary == pytest.approx(164.9)

    def test_payment_refreshes_monthly_summary(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id))
        pay(client, driver_id, 100)

        today = display_today()
        summary = MonthlySalarySummary.query.filter_by(
            driver_id=driver_id, month=today.month, year=today.year).one()
        assert summary.total_earnings_this_month == 883
        assert summary.total_salary_this_month == pytest.approx(264.9)
        assert summary.total_paid_this_month == 100
        assert summary.remaining_salary_this_month == pytest.approx(164.9)
        assert summary.payments_this_month == 1

    def test_cannot_overpay(self, client, drivers):
        driver_id = drivers['Preetam']['id']
        resp = pay(client, driver_id, 50)
        assert resp.status_code == 400
        assert 'exceeds pending salary' in resp.get_json()['error']

    def test_validation(self, client, drivers):
        driver_id = drivers['Preetam']['id']
        assert pay(client, driver_id, 0).status_code == 400
        assert pay(client, driver_id, 10, payment_method='cheque').status_code == 400
        assert client.post('/api/salary-payments', json={}).status_code == 400

    def test_unknown_driver(self, client):
        assert pay(client, 999, 10).status_code == 404

    def test_list_filtered_by_driver(self, client, drivers, trip_payload):
        vivek = drivers['Vivek Bali']['id']
        preetam = drivers['Preetam']['id']
        client.post('/api/trips', json=trip_payload(vivek))
        client.post('/api/trips', json=trip_payload(preetam))
        pay(client, vivek, 50)
        pay(client, vivek, 60)
        pay(client, preetam, 70)

        body = client.get('/api/salary-payments').get_json()
        assert body['total_payments'] == 3

        body = client.get(f'/api/salary-payments?driver_id={vivek}&limit=1').get_json()
        assert body['total_payments'] == 2
        assert body['total_pages'] == 2
        assert len(body['payments']) == 1

    def test_full_pending_after_fractional_trips(self, client, drivers, trip_payload):
        """Paying the displayed pending figure clears it after fractional trip amounts."""
        driver_id = drivers['Preetam']['id']
        for earnings in (1000.1, 1000.2, 1000.3):
            resp = client.post('/api/trips', json=trip_payload(driver_id, uber_earnings=earnings))
            assert resp.status_code == 201

        driver = db.session.get(Driver, driver_id)
        shown = round(driver.pending_salary, 2)
        assert driver.pending_salary == shown

        resp = pay(client, driver_id, shown)
        assert resp.status_code == 201
        db.session.refresh(driver)
        assert driver.pending_salary == 0
        assert pay(client, driver_id, 0.01).status_code == 400
