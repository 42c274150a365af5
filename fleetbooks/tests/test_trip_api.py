"""
Tests for trip recording and listing
"""
import pytest

from fleetbooks.extensions import db
from fleetbooks.models import CashBalance, CashierTransaction, Driver


class TestCreateTrip:

    def test_trip_updates_driver_ledger(self, app, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        resp = client.post('/api/trips', json=trip_payload(driver_id))
        assert resp.status_code == 201
        trip = resp.get_json()['trip']

        assert trip['trip_amount'] == 1000
        assert trip['commission_amount'] == 117
        assert trip['net_amount'] == 883
        assert trip['fuel_cost'] == 200
        assert trip['driver_salary'] == 0
        assert trip['cash_in_driver_hand'] == 450
        assert trip['platform'] == 'multiple'
        assert trip['commission_details'] == {'uber': 117, 'yatri': 0, 'total': 117}
        assert trip['platform_details']['uber']['commission'] == 117
        assert trip['fuel_entries'][0]['description'] == 'CNG'

        driver = db.session.get(Driver, driver_id)
        assert driver.total_earnings == 1000
        assert driver.pending_salary == pytest.approx(264.9)
        assert driver.total_salary_paid == 0

    def test_salary_taken_is_paid_not_pending(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        resp = client.post('/api/trips', json=trip_payload(driver_id, driver_took_salary=True))
        assert resp.status_code == 201
        assert resp.get_json()['trip']['cash_in_driver_hand'] == pytest.approx(450 - 264.9)

        driver = db.session.get(Driver, driver_id)
        assert driver.total_salary_paid == pytest.approx(264.9)
        assert driver.pending_salary == 0

    def test_odometer_total(self, client, drivers, trip_payload):
        driver_id = drivers['Preetam']['id']
        resp = client.post('/api/trips', json=trip_payload(driver_id, start_km=1200, end_km=1350.5))
        assert resp.get_json()['trip']['total_km'] == 150.5

    def test_fuel_entry_without_amount_counts_as_zero(self, client, drivers, trip_payload):
        driver_id = drivers['Preetam']['id']
        fuel = [{'id': '1', 'amount': 200, 'description': 'CNG'}, {'id': '2', 'description': 'pending bill'}]
        resp = client.post('/api/trips', json=trip_payload(driver_id, fuel_entries=fuel))
        assert resp.status_code == 201
        trip = resp.get_json()['trip']
        assert trip['fuel_cost'] == 200
        assert trip['fuel_entries'][1]['amount'] == 0

    def test_negative_cash_requires_choice(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        payload = trip_payload(driver_id, uber_cash=0, online_payment=0, other_expenses=0)
        resp = client.post('/api/trips', json=payload)
        assert resp.status_code == 400
        assert 'negative' in resp.get_json()['error']

    def test_negative_cash_from_cashier(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        payload = trip_payload(driver_id, uber_cash=0, online_payment=0, other_expenses=0,
                               negative_handling_option='cashier')
        resp = client.post('/api/trips', json=payload)
        assert resp.status_code == 201
        trip = resp.get_json()['trip']
        assert trip['amount_from_cashier'] == 200

        withdrawal = CashierTransaction.query.filter_by(trip_id=trip['id']).one()
        assert withdrawal.type == 'withdrawal'
        assert withdrawal.amount == 200
        assert withdrawal.cashier_name == 'System'
        assert CashBalance.current().current_balance == -200

    def test_negative_cash_onto_salary(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        payload = trip_payload(driver_id, uber_cash=0, online_payment=0, other_expenses=0,
                               driver_took_salary=True, negative_handling_option='salary')
        resp = client.post('/api/trips', json=payload)
        assert resp.status_code == 201
        cash = resp.get_json()['trip']['cash_in_driver_hand']
        assert cash == pytest.approx(-200 - 264.9)

        driver = db.session.get(Driver, driver_id)
        assert driver.total_salary_paid == pytest.approx(264.9 + 464.9)
        assert CashierTransaction.query.count() == 0

    def test_validation(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        payload = trip_payload(driver_id)
        del payload['trip_date']
        resp = client.post('/api/trips', json=payload)
        assert resp.status_code == 400
        assert 'trip_date' in resp.get_json()['details']

        resp = client.post('/api/trips', json=trip_payload(driver_id, uber_earnings=-5))
        assert resp.status_code == 400

        resp = client.post('/api/trips', json=trip_payload(driver_id, negative_handling_option='owner'))
        assert resp.status_code == 400

    def test_unknown_driver(self, client, trip_payload):
        resp = client.post('/api/trips', json=trip_payload(999))
        assert resp.status_code == 404


class TestTripPreview:

    def test_preview_does_not_save(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        payload = trip_payload(driver_id, uber_cash=0, online_payment=0, other_expenses=0)
        del payload['trip_date']
        resp = client.post('/api/trips/preview', json=payload)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['net_earnings'] == 883
        assert body['is_negative'] is True
        assert body['shortfall'] == 200
        assert client.get('/api/trips').get_json()['total_trips'] == 0


class TestListTrips:

    def test_filters_and_pagination(self, client, drivers, trip_payload):
        vivek = drivers['Vivek Bali']['id']
        preetam = drivers['Preetam']['id']
        for _ in range(3):
            client.post('/api/trips', json=trip_payload(vivek))
        client.post('/api/trips', json=trip_payload(preetam, platform='uber'))
        client.post('/api/trips', json=trip_payload(preetam, trip_date='2024-01-15'))

        body = client.get('/api/trips?limit=2').get_json()
        assert body['total_trips'] == 5
        assert body['total_pages'] == 3
        assert len(body['trips']) == 2

        body = client.get(f'/api/trips?driver_id={vivek}').get_json()
        assert body['total_trips'] == 3

        body = client.get('/api/trips?platform=uber').get_json()
        assert [t['driver_name'] for t in body['trips']] == ['Preetam']

        body = client.get('/api/trips?date=2024-01-15').get_json()
        assert body['total_trips'] == 1
        assert body['trips'][0]['trip_date'] == '2024-01-15'

    def test_bad_filter(self, client):
        assert client.get('/api/trips?platform=ola').status_code == 400
        assert client.get('/api/trips?page=0').status_code == 400
