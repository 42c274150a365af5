"""
Tests for the dashboard and the owner-gated analytics endpoints
"""
import pytest


class TestDashboard:

    def test_overall_stats(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id))
        client.post('/api/trips', json=trip_payload(driver_id, trip_date='2021-06-01'))
        client.post('/api/cashier', json={
            'type': 'deposit', 'amount': 250, 'description': 'Float', 'cashier_name': 'Meena',
            'owner_authenticated': True, 'transaction_date': '2021-06-01',
        })

        resp = client.get('/api/dashboard')
        assert resp.status_code == 200
        body = resp.get_json()
        stats = body['overall_stats']
        assert stats['total_drivers'] == 4
        assert stats['total_trips_today'] == 1
        assert stats['total_trips_this_month'] == 1
        assert stats['total_earnings'] == 1766
        assert stats['total_pending_salary'] == pytest.approx(529.8)
        assert stats['cash_balance'] == 250
        assert body['cash_balance'] == 250

        vivek = next(d for d in body['drivers'] if d['name'] == 'Vivek Bali')
        assert vivek['total_trips'] == 2
        assert len(vivek['recent_trips']) == 2
        assert vivek['platform_breakdown']['uber'] == 1766
        assert '*Driver:* Vivek Bali' in vivek['whatsapp_summary']

    def test_date_window_and_driver_filter(self, client, drivers, trip_payload):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id, trip_date='2021-06-01'))
        client.post('/api/trips', json=trip_payload(driver_id, trip_date='2021-07-01'))

        resp = client.get(f'/api/dashboard?driver_id={driver_id}&date_from=2021-06-01&date_to=2021-06-30')
        body = resp.get_json()
        assert len(body['drivers']) == 1
        summary = body['drivers'][0]
        assert summary['total_trips'] == 1
        assert summary['last_trip_date'] == '2021-06-01'
        assert '(01/06/2021 - 30/06/2021)' in summary['whatsapp_summary']

    def test_bad_date(self, client):
        assert client.get('/api/dashboard?date_from=yesterday').status_code == 400


class TestOwnerGate:

    def test_requires_password(self, client, drivers):
        assert client.get('/api/owner-dashboard').status_code == 401
        assert client.get('/api/business-analytics').status_code == 401
        resp = client.get('/api/owner-dashboard', headers={'X-Owner-Password': 'wrong'})
        assert resp.status_code == 401

    def test_header_access(self, client, drivers, owner_headers):
        assert client.get('/api/owner-dashboard', headers=owner_headers).status_code == 200
        assert client.get('/api/business-analytics', headers=owner_headers).status_code == 200

    def test_session_access(self, client, drivers):
        assert client.post('/api/owner-auth', json={'password': 'nope'}).status_code == 401
        assert client.post('/api/owner-auth', json={'password': 'owner-test'}).status_code == 200
        assert client.get('/api/owner-dashboard').status_code == 200

        client.delete('/api/owner-auth')
        assert client.get('/api/owner-dashboard').status_code == 401

    def test_non_ascii_password(self, app, client, drivers):
        """Passwords outside ASCII are compared, not rejected with a server error"""
        assert client.post('/api/owner-auth', json={'password': 'pässwörd'}).status_code == 401
        resp = client.get('/api/owner-dashboard', headers={'X-Owner-Password': 'pässwörd'})
        assert resp.status_code == 401
        assert client.post('/owner-login', data={'password': 'pässwörd'}).status_code == 200

        app.config['OWNER_PASSWORD'] = 'mālik-2024'
        assert client.post('/api/owner-auth', json={'password': 'mālik-2024'}).status_code == 200

    def test_invalid_period(self, client, owner_headers):
        assert client.get('/api/owner-dashboard?period=year', headers=owner_headers).status_code == 400
        assert client.get('/api/business-analytics?period=1d', headers=owner_headers).status_code == 400


class TestOwnerDashboard:

    def test_today_metrics(self, client, drivers, trip_payload, owner_headers):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id))
        client.post('/api/trips', json=trip_payload(driver_id, trip_date='2021-06-01'))

        body = client.get('/api/owner-dashboard?period=today', headers=owner_headers).get_json()
        assert body['period'] == 'today'
        assert body['total_trips'] == 1
        assert body['total_revenue'] == 883
        assert body['total_expenses'] == 250
        assert body['total_pending_salaries'] == pytest.approx(264.9)
        assert body['net_profit'] == pytest.approx(883 - 250 - 264.9)
        assert body['total_cash_in_hand'] == 450
        assert body['most_profitable_platform'] == 'uber'
        assert body['top_performing_driver'] == 'Vivek Bali'
        assert body['active_drivers'] == 1
        assert body['recent_transactions'][0]['type'] == 'trip'
        statuses = {d['name']: d['status'] for d in body['driver_summaries']}
        assert statuses['Preetam'] == 'inactive'

        body = client.get('/api/owner-dashboard?period=all', headers=owner_headers).get_json()
        assert body['total_trips'] == 2


class TestBusinessAnalytics:

    def test_period_window(self, client, drivers, trip_payload, owner_headers):
        driver_id = drivers['Vivek Bali']['id']
        client.post('/api/trips', json=trip_payload(driver_id))
        client.post('/api/trips', json=trip_payload(driver_id, trip_date='2021-06-01'))

        body = client.get('/api/business-analytics?period=7d', headers=owner_headers).get_json()
        assert body['total_trips'] == 1
        assert body['total_active_drivers'] == 4
        assert body['total_revenue'] == 883
        assert body['platform_distribution']['uber'] == 883
        assert body['top_performers'][0]['name'] == 'Vivek Bali'
        inactive = [r['driver'] for r in body['risk_factors'] if r['type'] == 'inactive_driver']
        assert sorted(inactive) == ['Chhotelal', 'Preetam', 'Vikash Yadav']
        assert 'risk_score' in body['business_health']

        body = client.get('/api/business-analytics?period=all', headers=owner_headers).get_json()
        assert body['total_trips'] == 2
        assert len(body['monthly_trend']) == 2
