"""
Smoke tests for the server-rendered pages
"""
import pytest


class TestViews:

    @pytest.mark.parametrize('path', ['/', '/add-trip', '/salary-payments', '/cashier', '/driver-reports'])
    def test_public_pages_render(self, client, drivers, path):
        resp = client.get(path)
        assert resp.status_code == 200
        assert b'FleetBooks' in resp.data

    def test_index_shows_whatsapp_text(self, client, drivers, trip_payload):
        client.post('/api/trips', json=trip_payload(drivers['Preetam']['id']))
        resp = client.get('/')
        assert 'Fleet Management Report'.encode() in resp.data

    def test_empty_index_offers_initialize(self, client):
        resp = client.get('/')
        assert b'Initialize default drivers' in resp.data

    def test_driver_report_page(self, client, drivers, trip_payload):
        driver_id = drivers['Preetam']['id']
        client.post('/api/trips', json=trip_payload(driver_id))
        resp = client.get(f'/driver-reports?driver_id={driver_id}')
        assert resp.status_code == 200
        assert b'Remaining' in resp.data

    def test_owner_pages_redirect_to_login(self, client):
        resp = client.get('/owner')
        assert resp.status_code == 302
        assert '/owner-login' in resp.headers['Location']
        assert client.get('/business-analytics').status_code == 302

    def test_owner_login_flow(self, client, drivers):
        resp = client.post('/owner-login', data={'password': 'wrong', 'next': '/owner'})
        assert resp.status_code == 200
        assert b'Invalid owner password' in resp.data

        resp = client.post('/owner-login', data={'password': 'owner-test', 'next': '/business-analytics'})
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/business-analytics')

        assert client.get('/owner').status_code == 200
        assert client.get('/business-analytics?period=all').status_code == 200

    def test_owner_login_ignores_external_next(self, client):
        resp = client.post('/owner-login', data={'password': 'owner-test', 'next': '//evil.example'})
        assert resp.headers['Location'].endswith('/owner')

    def test_health_check(self, client):
        resp = client.get('/api/health-check')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'

    def test_unknown_api_path(self, client):
        resp = client.get('/api/nothing-here')
        assert resp.status_code == 404
        assert resp.get_json()['error'] == 'API endpoint not found'
