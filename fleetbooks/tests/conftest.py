import pytest

from fleetbooks.config import TestConfig
from fleetbooks.extensions import db
from fleetbooks.server import create_app
from fleetbooks.utils.timezone_utils import display_today


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def drivers(client):
    """Default roster keyed by name."""
    resp = client.post('/api/init')
    assert resp.status_code == 201
    return {d['name']: d for d in resp.get_json()['drivers']}


@pytest.fixture
def owner_headers(app):
    return {app.config['OWNER_PASSWORD_HEADER']: app.config['OWNER_PASSWORD']}


@pytest.fixture
def trip_payload():
    """Builder for a one-platform Uber day: ₹1000 earned, ₹800 cash, ₹200 fuel."""
    def build(driver_id, **overrides):
        payload = {
            'driver_id': driver_id,
            'trip_date': display_today().isoformat(),
            'uber_earnings': 1000,
            'uber_cash': 800,
            'has_uber_commission': True,
            'fuel_entries': [{'id': '1', 'amount': 200, 'description': 'CNG'}],
            'other_expenses': 50,
            'online_payment': 100,
        }
        payload.update(overrides)
        return payload
    return build
