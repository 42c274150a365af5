"""
Tests for the cashier ledger
"""
from fleetbooks.utils.timezone_utils import display_today


def transaction(client, tx_type, amount, **extra):
    payload = {
        'type': tx_type,
        'amount': amount,
        'description': 'Evening collection',
        'cashier_name': 'Meena',
        'owner_authenticated': True,
        'transaction_date': display_today().isoformat(),
    }
    payload.update(extra)
    return client.post('/api/cashier', json=payload)


class TestCashier:

    def test_deposit_then_withdraw(self, client):
        resp = transaction(client, 'deposit', 1500)
        assert resp.status_code == 201
        assert resp.get_json()['new_balance'] == 1500

        resp = transaction(client, 'withdrawal', 400, description='Fuel advance')
        assert resp.status_code == 201
        assert resp.get_json()['new_balance'] == 1100

        body = client.get('/api/cashier').get_json()
        assert body['current_balance'] == 1100
        assert body['total_transactions'] == 2

    def test_withdrawal_over_balance_rejected(self, client):
        transaction(client, 'deposit', 100)
        resp = transaction(client, 'withdrawal', 150)
        assert resp.status_code == 400
        assert 'Insufficient balance' in resp.get_json()['error']
        assert client.get('/api/cashier').get_json()['current_balance'] == 100

    def test_withdrawal_with_no_balance_row(self, client):
        resp = transaction(client, 'withdrawal', 1)
        assert resp.status_code == 400

    def test_validation(self, client):
        resp = transaction(client, 'deposit', 0)
        assert resp.status_code == 400
        assert 'amount' in resp.get_json()['details']
        assert transaction(client, 'transfer', 10).status_code == 400
        assert transaction(client, 'deposit', 10, cashier_name='').status_code == 400
        payload = {'type': 'deposit', 'amount': 10}
        assert client.post('/api/cashier', json=payload).status_code == 400

    def test_filter_by_type(self, client):
        transaction(client, 'deposit', 500)
        transaction(client, 'deposit', 300)
        transaction(client, 'withdrawal', 100)

        body = client.get('/api/cashier?type=withdrawal').get_json()
        assert body['total_transactions'] == 1
        assert body['transactions'][0]['type'] == 'withdrawal'

        # unknown types list everything
        body = client.get('/api/cashier?type=other').get_json()
        assert body['total_transactions'] == 3
