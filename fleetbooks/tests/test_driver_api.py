"""
Tests for the driver endpoints
"""


class TestDriverApi:

    def test_init_seeds_default_roster_once(self, client):
        first = client.post('/api/init')
        assert first.status_code == 201
        assert first.get_json()['drivers_count'] == 4

        second = client.post('/api/init')
        assert second.status_code == 200
        assert second.get_json() == {'message': 'Drivers already initialized', 'count': 4}

    def test_list_sorted_by_name(self, client, drivers):
        resp = client.get('/api/drivers')
        assert resp.status_code == 200
        names = [d['name'] for d in resp.get_json()['drivers']]
        assert names == ['Chhotelal', 'Preetam', 'Vikash Yadav', 'Vivek Bali']

    def test_create_driver(self, client):
        resp = client.post('/api/drivers', json={'name': 'Ramesh', 'commission_percentage': 32.5})
        assert resp.status_code == 201
        driver = resp.get_json()['driver']
        assert driver['name'] == 'Ramesh'
        assert driver['pending_salary'] == 0
        assert driver['is_active'] is True

    def test_duplicate_name_conflicts(self, client, drivers):
        resp = client.post('/api/drivers', json={'name': 'Preetam', 'commission_percentage': 30})
        assert resp.status_code == 409
        assert resp.get_json()['error'] == 'Driver with this name already exists'

    def test_create_requires_fields(self, client):
        assert client.post('/api/drivers', json={}).status_code == 400
        resp = client.post('/api/drivers', json={'name': 'X', 'commission_percentage': 0})
        assert resp.status_code == 400
        assert 'commission_percentage' in resp.get_json()['details']

    def test_update_name_and_commission(self, client, drivers):
        driver_id = drivers['Preetam']['id']
        resp = client.put(f'/api/drivers/{driver_id}', json={'name': 'Preetam Singh', 'commission_percentage': 33})
        assert resp.status_code == 200
        assert resp.get_json()['driver']['name'] == 'Preetam Singh'
        assert resp.get_json()['driver']['commission_percentage'] == 33

    def test_update_to_taken_name_conflicts(self, client, drivers):
        driver_id = drivers['Preetam']['id']
        resp = client.put(f'/api/drivers/{driver_id}', json={'name': 'Chhotelal'})
        assert resp.status_code == 409

    def test_deactivate_hides_driver(self, client, drivers):
        driver_id = drivers['Chhotelal']['id']
        resp = client.put(f'/api/drivers/{driver_id}/active', json={'is_active': False})
        assert resp.status_code == 200
        names = [d['name'] for d in client.get('/api/drivers').get_json()['drivers']]
        assert 'Chhotelal' not in names

        # still reachable directly and can be reactivated
        assert client.get(f'/api/drivers/{driver_id}').status_code == 200
        client.put(f'/api/drivers/{driver_id}/active', json={'is_active': True})
        names = [d['name'] for d in client.get('/api/drivers').get_json()['drivers']]
        assert 'Chhotelal' in names

    def test_unknown_driver(self, client):
        assert client.get('/api/drivers/999').status_code == 404
        assert client.put('/api/drivers/999', json={'name': 'Nobody'}).status_code == 404
        assert client.put('/api/drivers/999/active', json={'is_active': False}).status_code == 404
