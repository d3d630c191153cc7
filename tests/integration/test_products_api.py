"""
Integration tests for the /api/product endpoints.
"""

GUM = {'barcode': '123', 'name': 'gum', 'stock': 10, 'costPrice': 5, 'salePrice': 10}


class TestProductEndpoints:
    """Catalog CRUD over HTTP."""

    def test_create_and_find(self, client):
        response = client.post('/api/product/create', json=GUM)

        assert response.status_code == 201
        created = response.get_json()['data']
        assert created == dict(GUM, id=created['id'])

        assert client.get(f"/api/product/find/id/{created['id']}").get_json()['data'] == created
        assert client.get('/api/product/find/barcode/123').get_json()['data'] == created
        assert client.get('/api/product/find/all').get_json()['data'] == [created]
        assert client.get('/api/product/find/name/GU').get_json()['data'] == [created]

    def test_duplicate_barcode(self, client, gum):
        response = client.post('/api/product/create', json=dict(GUM, name='other gum'))

        assert response.status_code == 409
        assert response.get_json()['error']['name'] == 'DuplicateKey'

    def test_create_with_missing_field(self, client):
        body = dict(GUM)
        del body['salePrice']

        response = client.post('/api/product/create', json=body)

        assert response.status_code == 400
        assert response.get_json()['error']['name'] == 'ValidationError'

    def test_update(self, client, gum, stock_of):
        response = client.put('/api/product/update', json=dict(GUM, id=gum.id, stock=40, salePrice=11))

        assert response.status_code == 200
        assert response.get_json()['data']['salePrice'] == 11
        assert stock_of(gum.id) == 40

    def test_update_without_changes(self, client, gum):
        response = client.put('/api/product/update', json=dict(GUM, id=gum.id))

        assert response.status_code == 400
        assert response.get_json()['error']['name'] == 'NotModified'

    def test_update_unknown_product(self, client):
        response = client.put('/api/product/update', json=dict(GUM, id=321))

        assert response.status_code == 404

    def test_not_found(self, client, gum):
        assert client.get('/api/product/find/id/99').status_code == 404
        assert client.get('/api/product/find/barcode/999').status_code == 404
        assert client.get('/api/product/find/name/soda').status_code == 404

    def test_empty_catalog(self, client):
        assert client.get('/api/product/find/all').status_code == 404

    def test_delete_by_id_and_barcode(self, client, make_product):
        first = make_product(barcode='1')
        make_product(barcode='2')

        assert client.delete(f'/api/product/delete/id/{first.id}').get_json()['data'] == {'affectedRows': 1}
        assert client.delete('/api/product/delete/barcode/2').status_code == 200
        assert client.delete('/api/product/delete/barcode/2').status_code == 404
        assert client.delete('/api/product/delete/id/x').status_code == 400
