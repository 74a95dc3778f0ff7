"""
Tests for the catalog REST endpoints.
"""
import pytest
from rest_framework.test import APIClient

from apps.catalog.models import Variant


pytestmark = pytest.mark.django_db

SELECT_URL = '/api/products/caderno/select/'


@pytest.fixture
def api_client():
    return APIClient()


class TestSelectGet:

    def test_whisper(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL, {'model': 'whisper'})

        assert response.status_code == 200
        data = response.json()
        assert data['product'] == 'caderno'
        assert data['selection'] == [{'prop_id': 'model', 'attr_id': 'whisper'}]
        assert [sku['sku'] for sku in data['active_skus']] == ['whisper-A3-blue']
        assert data['active_skus'][0]['price'] == '600.00'
        assert data['active_skus'][0]['count'] == 20
        assert data['min_price'] == '600.00'
        assert data['max_price'] == '600.00'
        assert data['count'] == 20
        assert {'prop_id': 'size', 'attr_id': 'A4'} in data['disabled_attrs']
        assert {'prop_id': 'color', 'attr_id': 'blue'} not in data['disabled_attrs']

    def test_empty_selection(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL)

        assert response.status_code == 200
        data = response.json()
        assert len(data['active_skus']) == 3
        assert data['count'] == 135
        assert data['min_price'] == '400.00'
        assert data['max_price'] == '600.00'
        assert data['disabled_attrs'] == [{'prop_id': 'model', 'attr_id': 'ring'}]

    def test_parameter_order_does_not_matter(self, api_client, notebook_product):
        first = api_client.get(SELECT_URL + '?model=moth&size=A4').json()
        second = api_client.get(SELECT_URL + '?size=A4&model=moth').json()

        assert first['active_skus'] == second['active_skus']
        assert first['disabled_attrs'] == second['disabled_attrs']

    def test_dead_end_has_no_price_range(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL, {'model': 'moth', 'size': 'A3'})

        data = response.json()
        assert data['active_skus'] == []
        assert data['min_price'] is None
        assert data['max_price'] is None
        assert data['count'] == 0

    def test_unknown_attribute_is_not_an_error(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL, {'finish': 'matte'})

        assert response.status_code == 200
        assert response.json()['active_skus'] == []

    def test_format_param_ignored(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL, {'model': 'whisper', 'format': 'json'})

        assert response.status_code == 200
        assert response.json()['selection'] == [{'prop_id': 'model', 'attr_id': 'whisper'}]

    def test_unknown_product(self, api_client, notebook_product):
        response = api_client.get('/api/products/nao-existe/select/')

        assert response.status_code == 404

    def test_reflects_stock_updates(self, api_client, notebook_product):
        api_client.get(SELECT_URL, {'model': 'whisper'})

        variant = Variant.objects.get(sku='whisper-A3-blue')
        variant.stock_quantity = 0
        variant.save()

        data = api_client.get(SELECT_URL, {'model': 'whisper'}).json()
        assert data['active_skus'] == []
        assert data['count'] == 0

    @pytest.mark.parametrize('param', ['search', 'ordering', 'is_active'])
    def test_list_filter_names_are_selections(self, api_client, notebook_product, param):
        response = api_client.get(SELECT_URL, {param: 'matte'})

        assert response.status_code == 200
        data = response.json()
        assert data['product'] == 'caderno'
        assert data['selection'] == [{'prop_id': param, 'attr_id': 'matte'}]
        assert data['active_skus'] == []

    def test_repeated_param_rejected(self, api_client, notebook_product):
        response = api_client.get(SELECT_URL + '?model=moth&size=A4&size=A3')

        assert response.status_code == 400
        assert response.json()['selection'] == ["Only one value can be selected for 'size'"]


class TestSelectPost:

    def test_selection_payload(self, api_client, notebook_product):
        payload = {'selection': [
            {'prop_id': 'size', 'attr_id': 'A4'},
            {'prop_id': 'model', 'attr_id': 'moth'},
        ]}
        response = api_client.post(SELECT_URL, payload, format='json')

        assert response.status_code == 200
        data = response.json()
        assert [sku['sku'] for sku in data['active_skus']] == ['moth-A4-blue', 'moth-A4-yellow']
        assert data['count'] == 115

    def test_empty_payload(self, api_client, notebook_product):
        response = api_client.post(SELECT_URL, {}, format='json')

        assert response.status_code == 200
        assert response.json()['count'] == 135

    def test_two_values_for_one_property(self, api_client, notebook_product):
        payload = {'selection': [
            {'prop_id': 'size', 'attr_id': 'A4'},
            {'prop_id': 'size', 'attr_id': 'A3'},
        ]}
        response = api_client.post(SELECT_URL, payload, format='json')

        assert response.status_code == 400
        assert 'selection' in response.json()

    def test_malformed_reference(self, api_client, notebook_product):
        response = api_client.post(SELECT_URL, {'selection': [{'prop_id': 'size'}]}, format='json')

        assert response.status_code == 400


class TestProducts:

    def test_list(self, api_client, notebook_product):
        response = api_client.get('/api/products/')

        assert response.status_code == 200
        assert [p['slug'] for p in response.json()] == ['caderno']

    def test_detail_lists_options(self, api_client, notebook_product):
        response = api_client.get('/api/products/caderno/')

        data = response.json()
        assert data['active_variant_count'] == 11
        assert [t['slug'] for t in data['attribute_types']] == ['model', 'size', 'color']
        assert [o['value'] for o in data['attribute_types'][1]['options']] == ['A4', 'A3']


class TestVariants:

    def test_in_stock_filter(self, api_client, notebook_product):
        response = api_client.get('/api/variants/', {'product': 'caderno', 'in_stock': 'true'})

        assert response.status_code == 200
        skus = [v['sku'] for v in response.json()]
        assert skus == ['moth-A4-blue', 'moth-A4-yellow', 'whisper-A3-blue']

    def test_attribute_filter(self, api_client, notebook_product):
        response = api_client.get('/api/variants/', {'attribute': 'size:A3', 'in_stock': 'true'})

        variants = response.json()
        assert [v['sku'] for v in variants] == ['whisper-A3-blue']
        assert variants[0]['attributes'] == {'model': 'whisper', 'size': 'A3', 'color': 'blue'}

    def test_price_filter(self, api_client, notebook_product):
        response = api_client.get('/api/variants/', {'min_price': '500'})

        assert [v['sku'] for v in response.json()] == ['whisper-A3-blue', 'whisper-A3-yellow']
