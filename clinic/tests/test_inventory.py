import pytest

from clinic.models import InventoryItem

pytestmark = pytest.mark.django_db


def add_item(api, **overrides):
    body = {
        'name': 'Paracetamol',
        'category': 'MEDICINE',
        'unit': 'tablet',
        'quantity': 500,
        'reorderLevel': 100,
        'cost': 0.5,
    }
    body.update(overrides)
    return api.post('/api/inventory', body, format='json')


def test_create_item(api):
    r = add_item(api, expiryDate='2031-12-31', supplier='MediSupply Inc.')
    assert r.status_code == 201
    assert r.data['cost'] == 0.5
    assert r.data['expiryDate'] == '2031-12-31'
    assert r.data['lowStock'] is False


@pytest.mark.parametrize('field,value', [('quantity', -1), ('reorderLevel', 0), ('cost', -2)])
def test_numeric_bounds(api, field, value):
    r = add_item(api, **{field: value})
    assert r.status_code == 400
    assert [e['path'] for e in r.data['errors']] == [field]
    assert not InventoryItem.objects.exists()


def test_low_stock_includes_items_at_reorder_level(api):
    add_item(api, name='Gauze', quantity=5, reorderLevel=10)
    add_item(api, name='Gloves', quantity=10, reorderLevel=10)
    add_item(api, name='Masks', quantity=11, reorderLevel=10)
    r = api.get('/api/inventory/low-stock')
    assert r.status_code == 200
    assert [i['name'] for i in r.data] == ['Gauze', 'Gloves']


def test_partial_update(api):
    item = add_item(api).data
    r = api.put(f"/api/inventory/{item['id']}", {'quantity': 20}, format='json')
    assert r.status_code == 200
    assert r.data['quantity'] == 20
    assert r.data['name'] == 'Paracetamol'
    assert r.data['lowStock'] is True


def test_by_category(api):
    add_item(api)
    add_item(api, name='Monitor', category='EQUIPMENT', unit='unit', quantity=3, reorderLevel=1, cost=120)
    r = api.get('/api/inventory/category/EQUIPMENT')
    assert [i['name'] for i in r.data] == ['Monitor']
    assert api.get('/api/inventory/category/FOOD').status_code == 400


def test_delete_item(api):
    item = add_item(api).data
    r = api.delete(f"/api/inventory/{item['id']}")
    assert r.data == {'message': 'Inventory item deleted successfully'}
    missing = api.get(f"/api/inventory/{item['id']}")
    assert missing.status_code == 404
    assert missing.data['message'] == 'Inventory item not found'
