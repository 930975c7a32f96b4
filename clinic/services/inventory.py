import logging

from django.db.models import F
from rest_framework.exceptions import NotFound

from clinic.models import InventoryItem

logger = logging.getLogger(__name__)

# request key -> model field
FIELD_MAP = {
    'name': 'name',
    'category': 'category',
    'description': 'description',
    'unit': 'unit',
    'quantity': 'quantity',
    'reorderLevel': 'reorder_level',
    'cost': 'cost',
    'supplier': 'supplier',
    'expiryDate': 'expiry_date',
    'location': 'location',
}


def format_item(item: InventoryItem) -> dict:
    return {
        'id': str(item.id),
        'name': item.name,
        'category': item.category,
        'description': item.description,
        'unit': item.unit,
        'quantity': item.quantity,
        'reorderLevel': item.reorder_level,
        'cost': float(item.cost) if item.cost is not None else None,
        'supplier': item.supplier,
        'expiryDate': item.expiry_date.isoformat() if item.expiry_date else None,
        'location': item.location,
        'lowStock': item.is_low_stock,
        'createdAt': item.created_at.isoformat() if item.created_at else None,
        'updatedAt': item.updated_at.isoformat() if item.updated_at else None,
    }


def list_items():
    return InventoryItem.objects.order_by('name')


def low_stock():
    """Items at or below their reorder level, scarcest first."""
    return InventoryItem.objects.filter(quantity__lte=F('reorder_level')).order_by('quantity', 'name')


def list_by_category(category: str):
    return list_items().filter(category=category)


def get_item(item_id) -> InventoryItem:
    item = InventoryItem.objects.filter(pk=item_id).first()
    if not item:
        raise NotFound('Inventory item not found')
    return item


def create_item(data: dict) -> InventoryItem:
    item = InventoryItem.objects.create(**{FIELD_MAP[k]: v for k, v in data.items() if k in FIELD_MAP})
    logger.info("Added inventory item %s (%s x%s)", item.id, item.name, item.quantity)
    return item


def update_item(item_id, data: dict) -> InventoryItem:
    item = get_item(item_id)
    for key, value in data.items():
        field = FIELD_MAP.get(key)
        if field:
            setattr(item, field, value)
    item.save()
    if item.is_low_stock:
        logger.warning("Inventory item %s (%s) is low on stock: %s left", item.id, item.name, item.quantity)
    return item


def delete_item(item_id) -> None:
    get_item(item_id).delete()
    logger.info("Deleted inventory item %s", item_id)
