from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import InventoryItem
from clinic.serializers.common import path_choice, path_id, validated
from clinic.serializers.inventory import InventoryItemSerializer
from clinic.services import inventory as inventory_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def inventory(request):
    if request.method == 'GET':
        return Response([inventory_service.format_item(i) for i in inventory_service.list_items()])
    data = validated(InventoryItemSerializer, request.data)
    item = inventory_service.create_item(data)
    return Response(inventory_service.format_item(item), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def inventory_low_stock(request):
    return Response([inventory_service.format_item(i) for i in inventory_service.low_stock()])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def inventory_by_category(request, category):
    category = path_choice(category, InventoryItem.CATEGORY_CHOICES, 'category', 'category')
    return Response([inventory_service.format_item(i) for i in inventory_service.list_by_category(category)])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def inventory_detail(request, pk):
    item_id = path_id(pk, 'inventory item')
    if request.method == 'GET':
        return Response(inventory_service.format_item(inventory_service.get_item(item_id)))
    if request.method == 'PUT':
        # fields left out keep their stored values
        data = validated(InventoryItemSerializer, request.data, partial=True)
        return Response(inventory_service.format_item(inventory_service.update_item(item_id, data)))
    inventory_service.delete_item(item_id)
    return Response({'message': 'Inventory item deleted successfully'})
