from rest_framework import serializers
from .models import InventoryItem, InventoryMovement


class InventoryItemSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'name', 'sku', 'category', 'unit', 'description', 'min_stock', 'current_stock',
            'cost_per_unit', 'supplier', 'location', 'expiry_tracking', 'notes', 'active',
            'is_low_stock', 'created_by', 'created_at', 'updated_at'
        ]
        # Stock only changes through movements
        read_only_fields = ['id', 'current_stock', 'created_by', 'created_at', 'updated_at']


class InventoryMovementSerializer(serializers.ModelSerializer):
    inventory_item_id = serializers.PrimaryKeyRelatedField(
        source='inventory_item', queryset=InventoryItem.objects.all()
    )
    inventory_item = InventoryItemSerializer(read_only=True)

    class Meta:
        model = InventoryMovement
        fields = [
            'id', 'inventory_item_id', 'inventory_item', 'movement_type', 'quantity', 'unit_cost',
            'reference_type', 'reference_id', 'notes', 'movement_date', 'created_by', 'created_at'
        ]
        read_only_fields = ['id', 'created_by', 'created_at']

    def validate(self, attrs):
        quantity = attrs.get('quantity')
        if quantity is not None:
            if attrs.get('movement_type') == 'ajuste':
                if quantity == 0:
                    raise serializers.ValidationError({'quantity': 'El ajuste no puede ser cero.'})
            elif quantity <= 0:
                raise serializers.ValidationError({'quantity': 'La cantidad debe ser mayor que cero.'})
        return attrs
