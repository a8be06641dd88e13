from decimal import Decimal
import uuid

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from botanic.catalog.models import Product
from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    product_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'order_id', 'product_id', 'product_name', 'product_image_url', 'product_sku',
            'quantity', 'unit_price', 'total_price', 'is_custom_cream', 'created_at'
        ]


class AdminOrderSerializer(serializers.ModelSerializer):
    """Order with its items and the customer's email/name"""
    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    items = OrderItemSerializer(many=True, read_only=True)
    user_email = serializers.SerializerMethodField()
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'user_id', 'order_number', 'status', 'total', 'subtotal', 'shipping_cost', 'tax',
            'tracking_number', 'estimated_delivery', 'notes', 'items', 'user_email', 'user_name',
            'created_at', 'updated_at'
        ]

    def get_user_email(self, obj):
        return obj.user.email if obj.user else ''

    def get_user_name(self, obj):
        profile = getattr(obj.user, 'profile', None) if obj.user else None
        if profile is None:
            return ''
        return f"{profile.first_name or ''} {profile.last_name or ''}".strip()


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
    tracking_number = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    estimated_delivery = serializers.DateField(required=False, allow_null=True)

    def update(self, instance, validated_data):
        """Set the status; tracking number and delivery date only when supplied"""
        instance.status = validated_data['status']
        update_fields = ['status', 'updated_at']
        for field in ('tracking_number', 'estimated_delivery'):
            if field in validated_data:
                setattr(instance, field, validated_data[field])
                update_fields.append(field)
        instance.save(update_fields=update_fields)
        return instance


class CustomerOrderSerializer(serializers.ModelSerializer):
    """The customer's own view of an order"""
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'total', 'subtotal', 'shipping_cost', 'tax',
            'tracking_number', 'estimated_delivery', 'notes', 'items', 'created_at', 'updated_at'
        ]


class OrderItemCreateSerializer(serializers.ModelSerializer):
    product_id = serializers.PrimaryKeyRelatedField(
        source='product', queryset=Product.objects.all(), required=False, allow_null=True
    )
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    total_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))

    class Meta:
        model = OrderItem
        fields = [
            'product_id', 'product_name', 'product_image_url', 'product_sku', 'quantity',
            'unit_price', 'total_price', 'is_custom_cream'
        ]


class OrderCreateSerializer(serializers.ModelSerializer):
    """
    Checkout: the order header and its items, saved together.

    Amounts are taken as computed by the storefront cart; the order always
    starts as `pending` and belongs to the requesting user.
    """
    items = OrderItemCreateSerializer(many=True, allow_empty=False)
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    shipping_cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'),
                                             required=False, default=Decimal('0'))
    tax = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'),
                                   required=False, default=Decimal('0'))
    total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))

    class Meta:
        model = Order
        fields = ['subtotal', 'shipping_cost', 'tax', 'total', 'notes', 'items']

    def create(self, validated_data):
        items = validated_data.pop('items')
        with transaction.atomic():
            order = Order.objects.create(
                order_number=generate_order_number(),
                status='pending',
                **validated_data
            )
            OrderItem.objects.bulk_create([OrderItem(order=order, **item) for item in items])
        return order


def generate_order_number():
    """ORD-YYYYMMDD-XXXXXXXX, unique among orders"""
    order_number = f"ORD-{timezone.now().strftime('%Y%m%d')}-{str(uuid.uuid4())[:8].upper()}"
    while Order.objects.filter(order_number=order_number).exists():
        order_number = f"ORD-{timezone.now().strftime('%Y%m%d')}-{str(uuid.uuid4())[:8].upper()}"
    return order_number
