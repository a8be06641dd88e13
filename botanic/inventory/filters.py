import django_filters
from django.db.models import F, Q

from botanic.core.filters import AllAwareCharFilter
from .models import InventoryItem, InventoryMovement


class InventoryItemFilter(django_filters.FilterSet):
    category = AllAwareCharFilter(field_name='category')
    active = django_filters.BooleanFilter(field_name='active')
    low_stock = django_filters.BooleanFilter(method='filter_low_stock', label='Low Stock')
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = InventoryItem
        fields = ['category', 'active', 'low_stock', 'search']

    def filter_low_stock(self, queryset, name, value):
        """Items at or below their minimum stock"""
        if not value:
            return queryset
        return queryset.filter(current_stock__lte=F('min_stock'))

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(sku__icontains=value) |
            Q(description__icontains=value) |
            Q(supplier__icontains=value)
        )


class InventoryMovementFilter(django_filters.FilterSet):
    item = django_filters.NumberFilter(field_name='inventory_item_id')
    movement_type = AllAwareCharFilter(field_name='movement_type')
    date_from = django_filters.DateFilter(field_name='movement_date', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='movement_date', lookup_expr='date__lte')

    class Meta:
        model = InventoryMovement
        fields = ['item', 'movement_type', 'date_from', 'date_to']
