import django_filters
from django.db.models import Q

from .models import Product, Nutrient


class ShopProductFilter(django_filters.FilterSet):
    """Storefront product filters"""

    category = django_filters.CharFilter(method='filter_category', label='Category')
    search = django_filters.CharFilter(method='filter_search', label='Search')
    min_price = django_filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name='price', lookup_expr='lte')
    nutrient = django_filters.NumberFilter(method='filter_nutrient', label='Nutrient ID')

    class Meta:
        model = Product
        fields = ['category', 'search', 'min_price', 'max_price', 'nutrient']

    def filter_category(self, queryset, name, value):
        # 'all' is the storefront's "no category" option
        if not value or value == 'all':
            return queryset
        return queryset.filter(category=value)

    def filter_search(self, queryset, name, value):
        """Case-insensitive match on name or description"""
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_nutrient(self, queryset, name, value):
        """Products linked to the nutrient (none when nothing is linked)"""
        if value is None:
            return queryset
        return queryset.filter(product_nutrients__nutrient_id=value).distinct()


class NutrientFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name='category_id', lookup_expr='exact')

    class Meta:
        model = Nutrient
        fields = ['category']
