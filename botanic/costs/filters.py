import django_filters

from botanic.core.filters import AllAwareCharFilter
from .models import Cost


class CostFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    category = AllAwareCharFilter(field_name='category')
    frequency = AllAwareCharFilter(field_name='frequency')

    class Meta:
        model = Cost
        fields = ['start_date', 'end_date', 'category', 'frequency']
