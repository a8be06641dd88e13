import django_filters
from django.db.models import Q

from botanic.core.filters import AllAwareCharFilter
from .models import Employee


class EmployeeFilter(django_filters.FilterSet):
    status = AllAwareCharFilter(field_name='status')
    position = AllAwareCharFilter(field_name='position')
    department = AllAwareCharFilter(field_name='department')
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Employee
        fields = ['status', 'position', 'department', 'search']

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(first_name__icontains=value) |
            Q(last_name__icontains=value) |
            Q(email__icontains=value) |
            Q(employee_code__icontains=value) |
            Q(phone__icontains=value) |
            Q(position__icontains=value)
        )
