import django_filters
from django_filters.utils import translate_validation


class AllAwareCharFilter(django_filters.CharFilter):
    """Exact-match filter where 'all' (the admin screens' default option) means no filter"""

    def filter(self, qs, value):
        if value == 'all':
            return qs
        return super().filter(qs, value)


def filter_queryset(filterset):
    """
    Filtered queryset of a bound FilterSet

    Invalid parameters raise a DRF ValidationError (400), as DjangoFilterBackend does.
    """
    if not filterset.is_valid():
        raise translate_validation(filterset.errors)
    return filterset.qs
