from datetime import datetime

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from botanic.core.permissions import IsStoreAdmin
from .analytics import PERIODS, get_financial_analytics


def _parse_date(value):
    return datetime.strptime(value, '%Y-%m-%d').date() if value else None


@api_view(['GET'])
@permission_classes([IsStoreAdmin])
def financial_analytics(request):
    """
    Revenue, costs and profit for a period

    Query params:
        period: last_24h | last_7d | last_30d | last_90d | last_year | all | custom (default all)
        start_date, end_date: YYYY-MM-DD, for period=custom
    """
    period = request.query_params.get('period') or 'all'
    if period not in PERIODS:
        return Response({'error': f"Período no válido: {period}"}, status=status.HTTP_400_BAD_REQUEST)

    try:
        start_date = _parse_date(request.query_params.get('start_date'))
        end_date = _parse_date(request.query_params.get('end_date'))
    except ValueError:
        return Response({'error': 'Las fechas deben tener el formato YYYY-MM-DD'},
                        status=status.HTTP_400_BAD_REQUEST)

    if period == 'custom' and start_date and end_date and start_date > end_date:
        return Response({'error': 'La fecha inicial no puede ser posterior a la final'},
                        status=status.HTTP_400_BAD_REQUEST)

    if period != 'custom':
        start_date = end_date = None

    return Response(get_financial_analytics(period, start_date, end_date, timezone.localdate()))
