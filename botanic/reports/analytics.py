"""
Financial analytics: revenue from orders against operating costs

Revenue counts every non-cancelled order created in the period; costs count
every cost dated in the period. Growth compares against the previous period
of the same length.
"""
import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.db import DatabaseError
from django.utils import timezone

from botanic.core.cache_utils import cached_query, ANALYTICS_CACHE_TTL
from botanic.costs.models import Cost
from botanic.orders.models import Order

logger = logging.getLogger(__name__)

PERIOD_DAYS = {
    'last_24h': 1,
    'last_7d': 7,
    'last_30d': 30,
    'last_90d': 90,
    'last_year': 365,
}
PERIODS = tuple(PERIOD_DAYS) + ('all', 'custom')
ALL_TIME_START = date(2020, 1, 1)
CUSTOM_DEFAULT_DAYS = 30
DAILY_WINDOW_DAYS = 30


def resolve_period(period, start_date=None, end_date=None, today=None):
    """
    Turn a period name into an inclusive (start, end) date range.

    Args:
        period: one of PERIODS ('all' when empty)
        start_date, end_date: only used by 'custom'
        today: reference date (defaults to the local date)
    """
    today = today or timezone.localdate()
    period = period or 'all'
    if period in PERIOD_DAYS:
        return today - timedelta(days=PERIOD_DAYS[period]), today
    if period == 'custom':
        return (start_date or today - timedelta(days=CUSTOM_DEFAULT_DAYS)), (end_date or today)
    if period == 'all':
        return ALL_TIME_START, today
    raise ValueError(f"Unknown period: {period}")


def start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def end_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.max))


def _fetch(label, queryset):
    """Materialize a queryset; a failing source is logged and treated as empty"""
    try:
        return list(queryset)
    except DatabaseError as e:
        logger.error(f"Error fetching {label} for analytics: {e}")
        return []


def _revenue(orders):
    return sum((order['total'] for order in orders if order['status'] != 'cancelled'), Decimal('0'))


def _growth(current, previous):
    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


def build_financial_analytics(start, end):
    """Compute the analytics payload for an inclusive date range"""
    range_start, range_end = start_of_day(start), end_of_day(end)

    orders = _fetch('orders', Order.objects.filter(
        created_at__gte=range_start, created_at__lte=range_end
    ).values('total', 'created_at', 'status').order_by('created_at'))
    costs = _fetch('costs', Cost.objects.filter(
        date__gte=start, date__lte=end
    ).values('amount', 'date', 'category').order_by('date'))

    paid_orders = [order for order in orders if order['status'] != 'cancelled']
    total_revenue = _revenue(orders)
    total_costs = sum((cost['amount'] for cost in costs), Decimal('0'))
    net_profit = total_revenue - total_costs
    profit_margin = float(net_profit / total_revenue * 100) if total_revenue > 0 else 0.0

    # Monthly breakdown over the union of revenue and cost months
    revenue_by_month, costs_by_month = {}, {}
    for order in paid_orders:
        month = timezone.localtime(order['created_at']).strftime('%Y-%m')
        revenue_by_month[month] = revenue_by_month.get(month, Decimal('0')) + order['total']
    for cost in costs:
        month = cost['date'].strftime('%Y-%m')
        costs_by_month[month] = costs_by_month.get(month, Decimal('0')) + cost['amount']
    monthly = []
    for month in sorted(set(revenue_by_month) | set(costs_by_month)):
        revenue = revenue_by_month.get(month, Decimal('0'))
        spent = costs_by_month.get(month, Decimal('0'))
        monthly.append({'month': month, 'revenue': float(revenue), 'costs': float(spent),
                        'profit': float(revenue - spent)})

    # Daily breakdown for the last DAILY_WINDOW_DAYS days of the range
    daily_start = end - timedelta(days=DAILY_WINDOW_DAYS)
    revenue_by_day, costs_by_day = {}, {}
    for order in paid_orders:
        day = timezone.localtime(order['created_at']).date()
        if day >= daily_start:
            revenue_by_day[day] = revenue_by_day.get(day, Decimal('0')) + order['total']
    for cost in costs:
        if cost['date'] >= daily_start:
            costs_by_day[cost['date']] = costs_by_day.get(cost['date'], Decimal('0')) + cost['amount']
    daily = []
    for offset in range(DAILY_WINDOW_DAYS + 1):
        day = daily_start + timedelta(days=offset)
        revenue = revenue_by_day.get(day, Decimal('0'))
        spent = costs_by_day.get(day, Decimal('0'))
        daily.append({'date': day.isoformat(), 'revenue': float(revenue), 'costs': float(spent),
                      'profit': float(revenue - spent)})

    # Cost breakdown by category, largest first
    by_category = {}
    for cost in costs:
        by_category[cost['category']] = by_category.get(cost['category'], Decimal('0')) + cost['amount']
    percentage_base = total_costs or Decimal('1')
    cost_by_category = sorted(
        ({'category': category, 'amount': float(amount), 'percentage': float(amount / percentage_base * 100)}
         for category, amount in by_category.items()),
        key=lambda row: row['amount'],
        reverse=True,
    )

    # Previous period of the same length
    period_days = (end - start).days
    previous_start = start - timedelta(days=period_days)
    previous_orders = _fetch('previous orders', Order.objects.filter(
        created_at__gte=start_of_day(previous_start), created_at__lt=range_start
    ).values('total', 'status'))
    previous_costs = _fetch('previous costs', Cost.objects.filter(
        date__gte=previous_start, date__lt=start
    ).values('amount'))
    previous_revenue = _revenue(previous_orders)
    previous_costs_total = sum((cost['amount'] for cost in previous_costs), Decimal('0'))

    return {
        'period': {'start': start.isoformat(), 'end': end.isoformat()},
        'totalRevenue': float(total_revenue),
        'totalCosts': float(total_costs),
        'netProfit': float(net_profit),
        'profitMargin': profit_margin,
        'revenueByMonth': monthly,
        'dailyAnalytics': daily,
        'costByCategory': cost_by_category,
        'revenueGrowth': _growth(total_revenue, previous_revenue),
        'costGrowth': _growth(total_costs, previous_costs_total),
    }


@cached_query('admin-analytics', cache_ttl=ANALYTICS_CACHE_TTL)
def get_financial_analytics(period, start_date=None, end_date=None, today=None):
    start, end = resolve_period(period, start_date, end_date, today)
    return build_financial_analytics(start, end)
