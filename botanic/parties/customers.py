"""
Admin customer list: profiles joined with account email and order stats
"""
from decimal import Decimal

from django.db.models import Count, Max, Sum

from botanic.orders.models import Order
from .models import CustomerProfile


def email_or_placeholder(profile):
    """Account email, or the first 8 characters of the user id when the account has none"""
    email = profile.user.email if profile.user_id else ''
    return email or f"{str(profile.user_id)[:8]}..."


def order_stats_by_user():
    rows = Order.objects.filter(user__isnull=False).values('user_id').annotate(
        total_orders=Count('id'),
        total_spent=Sum('total'),
        last_order_date=Max('created_at'),
    ).order_by()
    return {row['user_id']: row for row in rows}


def build_customer_rows():
    """One dict per customer profile, newest profile first"""
    stats = order_stats_by_user()
    customers = []
    for profile in CustomerProfile.objects.select_related('user').order_by('-created_at', '-id'):
        user_stats = stats.get(profile.user_id, {})
        customers.append({
            'user_id': profile.user_id,
            'email': email_or_placeholder(profile),
            'first_name': profile.first_name,
            'last_name': profile.last_name,
            'phone': profile.phone,
            'created_at': profile.created_at,
            'total_orders': user_stats.get('total_orders', 0),
            'total_spent': float(user_stats.get('total_spent') or Decimal('0')),
            'last_order_date': user_stats.get('last_order_date'),
        })
    return customers


def search_customers(customers, query):
    """Case-insensitive match on email, first/last name or user id"""
    query = (query or '').strip().lower()
    if not query:
        return customers
    return [
        customer for customer in customers
        if query in customer['email'].lower()
        or query in (customer['first_name'] or '').lower()
        or query in (customer['last_name'] or '').lower()
        or query in str(customer['user_id']).lower()
    ]
