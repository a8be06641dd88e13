"""
Test suite for the reports module
Tests: period resolution, financial analytics and the analytics endpoint
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.core.cache import cache
from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .analytics import ALL_TIME_START, build_financial_analytics, resolve_period


def at_noon(day):
    return timezone.make_aware(datetime.combine(day, time(12, 0)))


class ResolvePeriodTests(SimpleTestCase):
    """Test period names resolved to date ranges"""

    today = date(2024, 6, 30)

    def test_fixed_periods(self):
        self.assertEqual(resolve_period('last_24h', today=self.today), (date(2024, 6, 29), self.today))
        self.assertEqual(resolve_period('last_7d', today=self.today), (date(2024, 6, 23), self.today))
        self.assertEqual(resolve_period('last_30d', today=self.today), (date(2024, 5, 31), self.today))
        self.assertEqual(resolve_period('last_year', today=self.today), (date(2023, 7, 1), self.today))

    def test_all_and_missing_period(self):
        self.assertEqual(resolve_period('all', today=self.today), (ALL_TIME_START, self.today))
        self.assertEqual(resolve_period(None, today=self.today), (ALL_TIME_START, self.today))

    def test_custom(self):
        self.assertEqual(resolve_period('custom', date(2024, 1, 1), date(2024, 1, 31), today=self.today),
                         (date(2024, 1, 1), date(2024, 1, 31)))
        self.assertEqual(resolve_period('custom', today=self.today), (date(2024, 5, 31), self.today))

    def test_unknown_period(self):
        with self.assertRaises(ValueError):
            resolve_period('last_decade', today=self.today)


class FinancialAnalyticsTests(TestCase):
    """Test the analytics computation"""

    def test_totals_exclude_cancelled_orders(self):
        TestDataFactory.create_order(total=Decimal('300.00'), created_at=at_noon(date(2024, 6, 10)))
        TestDataFactory.create_order(total=Decimal('200.00'), created_at=at_noon(date(2024, 5, 20)))
        TestDataFactory.create_order(total=Decimal('999.00'), status='cancelled',
                                     created_at=at_noon(date(2024, 6, 11)))
        TestDataFactory.create_cost(amount=Decimal('100.00'), category='alquiler', date=date(2024, 6, 1))
        TestDataFactory.create_cost(amount=Decimal('25.00'), category='marketing', date=date(2024, 5, 5))

        result = build_financial_analytics(date(2024, 5, 1), date(2024, 6, 30))

        self.assertEqual(result['period'], {'start': '2024-05-01', 'end': '2024-06-30'})
        self.assertEqual(result['totalRevenue'], 500.0)
        self.assertEqual(result['totalCosts'], 125.0)
        self.assertEqual(result['netProfit'], 375.0)
        self.assertEqual(result['profitMargin'], 75.0)
        self.assertEqual(result['revenueByMonth'], [
            {'month': '2024-05', 'revenue': 200.0, 'costs': 25.0, 'profit': 175.0},
            {'month': '2024-06', 'revenue': 300.0, 'costs': 100.0, 'profit': 200.0},
        ])

    def test_cost_by_category_sorted(self):
        TestDataFactory.create_cost(amount=Decimal('30.00'), category='marketing', date=date(2024, 6, 2))
        TestDataFactory.create_cost(amount=Decimal('60.00'), category='sueldo', date=date(2024, 6, 3))
        TestDataFactory.create_cost(amount=Decimal('10.00'), category='marketing', date=date(2024, 6, 4))

        result = build_financial_analytics(date(2024, 6, 1), date(2024, 6, 30))
        self.assertEqual(result['costByCategory'], [
            {'category': 'sueldo', 'amount': 60.0, 'percentage': 60.0},
            {'category': 'marketing', 'amount': 40.0, 'percentage': 40.0},
        ])
        self.assertEqual(result['profitMargin'], 0.0)

    def test_daily_window(self):
        TestDataFactory.create_order(total=Decimal('80.00'), created_at=at_noon(date(2024, 6, 28)))
        TestDataFactory.create_cost(amount=Decimal('15.00'), date=date(2024, 6, 28))

        result = build_financial_analytics(date(2024, 1, 1), date(2024, 6, 30))
        daily = result['dailyAnalytics']
        self.assertEqual(len(daily), 31)
        self.assertEqual(daily[0]['date'], '2024-05-31')
        self.assertEqual(daily[-1]['date'], '2024-06-30')
        day = next(d for d in daily if d['date'] == '2024-06-28')
        self.assertEqual(day, {'date': '2024-06-28', 'revenue': 80.0, 'costs': 15.0, 'profit': 65.0})

    def test_growth_against_previous_period(self):
        # Current period: June 11-20; previous: June 1-10
        TestDataFactory.create_order(total=Decimal('100.00'), created_at=at_noon(date(2024, 6, 5)))
        TestDataFactory.create_order(total=Decimal('150.00'), created_at=at_noon(date(2024, 6, 15)))
        TestDataFactory.create_cost(amount=Decimal('40.00'), date=date(2024, 6, 3))
        TestDataFactory.create_cost(amount=Decimal('20.00'), date=date(2024, 6, 12))

        result = build_financial_analytics(date(2024, 6, 11), date(2024, 6, 21))
        self.assertEqual(result['revenueGrowth'], 50.0)
        self.assertEqual(result['costGrowth'], -50.0)

    def test_no_previous_data_means_zero_growth(self):
        TestDataFactory.create_order(total=Decimal('150.00'), created_at=at_noon(date(2024, 6, 15)))
        result = build_financial_analytics(date(2024, 6, 11), date(2024, 6, 21))
        self.assertEqual(result['revenueGrowth'], 0.0)
        self.assertEqual(result['costGrowth'], 0.0)


class FinancialAnalyticsAPITests(TestCase):
    """Test the analytics endpoint"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def test_default_period_is_all_time(self):
        response = self.client.get('/api/v1/admin/analytics/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period']['start'], ALL_TIME_START.isoformat())
        self.assertEqual(response.data['period']['end'], timezone.localdate().isoformat())

    def test_fixed_period(self):
        TestDataFactory.create_order(total=Decimal('120.00'), created_at=timezone.now() - timedelta(days=3))
        TestDataFactory.create_order(total=Decimal('500.00'), created_at=timezone.now() - timedelta(days=20))
        response = self.client.get('/api/v1/admin/analytics/', {'period': 'last_7d'})
        self.assertEqual(response.data['totalRevenue'], 120.0)

    def test_custom_period(self):
        TestDataFactory.create_cost(amount=Decimal('75.00'), date=date(2024, 3, 15))
        response = self.client.get('/api/v1/admin/analytics/',
                                   {'period': 'custom', 'start_date': '2024-03-01', 'end_date': '2024-03-31'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period'], {'start': '2024-03-01', 'end': '2024-03-31'})
        self.assertEqual(response.data['totalCosts'], 75.0)

    def test_dates_ignored_for_fixed_periods(self):
        response = self.client.get('/api/v1/admin/analytics/',
                                   {'period': 'last_30d', 'start_date': '2024-03-01', 'end_date': '2024-03-31'})
        self.assertEqual(response.data['period']['end'], timezone.localdate().isoformat())

    def test_invalid_requests(self):
        response = self.client.get('/api/v1/admin/analytics/', {'period': 'last_decade'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get('/api/v1/admin/analytics/', {'period': 'custom', 'start_date': '03/01/2024'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get('/api/v1/admin/analytics/',
                                   {'period': 'custom', 'start_date': '2024-04-01', 'end_date': '2024-03-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_new_cost_invalidates_cached_analytics(self):
        response = self.client.get('/api/v1/admin/analytics/', {'period': 'last_30d'})
        self.assertEqual(response.data['totalCosts'], 0.0)
        TestDataFactory.create_cost(amount=Decimal('40.00'))
        response = self.client.get('/api/v1/admin/analytics/', {'period': 'last_30d'})
        self.assertEqual(response.data['totalCosts'], 40.0)
