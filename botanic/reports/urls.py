from django.urls import path
from .views import financial_analytics

urlpatterns = [
    path('admin/analytics/', financial_analytics, name='admin-analytics'),
]
