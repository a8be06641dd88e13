from django.urls import path
from .views import customer_list_create, customer_detail, my_profile, employee_list_create, employee_detail

urlpatterns = [
    # Customer endpoints
    path('auth/me/profile/', my_profile, name='my-profile'),
    path('admin/customers/', customer_list_create, name='customer-list-create'),
    path('admin/customers/<int:user_id>/', customer_detail, name='customer-detail'),

    # Employee endpoints
    path('admin/employees/', employee_list_create, name='employee-list-create'),
    path('admin/employees/<int:pk>/', employee_detail, name='employee-detail'),
]
