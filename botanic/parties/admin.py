from django.contrib import admin
from .models import CustomerProfile, Employee


@admin.register(CustomerProfile)
class CustomerProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'first_name', 'last_name', 'phone', 'created_at']
    search_fields = ['user__email', 'first_name', 'last_name', 'phone']
    ordering = ['-created_at']


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_code', 'first_name', 'last_name', 'position', 'department', 'status', 'hire_date']
    list_filter = ['status', 'position', 'department']
    search_fields = ['employee_code', 'first_name', 'last_name', 'email', 'phone']
    ordering = ['-created_at']
