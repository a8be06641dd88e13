from django.contrib import admin
from .models import Cost


@admin.register(Cost)
class CostAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'amount', 'frequency', 'date', 'is_recurring']
    list_filter = ['category', 'frequency', 'is_recurring']
    search_fields = ['name', 'description']
    ordering = ['-date']
