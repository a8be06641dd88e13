from django.contrib import admin
from .models import ProductCategory, Product, NutrientCategory, Nutrient, ProductNutrient


class ProductNutrientInline(admin.TabularInline):
    model = ProductNutrient
    extra = 0
    autocomplete_fields = ['nutrient']


@admin.register(ProductCategory)
class ProductCategoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'display_order', 'is_active', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['id', 'name']
    ordering = ['display_order', 'name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'sku', 'category', 'price', 'in_stock', 'created_at']
    list_filter = ['category', 'in_stock', 'created_at']
    search_fields = ['name', 'sku', 'description']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductNutrientInline]


@admin.register(NutrientCategory)
class NutrientCategoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'name']
    search_fields = ['id', 'name']


@admin.register(Nutrient)
class NutrientAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'updated_at']
    list_filter = ['category']
    search_fields = ['name', 'description']
    ordering = ['name']
