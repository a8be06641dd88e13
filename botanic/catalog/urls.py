from django.urls import path
from .views import (
    shop_product_list, shop_product_detail, active_product_category_list,
    nutrient_category_list, nutrient_list, nutrient_with_categories_list, nutrient_picker,
    product_nutrient_list, admin_product_list_create, admin_product_detail,
    product_category_list_create, product_category_detail,
)

urlpatterns = [
    # Storefront
    path('shop/products/', shop_product_list, name='shop-product-list'),
    path('shop/products/<int:pk>/', shop_product_detail, name='shop-product-detail'),
    path('product-categories/active/', active_product_category_list, name='active-product-category-list'),
    path('nutrient-categories/', nutrient_category_list, name='nutrient-category-list'),
    path('nutrients/', nutrient_list, name='nutrient-list'),
    path('nutrients/with-categories/', nutrient_with_categories_list, name='nutrient-with-categories-list'),
    path('nutrients/picker/', nutrient_picker, name='nutrient-picker'),
    path('products/<int:pk>/nutrients/', product_nutrient_list, name='product-nutrient-list'),

    # Admin
    path('admin/products/', admin_product_list_create, name='admin-product-list-create'),
    path('admin/products/<int:pk>/', admin_product_detail, name='admin-product-detail'),
    path('product-categories/', product_category_list_create, name='product-category-list-create'),
    path('product-categories/<slug:pk>/', product_category_detail, name='product-category-detail'),
]
