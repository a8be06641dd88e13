from django.urls import path
from .views import cost_list_create, cost_detail

urlpatterns = [
    path('admin/costs/', cost_list_create, name='cost-list-create'),
    path('admin/costs/<int:pk>/', cost_detail, name='cost-detail'),
]
