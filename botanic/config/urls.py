"""
URL configuration for the Botanic Care API.

Every app mounts its routes under /api/v1/.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "Botanic Care Admin Panel"
admin.site.site_title = "Botanic Care Admin Portal"
admin.site.index_title = "Bienvenido al panel de Botanic Care"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('botanic.core.urls')),
    path('api/v1/', include('botanic.catalog.urls')),
    path('api/v1/', include('botanic.parties.urls')),
    path('api/v1/', include('botanic.orders.urls')),
    path('api/v1/', include('botanic.inventory.urls')),
    path('api/v1/', include('botanic.costs.urls')),
    path('api/v1/', include('botanic.reports.urls')),
]
