"""
URL configuration for the vacuum catalog backend.

Every app mounts its public and admin endpoints under ``api/``; the Django
admin site is the management dashboard.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Vacuum Pump Catalog Admin Panel"
admin.site.site_title = "Vacuum Pump Catalog Admin Portal"
admin.site.index_title = "Catalog, customers and projects"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('backend.core.urls')),
    path('api/', include('backend.catalog.urls')),
    path('api/', include('backend.parties.urls')),
    path('api/', include('backend.portfolio.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
]
