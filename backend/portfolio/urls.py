from django.urls import path
from . import views

urlpatterns = [
    # Admin endpoints
    path('admin/projects/', views.admin_project_list_create, name='admin-project-list'),
    path('admin/projects/<int:pk>/', views.admin_project_detail, name='admin-project-detail'),
    path('admin/applications/', views.admin_application_list_create, name='admin-application-list'),
    path('admin/applications/<int:pk>/', views.admin_application_detail, name='admin-application-detail'),

    # Public endpoints
    path('projects/', views.project_list, name='project-list'),
    path('projects/<slug:slug>/', views.project_by_slug, name='project-detail'),
    path('applications/', views.application_list, name='application-list'),
    path('applications/<slug:slug>/', views.application_by_slug, name='application-detail'),
]
