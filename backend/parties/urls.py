from django.urls import path
from .views import (
    industry_list_create, industry_detail, industry_customers, admin_industry_options,
    admin_business_types, business_type_list,
    admin_customer_list_create, admin_customer_detail, customer_list, customer_by_slug,
    contact,
)

urlpatterns = [
    # Industry endpoints
    path('industries/', industry_list_create, name='industry-list-create'),
    path('industries/<int:pk>/', industry_detail, name='industry-detail'),
    path('industries/<int:pk>/customers/', industry_customers, name='industry-customers'),
    path('admin/industries/', admin_industry_options, name='admin-industry-options'),

    # Business type endpoints
    path('admin/business-types/', admin_business_types, name='admin-business-types'),
    path('business-types/', business_type_list, name='business-type-list'),

    # Customer endpoints
    path('admin/customers/', admin_customer_list_create, name='admin-customer-list-create'),
    path('admin/customers/<int:pk>/', admin_customer_detail, name='admin-customer-detail'),
    path('customers/', customer_list, name='customer-list'),
    path('customers/<slug:slug>/', customer_by_slug, name='customer-by-slug'),

    # Contact form
    path('contact/', contact, name='contact'),
]
