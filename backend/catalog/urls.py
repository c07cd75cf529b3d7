from django.urls import path
from .views import (
    admin_brands, admin_pump_types, admin_sync_usage,
    admin_product_list_create, admin_product_detail, admin_product_primary_image,
    admin_move_product_line, admin_move_sub_pump_type,
    product_list, product_by_slug, brand_by_slug, pump_type_list,
)

urlpatterns = [
    # Admin endpoints
    path('admin/brands/', admin_brands, name='admin-brands'),
    path('admin/brands/<int:pk>/product-lines/move/', admin_move_product_line, name='admin-move-product-line'),
    path('admin/pump-types/', admin_pump_types, name='admin-pump-types'),
    path('admin/pump-types/<int:pk>/sub-pump-types/move/', admin_move_sub_pump_type, name='admin-move-sub-pump-type'),
    path('admin/sync-usage/', admin_sync_usage, name='admin-sync-usage'),
    path('admin/products/', admin_product_list_create, name='admin-product-list-create'),
    path('admin/products/<int:pk>/', admin_product_detail, name='admin-product-detail'),
    path('admin/products/<int:pk>/primary-image/', admin_product_primary_image, name='admin-product-primary-image'),

    # Public endpoints
    path('products/', product_list, name='product-list'),
    path('products/<slug:slug>/', product_by_slug, name='product-by-slug'),
    path('brands/<slug:slug>/', brand_by_slug, name='brand-by-slug'),
    path('pump-types/', pump_type_list, name='pump-type-list'),
]
