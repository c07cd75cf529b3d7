import django_filters
from django.db.models import Q
from .models import Product


class ProductFilter(django_filters.FilterSet):
    """Filtering for product listings (public and admin)"""
    category = django_filters.ChoiceFilter(choices=Product.CATEGORY_CHOICES)
    brand = django_filters.NumberFilter(field_name='brand_id')
    brand_slug = django_filters.CharFilter(field_name='brand__slug')
    product_line = django_filters.NumberFilter(field_name='product_line_id')
    pump_type = django_filters.NumberFilter(field_name='pump_type_id')
    pump_type_slug = django_filters.CharFilter(field_name='pump_type__slug')
    sub_pump_type = django_filters.NumberFilter(field_name='sub_pump_type_id')
    in_stock = django_filters.BooleanFilter()
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Product
        fields = ['category', 'brand', 'product_line', 'pump_type', 'sub_pump_type', 'in_stock']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(description__icontains=value) |
            Q(brand__name__icontains=value)
        )
