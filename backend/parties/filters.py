import django_filters
from django.db.models import Q
from .models import Customer, Industry


class CustomerFilter(django_filters.FilterSet):
    """Filtering for customer listings"""
    business_type = django_filters.NumberFilter(field_name='business_type_id')
    industry = django_filters.NumberFilter(field_name='industries__id', distinct=True)
    nationality = django_filters.ChoiceFilter(choices=Customer.NATIONALITY_CHOICES)
    province = django_filters.ChoiceFilter(choices=Customer.PROVINCE_CHOICES)
    featured = django_filters.BooleanFilter()
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Customer
        fields = ['business_type', 'industry', 'nationality', 'province', 'featured']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(legal_name__icontains=value) |
            Q(description__icontains=value)
        )


class IndustryFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(method='filter_category')
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = Industry
        fields = ['category', 'is_active']

    def filter_category(self, queryset, name, value):
        # "all" is what the site's category picker sends for no filter
        if not value or value == 'all':
            return queryset
        return queryset.filter(category=value)
