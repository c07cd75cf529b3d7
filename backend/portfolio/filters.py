import django_filters
from django.db.models import Q

from .models import Project, Application


class ProjectFilter(django_filters.FilterSet):
    industry = django_filters.ChoiceFilter(choices=Project.INDUSTRY_CHOICES)
    project_type = django_filters.ChoiceFilter(choices=Project.PROJECT_TYPE_CHOICES)
    status = django_filters.ChoiceFilter(choices=Project.STATUS_CHOICES)
    featured = django_filters.BooleanFilter()
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Project
        fields = ['industry', 'project_type', 'status', 'featured']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(title__icontains=value) | Q(client__icontains=value) | Q(location__icontains=value)
        )


class ApplicationFilter(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=Application.CATEGORY_CHOICES)
    industry = django_filters.NumberFilter(field_name='recommended_industries')
    featured = django_filters.BooleanFilter()
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Application
        fields = ['category', 'featured']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
