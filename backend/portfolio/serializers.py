from rest_framework import serializers

from backend.core.serializers import (
    SlugFromNameMixin, ImageListField, LinkListField, DocumentListField,
    StringListField, TextBlockField,
)
from backend.parties.models import Industry
from backend.parties.serializers import IndustrySummarySerializer
from .models import Project, Application

PROJECT_SPEC_KEYS = ('flow_rate', 'vacuum_level', 'power', 'quantity')
VACUUM_REQUIREMENT_KEYS = ('pressure_range', 'flow_rate', 'pumping_speed', 'ultimate_vacuum')
PROCESS_CONDITION_KEYS = ('temperature', 'duration')


class ProjectSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    slug_source_field = 'title'

    pump_types = serializers.ListField(
        child=serializers.ChoiceField(choices=Project.PUMP_TYPE_CHOICES), required=False,
    )
    images = ImageListField(required=False)
    pump_models = LinkListField(required=False)
    applications = LinkListField(required=False)
    specifications = TextBlockField(PROJECT_SPEC_KEYS)

    class Meta:
        model = Project
        fields = [
            'id', 'title', 'slug', 'description', 'client', 'industry', 'location',
            'completion_date', 'project_type', 'pump_types', 'images', 'pump_models',
            'applications', 'specifications', 'challenges', 'solutions', 'results',
            'featured', 'status', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_title(self, value):
        return value.strip()

    def validate_pump_types(self, value):
        # Keep first occurrence order
        return list(dict.fromkeys(value))


class ApplicationSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    """
    Application with its recommended industries.

    ``recommended_industries`` is written as a list of industry ids and
    ``recommended_industry_details`` echoes their names and slugs.
    """
    recommended_industries = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Industry.objects.all(), required=False,
    )
    recommended_industry_details = IndustrySummarySerializer(
        source='recommended_industries', many=True, read_only=True,
    )
    vacuum_requirements = TextBlockField(VACUUM_REQUIREMENT_KEYS)
    process_conditions = TextBlockField(PROCESS_CONDITION_KEYS)
    products = LinkListField(required=False)
    projects = LinkListField(required=False)
    benefits = StringListField(required=False)
    challenges = StringListField(required=False)
    images = ImageListField(required=False)
    download_documents = DocumentListField(required=False)
    keywords = StringListField(required=False)

    class Meta:
        model = Application
        fields = [
            'id', 'name', 'slug', 'description', 'category', 'vacuum_requirements',
            'process_conditions', 'recommended_industries', 'recommended_industry_details',
            'products', 'projects', 'benefits', 'challenges', 'images', 'download_documents',
            'keywords', 'is_active', 'featured', 'display_order', 'stats',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['stats', 'created_at', 'updated_at']

    def validate_name(self, value):
        return value.strip()

    def validate_keywords(self, value):
        return [keyword.lower() for keyword in value]
