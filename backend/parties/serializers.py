from rest_framework import serializers

from backend.core.serializers import (
    SlugFromNameMixin, ImageListField, LinkListField, StringListField,
    WebsiteField, ImagePathField, validate_block,
)
from .models import Industry, BusinessType, Customer, Inquiry


class IndustryCharacteristicsSerializer(serializers.Serializer):
    typical_vacuum_requirements = StringListField(required=False)
    common_applications = StringListField(required=False)
    regulatory_requirements = StringListField(required=False)
    standard_certifications = StringListField(required=False)


class MarketInfoSerializer(serializers.Serializer):
    market_size = serializers.CharField(max_length=200, required=False, allow_blank=True)
    growth_rate = serializers.CharField(max_length=200, required=False, allow_blank=True)
    key_drivers = StringListField(required=False)
    challenges = StringListField(required=False)


class IndustrySerializer(SlugFromNameMixin, serializers.ModelSerializer):
    characteristics = serializers.JSONField(required=False)
    market_info = serializers.JSONField(required=False)
    keywords = StringListField(required=False)

    class Meta:
        model = Industry
        fields = [
            'id', 'name', 'slug', 'description', 'category', 'characteristics', 'market_info',
            'keywords', 'is_active', 'display_order', 'stats', 'created_at', 'updated_at',
        ]
        read_only_fields = ['stats', 'created_at', 'updated_at']

    def validate_name(self, value):
        return value.strip()

    def validate_characteristics(self, value):
        return validate_block(IndustryCharacteristicsSerializer, value)

    def validate_market_info(self, value):
        return validate_block(MarketInfoSerializer, value)

    def validate_keywords(self, value):
        return [keyword.lower() for keyword in value]


class IndustrySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Industry
        fields = ['id', 'name', 'slug']


class BusinessTypeSerializer(serializers.ModelSerializer):
    customer_count = serializers.SerializerMethodField()

    class Meta:
        model = BusinessType
        fields = ['id', 'name', 'customer_count', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def get_customer_count(self, obj):
        annotated = getattr(obj, 'annotated_customer_count', None)
        if annotated is not None:
            return annotated
        return obj.get_customer_count()

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Business type name is required')
        return value


class CustomerSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    """
    Customer with its business type and industries.

    ``industry`` is the writable list of industry ids; ``industry_details``
    and ``business_type_name`` are read-only conveniences for listings.
    """
    industry = serializers.PrimaryKeyRelatedField(
        source='industries', many=True, queryset=Industry.objects.all(), required=False,
    )
    industry_details = IndustrySummarySerializer(source='industries', many=True, read_only=True)
    business_type_name = serializers.CharField(source='business_type.name', read_only=True)
    website = WebsiteField()
    logo = ImagePathField()
    images = ImageListField(required=False)
    projects = LinkListField(required=False)
    pump_models_used = LinkListField(required=False)
    applications = LinkListField(required=False)

    class Meta:
        model = Customer
        fields = [
            'id', 'name', 'slug', 'legal_name', 'address', 'business_type', 'business_type_name',
            'industry', 'industry_details', 'website', 'logo', 'images', 'province', 'nationality',
            'description', 'projects', 'pump_models_used', 'applications', 'featured',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_name(self, value):
        return value.strip()


class InquirySerializer(serializers.ModelSerializer):
    class Meta:
        model = Inquiry
        fields = [
            'id', 'name', 'email', 'phone', 'company', 'subject', 'message',
            'inquiry_type', 'status', 'created_at', 'updated_at',
        ]
        read_only_fields = ['status', 'created_at', 'updated_at']
