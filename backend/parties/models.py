from django.db import models
from django.utils import timezone

from backend.core.validators import (
    validate_slug, validate_image_path, validate_website, validate_single_primary,
)


class Industry(models.Model):
    """Industry segment that customers and applications are grouped under"""
    CATEGORY_CHOICES = [
        ('manufacturing', 'Manufacturing'),
        ('processing', 'Processing'),
        ('research', 'Research'),
        ('energy', 'Energy'),
        ('healthcare', 'Healthcare'),
        ('technology', 'Technology'),
        ('other', 'Other'),
    ]

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True, validators=[validate_slug])
    description = models.TextField(max_length=1000, blank=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='other', db_index=True)
    # {typical_vacuum_requirements, common_applications, regulatory_requirements, standard_certifications}
    characteristics = models.JSONField(default=dict, blank=True)
    # {market_size, growth_rate, key_drivers, challenges}
    market_info = models.JSONField(default=dict, blank=True)
    keywords = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.IntegerField(default=0, db_index=True)
    # Cached counts: {customer_count, application_count, last_updated}
    stats = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def get_customers(self):
        return self.customers.select_related('business_type').order_by('-featured', 'name')

    def get_customer_count(self):
        return self.customers.count()

    def _update_stats(self, **values):
        stats = dict(self.stats or {})
        stats.update(values)
        stats['last_updated'] = timezone.now().isoformat()
        self.stats = stats
        self.save(update_fields=['stats', 'updated_at'])
        return self

    def update_customer_count(self):
        return self._update_stats(customer_count=self.get_customer_count())

    def update_application_count(self):
        return self._update_stats(application_count=self.applications.count())

    class Meta:
        db_table = 'industries'
        verbose_name_plural = 'industries'
        ordering = ['display_order', 'name']


class BusinessType(models.Model):
    """Customer business type (machine builder, factory...)"""
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def get_customers(self):
        return self.customers.order_by('name')

    def get_customer_count(self):
        return self.customers.count()

    class Meta:
        db_table = 'business_types'
        ordering = ['name']


class Customer(models.Model):
    """Reference customer shown on the site"""
    PROVINCE_CHOICES = [(p, p) for p in [
        'TP Ho Chi Minh', 'TP Hà Nội', 'TP Đà Nẵng', 'TP Huế', 'Quảng Ninh', 'Cao Bằng',
        'Lạng Sơn', 'Lai Châu', 'Điện Biên', 'Sơn La', 'Thanh Hóa', 'Nghệ An', 'Hà Tĩnh',
        'Tuyên Quang', 'Lào Cai', 'Thái Nguyên', 'Phú Thọ', 'Bắc Ninh', 'Hưng Yên',
        'TP Hải Phòng', 'Ninh Bình', 'Quảng Trị', 'Quảng Ngãi', 'Gia Lai', 'Khánh Hòa',
        'Lâm Đồng', 'Đắk Lắk', 'Đồng Nai', 'Tây Ninh', 'TP Cần Thơ', 'Vĩnh Long',
        'Đồng Tháp', 'Cà Mau', 'An Giang',
    ]]
    NATIONALITY_CHOICES = [(n, n) for n in [
        'Việt Nam', 'Nhật Bản', 'Hàn Quốc', 'Trung Quốc', 'Đài Loan', 'Mỹ', 'EU', 'Thái Lan', 'Other',
    ]]

    name = models.CharField(max_length=200, db_index=True)
    slug = models.SlugField(max_length=100, unique=True, validators=[validate_slug])
    legal_name = models.CharField(max_length=300, blank=True)
    address = models.CharField(max_length=500, blank=True)
    business_type = models.ForeignKey(BusinessType, on_delete=models.PROTECT, related_name='customers')
    industries = models.ManyToManyField(Industry, blank=True, related_name='customers')
    website = models.CharField(max_length=200, blank=True, validators=[validate_website])
    logo = models.CharField(max_length=500, blank=True, validators=[validate_image_path])
    images = models.JSONField(default=list, blank=True, validators=[validate_single_primary])
    province = models.CharField(max_length=50, choices=PROVINCE_CHOICES, default='TP Ho Chi Minh', blank=True)
    nationality = models.CharField(max_length=50, choices=NATIONALITY_CHOICES, default='Việt Nam')
    description = models.TextField(max_length=50000, blank=True)
    # [{name, url}] references
    projects = models.JSONField(default=list, blank=True)
    pump_models_used = models.JSONField(default=list, blank=True)
    applications = models.JSONField(default=list, blank=True)
    featured = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'customers'
        ordering = ['-created_at']


class Inquiry(models.Model):
    """Contact form submission"""
    INQUIRY_TYPE_CHOICES = [
        ('quote', 'Quote'),
        ('support', 'Support'),
        ('general', 'General'),
        ('product-info', 'Product Info'),
    ]
    STATUS_CHOICES = [
        ('new', 'New'),
        ('in-progress', 'In Progress'),
        ('resolved', 'Resolved'),
        ('closed', 'Closed'),
    ]

    name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    company = models.CharField(max_length=200, blank=True)
    subject = models.CharField(max_length=200, blank=True)
    message = models.TextField()
    inquiry_type = models.CharField(max_length=20, choices=INQUIRY_TYPE_CHOICES, default='general')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='new', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} <{self.email}>"

    class Meta:
        db_table = 'inquiries'
        verbose_name_plural = 'inquiries'
        ordering = ['-created_at']
