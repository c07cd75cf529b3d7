from django.db import models

from backend.core.validators import validate_slug, validate_single_primary
from backend.parties.models import Industry


class Project(models.Model):
    """Completed, ongoing or planned installation shown in the portfolio"""
    INDUSTRY_CHOICES = [
        ('pharmaceutical', 'Pharmaceutical'),
        ('semiconductor', 'Semiconductor'),
        ('food-processing', 'Food Processing'),
        ('chemical', 'Chemical'),
        ('automotive', 'Automotive'),
        ('aerospace', 'Aerospace'),
        ('oil-gas', 'Oil & Gas'),
        ('power-generation', 'Power Generation'),
        ('manufacturing', 'Manufacturing'),
        ('research', 'Research'),
        ('other', 'Other'),
    ]
    PROJECT_TYPE_CHOICES = [
        ('new-installation', 'New Installation'),
        ('system-upgrade', 'System Upgrade'),
        ('maintenance-contract', 'Maintenance Contract'),
        ('emergency-repair', 'Emergency Repair'),
        ('consultation', 'Consultation'),
        ('custom-solution', 'Custom Solution'),
    ]
    PUMP_TYPE_CHOICES = [
        ('rotary-vane', 'Rotary Vane'),
        ('scroll', 'Scroll'),
        ('diaphragm', 'Diaphragm'),
        ('turbomolecular', 'Turbomolecular'),
        ('liquid-ring', 'Liquid Ring'),
        ('roots-blower', 'Roots Blower'),
        ('claw-pump', 'Claw Pump'),
        ('other', 'Other'),
    ]
    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('ongoing', 'Ongoing'),
        ('planned', 'Planned'),
    ]

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True, validators=[validate_slug])
    description = models.TextField()
    client = models.CharField(max_length=100)
    industry = models.CharField(max_length=30, choices=INDUSTRY_CHOICES, db_index=True)
    location = models.CharField(max_length=100)
    completion_date = models.DateField()
    project_type = models.CharField(max_length=30, choices=PROJECT_TYPE_CHOICES)
    pump_types = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True, validators=[validate_single_primary])
    # [{name, url}] references
    pump_models = models.JSONField(default=list, blank=True)
    applications = models.JSONField(default=list, blank=True)
    # {flow_rate, vacuum_level, power, quantity}
    specifications = models.JSONField(default=dict, blank=True)
    challenges = models.TextField()
    solutions = models.TextField()
    results = models.TextField()
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='completed', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-featured', '-completion_date'], name='project_featured_idx'),
        ]


class Application(models.Model):
    """Vacuum application (freeze drying, degassing...) with recommended industries"""
    CATEGORY_CHOICES = [
        ('freeze-drying', 'Freeze Drying'),
        ('distillation', 'Distillation'),
        ('packaging', 'Packaging'),
        ('coating', 'Coating'),
        ('degassing', 'Degassing'),
        ('filtration', 'Filtration'),
        ('drying', 'Drying'),
        ('metallurgy', 'Metallurgy'),
        ('electronics', 'Electronics'),
        ('medical', 'Medical'),
        ('research', 'Research'),
        ('other', 'Other'),
    ]

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True, validators=[validate_slug])
    description = models.TextField()
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)
    # {pressure_range, flow_rate, pumping_speed, ultimate_vacuum}
    vacuum_requirements = models.JSONField(default=dict, blank=True)
    # {temperature, duration}
    process_conditions = models.JSONField(default=dict, blank=True)
    recommended_industries = models.ManyToManyField(Industry, blank=True, related_name='applications')
    products = models.JSONField(default=list, blank=True)
    projects = models.JSONField(default=list, blank=True)
    benefits = models.JSONField(default=list, blank=True)
    challenges = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True, validators=[validate_single_primary])
    download_documents = models.JSONField(default=list, blank=True)
    keywords = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    featured = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    # {view_count, inquiry_count, last_updated}
    stats = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'applications'
        ordering = ['-featured', 'display_order', 'name']
