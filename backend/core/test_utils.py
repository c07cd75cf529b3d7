"""
Test utilities and factories for creating test data
"""
from datetime import date
from backend.catalog.models import Brand, ProductLine, PumpType, SubPumpType, Product
from backend.parties.models import Industry, BusinessType, Customer
from backend.portfolio.models import Project, Application
from backend.core.utils import generate_slug
import random
import string


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random lowercase string usable inside slugs"""
        return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))

    @staticmethod
    def create_brand(name=None, slug=None, product_lines=None, **extra):
        """Create a test brand, optionally with product lines given by name"""
        if not name:
            name = f'Brand {TestDataFactory.random_string(6)}'
        brand = Brand.objects.create(
            name=name,
            slug=slug or generate_slug(name),
            country=extra.pop('country', 'Germany'),
            description=extra.pop('description', f'Test brand {name}'),
            **extra
        )
        for position, line_name in enumerate(product_lines or []):
            ProductLine.objects.create(brand=brand, name=line_name, display_order=position)
        return brand

    @staticmethod
    def create_pump_type(pump_type=None, slug=None, sub_pump_types=None, **extra):
        """Create a test pump type, optionally with sub pump types given by name"""
        if not pump_type:
            pump_type = f'Pump Type {TestDataFactory.random_string(6)}'
        instance = PumpType.objects.create(
            pump_type=pump_type,
            slug=slug or generate_slug(pump_type),
            description=extra.pop('description', f'Test pump type {pump_type}'),
            **extra
        )
        for position, sub_name in enumerate(sub_pump_types or []):
            SubPumpType.objects.create(
                pump_type=instance,
                name=sub_name,
                slug=generate_slug(sub_name),
                display_order=position,
            )
        return instance

    @staticmethod
    def create_product(name=None, slug=None, category='rotary-vane', brand=None, product_line=None,
                       pump_type=None, sub_pump_type=None, **extra):
        """Create a test product; the brand/pump type follow the line/sub type when given"""
        if not name:
            name = f'Product {TestDataFactory.random_string(6)}'
        if product_line is not None and brand is None:
            brand = product_line.brand
        if sub_pump_type is not None and pump_type is None:
            pump_type = sub_pump_type.pump_type
        return Product.objects.create(
            name=name,
            slug=slug or generate_slug(name),
            description=extra.pop('description', f'Test product {name}'),
            category=category,
            brand=brand,
            product_line=product_line,
            pump_type=pump_type,
            sub_pump_type=sub_pump_type,
            **extra
        )

    @staticmethod
    def create_industry(name=None, slug=None, category='manufacturing', **extra):
        """Create a test industry"""
        if not name:
            name = f'Industry {TestDataFactory.random_string(6)}'
        return Industry.objects.create(
            name=name,
            slug=slug or generate_slug(name),
            category=category,
            description=extra.pop('description', f'Test industry {name}'),
            **extra
        )

    @staticmethod
    def create_business_type(name=None):
        """Create a test business type"""
        if not name:
            name = f'Business Type {TestDataFactory.random_string(6)}'
        return BusinessType.objects.create(name=name)

    @staticmethod
    def create_customer(name=None, slug=None, business_type=None, industries=None, **extra):
        """Create a test customer"""
        if not name:
            name = f'Customer {TestDataFactory.random_string(6)}'
        if not business_type:
            business_type = TestDataFactory.create_business_type()
        customer = Customer.objects.create(
            name=name,
            slug=slug or generate_slug(name),
            business_type=business_type,
            **extra
        )
        if industries:
            customer.industries.set(industries)
        return customer

    @staticmethod
    def create_project(title=None, slug=None, status='completed', **extra):
        """Create a test project"""
        if not title:
            title = f'Project {TestDataFactory.random_string(6)}'
        defaults = {
            'description': f'Test project {title}',
            'client': 'Test Client',
            'industry': 'pharmaceutical',
            'location': 'Ho Chi Minh City',
            'completion_date': date(2023, 6, 15),
            'project_type': 'new-installation',
            'challenges': 'Unstable vacuum levels',
            'solutions': 'Replaced the pump set',
            'results': 'Stable process',
        }
        defaults.update(extra)
        return Project.objects.create(
            title=title,
            slug=slug or generate_slug(title),
            status=status,
            **defaults
        )

    @staticmethod
    def create_application(name=None, slug=None, category='freeze-drying', industries=None, **extra):
        """Create a test application"""
        if not name:
            name = f'Application {TestDataFactory.random_string(6)}'
        application = Application.objects.create(
            name=name,
            slug=slug or generate_slug(name),
            description=extra.pop('description', f'Test application {name}'),
            category=category,
            **extra
        )
        if industries:
            application.recommended_industries.set(industries)
        return application
