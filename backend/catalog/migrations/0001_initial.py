import backend.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Brand',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('slug', models.SlugField(max_length=100, unique=True, validators=[backend.core.validators.validate_slug])),
                ('logo', models.CharField(blank=True, max_length=500, validators=[backend.core.validators.validate_image_path])),
                ('country', models.CharField(blank=True, max_length=100)),
                ('year_established', models.PositiveIntegerField(blank=True, null=True, validators=[backend.core.validators.validate_year_established])),
                ('revenue', models.CharField(blank=True, max_length=200)),
                ('description', models.TextField(blank=True)),
                ('product_usage', models.JSONField(blank=True, default=list)),
                ('product_line_usage', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'brands',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PumpType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('pump_type', models.CharField(max_length=100, unique=True)),
                ('slug', models.SlugField(max_length=100, unique=True, validators=[backend.core.validators.validate_slug])),
                ('description', models.TextField(blank=True)),
                ('image', models.CharField(blank=True, max_length=500, validators=[backend.core.validators.validate_image_path])),
                ('product_usage', models.JSONField(blank=True, default=list)),
                ('sub_pump_type_usage', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'pump_types',
                'ordering': ['pump_type'],
            },
        ),
        migrations.CreateModel(
            name='ProductLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('documents', models.JSONField(blank=True, default=list)),
                ('is_active', models.BooleanField(default=True)),
                ('display_order', models.IntegerField(default=0)),
                ('brand', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_lines', to='catalog.brand')),
            ],
            options={
                'db_table': 'product_lines',
                'ordering': ['display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='SubPumpType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('slug', models.SlugField(max_length=100, validators=[backend.core.validators.validate_slug])),
                ('image', models.CharField(blank=True, max_length=500, validators=[backend.core.validators.validate_image_path])),
                ('description', models.CharField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
                ('display_order', models.IntegerField(default=0)),
                ('pump_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sub_pump_types', to='catalog.pumptype')),
            ],
            options={
                'db_table': 'sub_pump_types',
                'ordering': ['display_order', 'id'],
                'unique_together': {('pump_type', 'slug')},
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('slug', models.SlugField(max_length=200, unique=True, validators=[backend.core.validators.validate_slug])),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('rotary-vane', 'Rotary Vane'), ('scroll', 'Scroll'), ('diaphragm', 'Diaphragm'), ('turbomolecular', 'Turbomolecular'), ('other', 'Other')], db_index=True, max_length=20)),
                ('specifications', models.JSONField(blank=True, default=dict)),
                ('features', models.JSONField(blank=True, default=list)),
                ('applications', models.JSONField(blank=True, default=list)),
                ('images', models.JSONField(blank=True, default=list, validators=[backend.core.validators.validate_single_primary])),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('in_stock', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('brand', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.brand')),
                ('product_line', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.productline')),
                ('pump_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.pumptype')),
                ('sub_pump_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.subpumptype')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['-created_at'],
            },
        ),
    ]
