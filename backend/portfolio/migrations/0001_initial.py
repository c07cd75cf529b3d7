import backend.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('parties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('slug', models.SlugField(max_length=200, unique=True, validators=[backend.core.validators.validate_slug])),
                ('description', models.TextField()),
                ('client', models.CharField(max_length=100)),
                ('industry', models.CharField(choices=[('pharmaceutical', 'Pharmaceutical'), ('semiconductor', 'Semiconductor'), ('food-processing', 'Food Processing'), ('chemical', 'Chemical'), ('automotive', 'Automotive'), ('aerospace', 'Aerospace'), ('oil-gas', 'Oil & Gas'), ('power-generation', 'Power Generation'), ('manufacturing', 'Manufacturing'), ('research', 'Research'), ('other', 'Other')], db_index=True, max_length=30)),
                ('location', models.CharField(max_length=100)),
                ('completion_date', models.DateField()),
                ('project_type', models.CharField(choices=[('new-installation', 'New Installation'), ('system-upgrade', 'System Upgrade'), ('maintenance-contract', 'Maintenance Contract'), ('emergency-repair', 'Emergency Repair'), ('consultation', 'Consultation'), ('custom-solution', 'Custom Solution')], max_length=30)),
                ('pump_types', models.JSONField(blank=True, default=list)),
                ('images', models.JSONField(blank=True, default=list, validators=[backend.core.validators.validate_single_primary])),
                ('pump_models', models.JSONField(blank=True, default=list)),
                ('applications', models.JSONField(blank=True, default=list)),
                ('specifications', models.JSONField(blank=True, default=dict)),
                ('challenges', models.TextField()),
                ('solutions', models.TextField()),
                ('results', models.TextField()),
                ('featured', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('completed', 'Completed'), ('ongoing', 'Ongoing'), ('planned', 'Planned')], db_index=True, default='completed', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'projects',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['-featured', '-completion_date'], name='project_featured_idx')],
            },
        ),
        migrations.CreateModel(
            name='Application',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(max_length=100, unique=True, validators=[backend.core.validators.validate_slug])),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('freeze-drying', 'Freeze Drying'), ('distillation', 'Distillation'), ('packaging', 'Packaging'), ('coating', 'Coating'), ('degassing', 'Degassing'), ('filtration', 'Filtration'), ('drying', 'Drying'), ('metallurgy', 'Metallurgy'), ('electronics', 'Electronics'), ('medical', 'Medical'), ('research', 'Research'), ('other', 'Other')], db_index=True, max_length=20)),
                ('vacuum_requirements', models.JSONField(blank=True, default=dict)),
                ('process_conditions', models.JSONField(blank=True, default=dict)),
                ('products', models.JSONField(blank=True, default=list)),
                ('projects', models.JSONField(blank=True, default=list)),
                ('benefits', models.JSONField(blank=True, default=list)),
                ('challenges', models.JSONField(blank=True, default=list)),
                ('images', models.JSONField(blank=True, default=list, validators=[backend.core.validators.validate_single_primary])),
                ('download_documents', models.JSONField(blank=True, default=list)),
                ('keywords', models.JSONField(blank=True, default=list)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('featured', models.BooleanField(default=False)),
                ('display_order', models.IntegerField(default=0)),
                ('stats', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('recommended_industries', models.ManyToManyField(blank=True, related_name='applications', to='parties.industry')),
            ],
            options={
                'db_table': 'applications',
                'ordering': ['-featured', 'display_order', 'name'],
            },
        ),
    ]
