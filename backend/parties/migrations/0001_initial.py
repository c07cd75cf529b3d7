import backend.core.validators
from django.db import migrations, models
import django.db.models.deletion


PROVINCES = [
    'TP Ho Chi Minh', 'TP Hà Nội', 'TP Đà Nẵng', 'TP Huế', 'Quảng Ninh', 'Cao Bằng',
    'Lạng Sơn', 'Lai Châu', 'Điện Biên', 'Sơn La', 'Thanh Hóa', 'Nghệ An', 'Hà Tĩnh',
    'Tuyên Quang', 'Lào Cai', 'Thái Nguyên', 'Phú Thọ', 'Bắc Ninh', 'Hưng Yên',
    'TP Hải Phòng', 'Ninh Bình', 'Quảng Trị', 'Quảng Ngãi', 'Gia Lai', 'Khánh Hòa',
    'Lâm Đồng', 'Đắk Lắk', 'Đồng Nai', 'Tây Ninh', 'TP Cần Thơ', 'Vĩnh Long',
    'Đồng Tháp', 'Cà Mau', 'An Giang',
]
NATIONALITIES = ['Việt Nam', 'Nhật Bản', 'Hàn Quốc', 'Trung Quốc', 'Đài Loan', 'Mỹ', 'EU', 'Thái Lan', 'Other']


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='BusinessType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'business_types',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Industry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('slug', models.SlugField(max_length=100, unique=True, validators=[backend.core.validators.validate_slug])),
                ('description', models.TextField(blank=True, max_length=1000)),
                ('category', models.CharField(choices=[('manufacturing', 'Manufacturing'), ('processing', 'Processing'), ('research', 'Research'), ('energy', 'Energy'), ('healthcare', 'Healthcare'), ('technology', 'Technology'), ('other', 'Other')], db_index=True, default='other', max_length=20)),
                ('characteristics', models.JSONField(blank=True, default=dict)),
                ('market_info', models.JSONField(blank=True, default=dict)),
                ('keywords', models.JSONField(blank=True, default=list)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('display_order', models.IntegerField(db_index=True, default=0)),
                ('stats', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'industries',
                'verbose_name_plural': 'industries',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Inquiry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('company', models.CharField(blank=True, max_length=200)),
                ('subject', models.CharField(blank=True, max_length=200)),
                ('message', models.TextField()),
                ('inquiry_type', models.CharField(choices=[('quote', 'Quote'), ('support', 'Support'), ('general', 'General'), ('product-info', 'Product Info')], default='general', max_length=20)),
                ('status', models.CharField(choices=[('new', 'New'), ('in-progress', 'In Progress'), ('resolved', 'Resolved'), ('closed', 'Closed')], db_index=True, default='new', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'inquiries',
                'verbose_name_plural': 'inquiries',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('slug', models.SlugField(max_length=100, unique=True, validators=[backend.core.validators.validate_slug])),
                ('legal_name', models.CharField(blank=True, max_length=300)),
                ('address', models.CharField(blank=True, max_length=500)),
                ('website', models.CharField(blank=True, max_length=200, validators=[backend.core.validators.validate_website])),
                ('logo', models.CharField(blank=True, max_length=500, validators=[backend.core.validators.validate_image_path])),
                ('images', models.JSONField(blank=True, default=list, validators=[backend.core.validators.validate_single_primary])),
                ('province', models.CharField(blank=True, choices=[(p, p) for p in PROVINCES], default='TP Ho Chi Minh', max_length=50)),
                ('nationality', models.CharField(choices=[(n, n) for n in NATIONALITIES], default='Việt Nam', max_length=50)),
                ('description', models.TextField(blank=True, max_length=50000)),
                ('projects', models.JSONField(blank=True, default=list)),
                ('pump_models_used', models.JSONField(blank=True, default=list)),
                ('applications', models.JSONField(blank=True, default=list)),
                ('featured', models.BooleanField(db_index=True, default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='customers', to='parties.businesstype')),
                ('industries', models.ManyToManyField(blank=True, related_name='customers', to='parties.industry')),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['-created_at'],
            },
        ),
    ]
