from django.contrib import admin, messages
from django.utils.html import format_html
from .models import Brand, ProductLine, PumpType, SubPumpType, Product
from .usage import sync_all_usage


class ProductLineInline(admin.TabularInline):
    model = ProductLine
    extra = 1
    fields = ['name', 'description', 'documents', 'is_active', 'display_order']
    ordering = ['display_order']


class SubPumpTypeInline(admin.TabularInline):
    model = SubPumpType
    extra = 1
    fields = ['name', 'slug', 'image', 'description', 'is_active', 'display_order']
    prepopulated_fields = {'slug': ('name',)}
    ordering = ['display_order']


@admin.action(description='Rebuild product usage maps')
def rebuild_usage(modeladmin, request, queryset):
    result = sync_all_usage()
    level = messages.SUCCESS if result['success'] else messages.ERROR
    modeladmin.message_user(request, result['message'], level)


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'country', 'year_established', 'product_count', 'created_at']
    list_filter = ['country', 'created_at']
    search_fields = ['name', 'country']
    ordering = ['name']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['product_usage', 'product_line_usage', 'created_at', 'updated_at']
    inlines = [ProductLineInline]
    actions = [rebuild_usage]

    def product_count(self, obj):
        return len(obj.product_usage or [])
    product_count.short_description = 'Products'


@admin.register(PumpType)
class PumpTypeAdmin(admin.ModelAdmin):
    list_display = ['pump_type', 'slug', 'product_count', 'created_at']
    search_fields = ['pump_type', 'description']
    ordering = ['pump_type']
    prepopulated_fields = {'slug': ('pump_type',)}
    readonly_fields = ['product_usage', 'sub_pump_type_usage', 'created_at', 'updated_at']
    inlines = [SubPumpTypeInline]
    actions = [rebuild_usage]

    def product_count(self, obj):
        return len(obj.product_usage or [])
    product_count.short_description = 'Products'


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'brand', 'pump_type', 'price', 'in_stock', 'image_preview', 'created_at']
    list_filter = ['category', 'in_stock', 'brand', 'pump_type', 'created_at']
    search_fields = ['name', 'slug', 'description', 'brand__name']
    ordering = ['-created_at']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']
    autocomplete_fields = ['brand', 'pump_type']

    fieldsets = (
        ('Product', {
            'fields': ('name', 'slug', 'description', 'category', 'price', 'in_stock')
        }),
        ('Classification', {
            'fields': ('brand', 'product_line', 'pump_type', 'sub_pump_type')
        }),
        ('Details', {
            'fields': ('specifications', 'features', 'applications', 'images')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    def image_preview(self, obj):
        """Thumbnail of the primary image"""
        url = obj.primary_image
        if not url:
            return '-'
        return format_html('<img src="{}" style="max-height: 40px;" />', url)
    image_preview.short_description = 'Image'
