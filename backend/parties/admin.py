from django.contrib import admin
from .models import Industry, BusinessType, Customer, Inquiry


@admin.action(description='Recount customers for selected industries')
def refresh_industry_stats(modeladmin, request, queryset):
    for industry in queryset:
        industry.update_customer_count()
        industry.update_application_count()
    modeladmin.message_user(request, f'Updated stats for {queryset.count()} industries')


@admin.register(Industry)
class IndustryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'category', 'is_active', 'display_order', 'customer_count']
    list_filter = ['category', 'is_active']
    search_fields = ['name', 'description']
    ordering = ['display_order', 'name']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['stats', 'created_at', 'updated_at']
    actions = [refresh_industry_stats]

    def customer_count(self, obj):
        return (obj.stats or {}).get('customer_count', 0)
    customer_count.short_description = 'Customers'


@admin.register(BusinessType)
class BusinessTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'customer_count', 'created_at']
    search_fields = ['name']
    ordering = ['name']

    def customer_count(self, obj):
        return obj.get_customer_count()
    customer_count.short_description = 'Customers'


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'business_type', 'province', 'nationality', 'featured', 'created_at']
    list_filter = ['featured', 'business_type', 'nationality', 'province', 'industries']
    search_fields = ['name', 'legal_name', 'address']
    ordering = ['-created_at']
    prepopulated_fields = {'slug': ('name',)}
    filter_horizontal = ['industries']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'company', 'inquiry_type', 'status', 'created_at']
    list_filter = ['inquiry_type', 'status', 'created_at']
    search_fields = ['name', 'email', 'company', 'subject', 'message']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
