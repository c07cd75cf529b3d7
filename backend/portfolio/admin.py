from django.contrib import admin
from django.utils.html import format_html
from .models import Project, Application


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'client', 'industry', 'project_type', 'status', 'featured', 'completion_date']
    list_filter = ['status', 'featured', 'industry', 'project_type']
    search_fields = ['title', 'client', 'location', 'description']
    ordering = ['-created_at']
    prepopulated_fields = {'slug': ('title',)}
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'completion_date'

    fieldsets = (
        ('Project', {
            'fields': ('title', 'slug', 'description', 'client', 'industry', 'location',
                       'completion_date', 'project_type', 'status', 'featured')
        }),
        ('Equipment', {
            'fields': ('pump_types', 'pump_models', 'applications', 'specifications')
        }),
        ('Case study', {
            'fields': ('challenges', 'solutions', 'results', 'images')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'is_active', 'featured', 'display_order', 'view_count', 'image_preview']
    list_filter = ['category', 'is_active', 'featured']
    search_fields = ['name', 'description']
    ordering = ['-featured', 'display_order', 'name']
    prepopulated_fields = {'slug': ('name',)}
    filter_horizontal = ['recommended_industries']
    readonly_fields = ['stats', 'created_at', 'updated_at']

    def view_count(self, obj):
        return (obj.stats or {}).get('view_count', 0)
    view_count.short_description = 'Views'

    def image_preview(self, obj):
        primary = next((image for image in obj.images or [] if image.get('is_primary')), None)
        if not primary:
            return '-'
        return format_html('<img src="{}" style="max-height: 40px;" />', primary.get('url'))
    image_preview.short_description = 'Image'
