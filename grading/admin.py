from django.contrib import admin
from .models import GradingSystem, GradeBand
# Register your models here.

class ReadOnlyAdminMixin:
    # les écritures passent par l'API (validation + transaction), l'admin reste en lecture
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

class GradeBandInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = GradeBand
    extra = 0

@admin.register(GradingSystem)
class GradingSystemAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("name", "is_default", "updated_at")
    list_filter = ("is_default",)
    search_fields = ("name",)
    inlines = [GradeBandInline]
