from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, TeacherAssignment
# Register your models here.

class TeacherAssignmentInline(admin.TabularInline):
    model = TeacherAssignment
    extra = 0

@admin.register(User)
class SchoolUserAdmin(UserAdmin):
    list_display = ("username", "first_name", "last_name", "email", "role", "is_active")
    list_filter = ("role", "is_active", "is_staff")
    fieldsets = UserAdmin.fieldsets + (("School", {"fields": ("role",)}),)
    inlines = [TeacherAssignmentInline]

@admin.register(TeacherAssignment)
class TeacherAssignmentAdmin(admin.ModelAdmin):
    list_display = ("teacher", "classroom", "can_edit")
    list_filter = ("can_edit", "classroom__year")
    search_fields = ("teacher__username", "classroom__name")
