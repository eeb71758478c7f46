from django.contrib import admin
from .models import Result
# Register your models here.

@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ("enrollment", "exam", "percentage", "gpa", "final_grade", "rank", "grading_system")
    list_filter = ("exam", "grading_system")
    search_fields = ("enrollment__student__matricule", "enrollment__student__last_name")
    readonly_fields = [f.name for f in Result._meta.fields]
