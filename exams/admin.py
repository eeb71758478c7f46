from django.contrib import admin
from .models import Exam, ExamSchedule, Mark
# Register your models here.

class ExamScheduleInline(admin.TabularInline):
    model = ExamSchedule
    extra = 0

@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ("name", "year", "created_at")
    list_filter = ("year",)
    inlines = [ExamScheduleInline]

@admin.register(ExamSchedule)
class ExamScheduleAdmin(admin.ModelAdmin):
    list_display = ("exam", "classroom", "subject", "full_marks", "exam_date")
    list_filter = ("exam", "classroom")

@admin.register(Mark)
class MarkAdmin(admin.ModelAdmin):
    list_display = ("enrollment", "schedule", "marks_obtained", "updated_at")
    list_filter = ("schedule__exam", "schedule__classroom")
    search_fields = ("enrollment__student__matricule", "enrollment__student__last_name")
