from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("accounts.urls")),
    path("api/", include("grading.urls")),
    path("api/", include("exams.urls")),
    path("api/", include("gradebook.urls")),
    path("api/", include("results.urls")),
]
