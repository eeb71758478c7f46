from django.urls import path
from .views import GradeBookView, GradeUpdateView

urlpatterns = [
    path("gradebook/", GradeBookView.as_view(), name="gradebook"),
    path("gradebook/update/", GradeUpdateView.as_view(), name="gradebook-update"),
]
