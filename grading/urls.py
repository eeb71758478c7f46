from django.urls import path
from .views import GradingSystemListView, GradingSystemDetailView

urlpatterns = [
    path("grading-systems/", GradingSystemListView.as_view(), name="grading-systems"),
    path("grading-systems/<int:pk>/", GradingSystemDetailView.as_view(), name="grading-system-detail"),
]
