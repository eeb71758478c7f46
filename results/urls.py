from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import ProcessResultsView, ResultViewSet

router = DefaultRouter()
router.register(r"results", ResultViewSet, basename="results")

urlpatterns = [
    # avant le router: sinon "process" est pris pour un pk
    path("results/process/", ProcessResultsView.as_view(), name="results-process"),
] + router.urls
