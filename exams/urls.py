from rest_framework.routers import DefaultRouter
from .views import MarkViewSet

router = DefaultRouter()  # trailing slash par défaut
router.register(r"marks", MarkViewSet, basename="marks")
urlpatterns = router.urls
