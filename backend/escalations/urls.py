"""
Escalations app URL configuration.

  GET|POST /api/escalations/complaints/{complaint_id}/
  GET      /api/escalations/unresolved/
  POST     /api/escalations/{id}/resolve/
"""

from rest_framework.routers import DefaultRouter

from .views import EscalationViewSet

router = DefaultRouter()
router.register(
    prefix=r"escalations",
    viewset=EscalationViewSet,
    basename="escalation",
)

urlpatterns = router.urls
