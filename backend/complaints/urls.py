"""
Complaints app URL configuration.

Route Hierarchy
---------------
  /api/complaints/                     → list / submit
  /api/complaints/{id}/                → retrieve
  POST /api/complaints/{id}/assign/    → assign officer
  POST /api/complaints/{id}/status/    → change status
  GET|POST /api/complaints/{id}/comments/
"""

from rest_framework.routers import DefaultRouter

from .views import ComplaintViewSet

router = DefaultRouter()
router.register(
    prefix=r"complaints",
    viewset=ComplaintViewSet,
    basename="complaint",
)

urlpatterns = router.urls
