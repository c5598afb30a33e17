"""
Core app URL configuration.

URL prefix (registered in ``backend/urls.py``)::

    path('api/core/', include('core.urls'))

Endpoint summary
----------------
GET    /api/core/notifications/               — List notifications for the authenticated user.
GET    /api/core/notifications/unread/        — List unread notifications.
GET    /api/core/notifications/unread-count/  — Count unread notifications.
POST   /api/core/notifications/{id}/read/     — Mark a single notification as read.
POST   /api/core/notifications/read-all/      — Mark all notifications as read.
DELETE /api/core/notifications/{id}/          — Delete a notification.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "core"

router = DefaultRouter()
router.register(
    prefix=r"notifications",
    viewset=views.NotificationViewSet,
    basename="notification",
)

urlpatterns = [
    path("", include(router.urls)),
]
