"""
Pressman API URLs.

Include this in your project's urlpatterns:

    path('api/pressman/', include('pressman.api.urls')),
"""

from rest_framework.routers import DefaultRouter

from .views import BoardViewSet, NotificationViewSet, OrderViewSet, StatsViewSet

router = DefaultRouter()
router.register("orders", OrderViewSet, basename="order")
router.register("board", BoardViewSet, basename="board")
router.register("notifications", NotificationViewSet, basename="notification")
router.register("stats", StatsViewSet, basename="stats")

urlpatterns = router.urls
