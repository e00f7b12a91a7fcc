"""
Pressman URL Configuration.

    path('pressman/', include('pressman.urls')),
"""

from django.urls import include, path

app_name = "pressman"

urlpatterns = [
    path("api/", include("pressman.api.urls")),
]
