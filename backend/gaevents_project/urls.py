"""URL configuration for the Google Analytics event bridge."""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.analytics.api", namespace="analytics")),
]
