"""Endpoint receiving the browser's Google Analytics client id."""

from __future__ import annotations

import logging

from django.urls import path
from rest_framework import serializers, status
from rest_framework.authentication import SessionAuthentication
from rest_framework.response import Response
from rest_framework.views import APIView

from .client_id import store_client_id
from .config import get_analytics_settings

logger = logging.getLogger(__name__)

app_name = "analytics"


class CsrfEnforcedSessionAuthentication(SessionAuthentication):
    """Session auth that checks the CSRF token for anonymous visitors too."""

    def authenticate(self, request):
        self.enforce_csrf(request)
        return super().authenticate(request)


class ClientIdSerializer(serializers.Serializer):
    clientId = serializers.CharField(max_length=255, trim_whitespace=True)


class ClientIdView(APIView):
    """Store the posted client id in the visitor's session."""

    authentication_classes = [CsrfEnforcedSessionAuthentication]

    def post(self, request, *args, **kwargs):
        serializer = ClientIdSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client_id = serializer.validated_data["clientId"]

        config = get_analytics_settings()
        changed = store_client_id(request.session, client_id, config.client_id_session_key)
        if changed:
            logger.debug("Stored analytics client id in session")

        return Response(
            {"status": "stored" if changed else "unchanged"},
            status=status.HTTP_200_OK,
        )


_http_uri = get_analytics_settings().http_uri.strip("/") or "gaid"

urlpatterns = [
    path(_http_uri, ClientIdView.as_view(), name="client-id"),
]
