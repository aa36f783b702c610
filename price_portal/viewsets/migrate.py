# -*- coding: utf-8 -*-
"""viewsets module

NOTE:
     This is DRF based Price Portal API impls.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from price_portal.serializers import MigrateSerializer
from price_portal.viewsets.utils import _internal_error_response
from price_processors.services import migration_srv

logger = logging.getLogger(__name__)


class MigrateViewSet(ViewSet):

    def list(self, request):
        """
        You have hit GET /migrate. Please use POST /migrate to fill defaults on legacy price records.
        Optional payload: {"default_year": "2025"}
        """
        return Response(data={
            'message': self.list.__doc__
        }, status=status.HTTP_400_BAD_REQUEST)

    def create(self, request):
        serializer = MigrateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(data={'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            stats = migration_srv.migrate_legacy_records(serializer.validated_data.get('default_year') or None)
            return Response(data=stats, status=status.HTTP_200_OK)

        except Exception as e:
            logger.error(e)
            return _internal_error_response()
