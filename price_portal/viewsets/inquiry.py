# -*- coding: utf-8 -*-
"""viewsets module

NOTE:
     This is DRF based Price Portal API impls.
"""
import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from price_portal.responses import FileDownloadResponse
from price_portal.serializers import InquiryLetterSerializer
from price_portal.viewsets.utils import _error_response, _internal_error_response, _param
from price_processors.exceptions import EmptyLetterSelection
from price_processors.services import letter_srv, price_srv, report_srv

logger = logging.getLogger(__name__)


class InquiryViewSet(ViewSet):

    def list(self, request):
        """
        Price records sold above SRP, grouped by store
        """
        store = _param(self.request.query_params, 'store')

        records = price_srv.get_all_records()
        if store:
            records = [r for r in records if r.get('store') == store]

        groups = letter_srv.flagged_by_store(records)

        return Response(data=[
            {'store': name, 'count': len(items), 'items': items} for name, items in groups.items()
        ])

    @action(detail=False, methods=['post'])
    def letter(self, request):
        serializer = InquiryLetterSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(data={'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        ids = serializer.validated_data['ids']
        output = serializer.validated_data['format']

        try:
            records = price_srv.get_records_by_ids(ids)
            letter = letter_srv.build_letter(
                records,
                letter_date=serializer.validated_data.get('date'),
                officer=serializer.validated_data.get('officer', ""),
            )

            if output == 'pdf':
                return FileDownloadResponse(
                    letter_srv.render_letter_pdf(letter),
                    letter_srv.letter_filename(letter, 'pdf'),
                    report_srv.CONTENT_TYPES['pdf'],
                )

            return HttpResponse(letter_srv.render_letter(letter), content_type=report_srv.CONTENT_TYPES['html'])

        except EmptyLetterSelection as e:
            return _error_response(str(e))

        except Exception as e:
            logger.error(e)
            return _internal_error_response()
