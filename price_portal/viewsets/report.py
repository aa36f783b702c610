# -*- coding: utf-8 -*-
"""viewsets module

NOTE:
     This is DRF based Price Portal API impls.
"""
import logging

from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from price_portal.exceptions import InvalidQueryParameter
from price_portal.responses import FileDownloadResponse
from price_portal.viewsets.utils import _error_response, _internal_error_response, _param, _month_param, \
    _year_param, _choice_param
from price_processors.services import report_srv

logger = logging.getLogger(__name__)


class ReportViewSet(ViewSet):

    def list(self, request):
        return Response(data={
            'reports': ['comparative'],
            'outputs': report_srv.REPORT_FORMATS,
        })

    @action(detail=False, methods=['get'])
    def comparative(self, request):
        query_params = self.request.query_params
        try:
            output = _choice_param(query_params, 'output', report_srv.REPORT_FORMATS, default='json')
            month = _month_param(query_params)
            year = _year_param(query_params)
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        try:
            report = report_srv.build_report(
                month=month,
                year=year,
                commodity=_param(query_params, 'commodity'),
                store=_param(query_params, 'store'),
                search=_param(query_params, 'search'),
                brand=_param(query_params, 'brand'),
            )
            content, filename, content_type = report_srv.render_report(report, output)

        except Exception as e:
            logger.error(e)
            return _internal_error_response()

        if output == 'json':
            return Response(data=content)

        return FileDownloadResponse(content, filename, content_type)
