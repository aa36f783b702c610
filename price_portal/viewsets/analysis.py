# -*- coding: utf-8 -*-
"""viewsets module

NOTE:
     This is DRF based Price Portal API impls.
     Comparative analysis, prevailing prices and dashboard statistics are computed in memory over the cached
     price records, see price_processors.services.price_srv.get_all_records()
"""
import logging

from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from price_portal.exceptions import InvalidQueryParameter
from price_portal.pagination import StandardResultsSetPagination
from price_portal.viewsets.utils import _error_response, _param, _month_param, _year_param, _choice_param, \
    _int_param
from price_processors import const
from price_processors.domain.comparative import build_comparative_rows
from price_processors.domain.dashboard import build_dashboard
from price_processors.domain.prevailing import compute_prevailing_report
from price_processors.domain.summary import summarize
from price_processors.services import price_srv

logger = logging.getLogger(__name__)


class AnalysisViewSet(GenericViewSet):
    pagination_class = StandardResultsSetPagination

    def _comparative_params(self):
        params = self.request.query_params
        return {
            'month': _month_param(params),
            'year': _year_param(params),
            'commodity': _param(params, 'commodity'),
            'store': _param(params, 'store'),
            'search': _param(params, 'search'),
        }

    def _comparative_rows(self, params):
        return build_comparative_rows(
            price_srv.get_all_records(),
            tolerance=price_srv.get_compliance_tolerance(),
            **params,
        )

    def list(self, request):
        try:
            params = self._comparative_params()
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        rows = [r.to_dict() for r in self._comparative_rows(params)]

        page = self.paginate_queryset(rows)
        if page is not None:
            return self.get_paginated_response(page)

        return Response(data=rows)

    @action(detail=False, methods=['get'])
    def summary(self, request):
        try:
            params = self._comparative_params()
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        rows = self._comparative_rows(params)
        summary = summarize(rows, month=params['month'], year=params['year'])

        return Response(data=summary.to_dict())

    @action(detail=False, methods=['get'])
    def prevailing(self, request):
        try:
            limit = _int_param(self.request.query_params, 'limit')
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        report = compute_prevailing_report(price_srv.get_all_records(), limit=limit)

        return Response(data=[e.to_dict() for e in report])

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        query_params = self.request.query_params
        try:
            month = _month_param(query_params)
            year = _year_param(query_params)
            date_range = _choice_param(query_params, 'range', list(const.DASHBOARD_DATE_RANGES.keys()))
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        stats = build_dashboard(
            price_srv.get_all_records(),
            commodity=_param(query_params, 'commodity'),
            store=_param(query_params, 'store'),
            month=month,
            year=year,
            date_range=date_range,
            tolerance=price_srv.get_compliance_tolerance(),
        )

        return Response(data=stats.to_dict())
