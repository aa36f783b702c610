# -*- coding: utf-8 -*-
"""viewsets module

NOTE:
     This is DRF based Price Portal API impls.
"""
import logging

from rest_framework import filters, status, parsers
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from price_portal.exceptions import InvalidQueryParameter
from price_portal.models import PriceRecord
from price_portal.pagination import StandardResultsSetPagination
from price_portal.responses import FileDownloadResponse
from price_portal.serializers import PriceRecordModelSerializer, PriceImportSerializer
from price_portal.viewsets.utils import _error_response, _internal_error_response, _choice_param
from price_processors.domain import validation
from price_processors.exceptions import UnsupportedImportFormat, InvalidImportSheet
from price_processors.services import import_srv, report_srv
from utils import libjson

logger = logging.getLogger(__name__)

unique_fields = PriceRecord.get_base_fields()


class PriceRecordViewSet(ModelViewSet):
    serializer_class = PriceRecordModelSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [filters.OrderingFilter, filters.SearchFilter]
    ordering_fields = '__all__'
    ordering = ['-timestamp']
    search_fields = ['commodity', 'store', 'brand', 'variant']

    def get_queryset(self):
        return PriceRecord.objects.get_by_keyword(**self.request.query_params)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(data={'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)
        self.perform_create(serializer)
        logger.info(f"Created price record {serializer.data['id']}")
        return Response(data=serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(data={'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)
        self.perform_update(serializer)
        return Response(data=serializer.data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(data={'message': "Deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'])
    def unique(self, request):
        try:
            field = _choice_param(self.request.query_params, 'field', unique_fields)
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        if field is None:
            return Response(data={f: PriceRecord.objects.get_unique_values(f) for f in unique_fields})

        return Response(data={field: PriceRecord.objects.get_unique_values(field)})

    @action(detail=False, methods=['get'])
    def export(self, request):
        try:
            output = _choice_param(self.request.query_params, 'output', report_srv.EXPORT_FORMATS, default='csv')
        except InvalidQueryParameter as e:
            return _error_response(str(e))

        qs = self.filter_queryset(self.get_queryset())
        content, filename, content_type = report_srv.export_records(qs.values(), output)

        return FileDownloadResponse(content, filename, content_type)

    @action(detail=False, methods=['post'])
    def validate(self, request):
        records = request.data
        if not isinstance(records, list):
            return _error_response("Expect a JSON list of price records")

        valid, invalid = validation.validate_batch(records)

        return Response(data={
            'valid_count': len(valid),
            'invalid_count': len(invalid),
            'invalid': invalid,
            'duplicates': validation.find_duplicates(valid),
            'quality': validation.quality_report(valid),
        })

    @action(detail=False, methods=['post'], url_path='import', serializer_class=PriceImportSerializer,
            parser_classes=[parsers.MultiPartParser, parsers.FormParser])
    def import_file(self, request):
        serializer = PriceImportSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(data={'errors': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        upload = serializer.validated_data['file']
        category = serializer.validated_data['category']
        year = serializer.validated_data.get('year') or None
        dry_run = serializer.validated_data['dry_run']

        try:
            records = import_srv.import_file(upload, upload.name, year=year)
            records = import_srv.apply_category(records, category)

            if dry_run:
                valid, invalid = validation.validate_batch(records, normalize_names=False)
                return Response(data={
                    'parsed_count': len(records),
                    'valid_count': len(valid),
                    'invalid_count': len(invalid),
                    'quality': validation.quality_report(valid),
                    'preview': valid[:20],
                })

            stats = import_srv.persist_records(records)
            logger.info(libjson.dumps({'file': upload.name, 'category': category, **stats}))

            return Response(data={'parsed_count': len(records), **stats}, status=status.HTTP_201_CREATED)

        except (UnsupportedImportFormat, InvalidImportSheet) as e:
            return _error_response(str(e))

        except Exception as e:
            logger.error(e)
            return _internal_error_response()
