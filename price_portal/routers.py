from rest_framework_nested import routers

from price_portal.viewsets.analysis import AnalysisViewSet
from price_portal.viewsets.inquiry import InquiryViewSet
from price_portal.viewsets.migrate import MigrateViewSet
from price_portal.viewsets.price import PriceRecordViewSet
from price_portal.viewsets.report import ReportViewSet

API_ROUTES = [
    ('prices', PriceRecordViewSet),
    ('migrate', MigrateViewSet),
    ('analysis', AnalysisViewSet),
    ('reports', ReportViewSet),
    ('inquiry', InquiryViewSet),
]


class OptionalSlashDefaultRouter(routers.DefaultRouter):
    """Accept both /api/prices and /api/prices/ so the dashboard client can call either"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.trailing_slash = '/?'


def build_api_router() -> OptionalSlashDefaultRouter:
    """Router for every price portal endpoint mounted under /api/, basename follows the url prefix"""
    router = OptionalSlashDefaultRouter()
    for prefix, viewset in API_ROUTES:
        router.register(prefix, viewset, basename=prefix)
    return router
