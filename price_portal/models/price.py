import logging

from django.core.cache import cache
from django.db import models
from django.db.models import QuerySet
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.utils import timezone

from price_processors import const

logger = logging.getLogger(__name__)


class PriceCategory(models.TextChoices):
    BASIC = "basic"
    PRIME = "prime"
    CONSTRUCTION = "construction"
    NOCHE_BUENA = "noche-buena"
    SCHOOL_SUPPLIES = "school-supplies"
    GENERAL = "general"


class PriceRecordManager(models.Manager):

    def get_by_keyword(self, **kwargs) -> QuerySet:
        qs: QuerySet = self.all()

        for field in self.model.get_base_fields():
            value = kwargs.get(field, None)
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            if value:
                qs = qs.filter(**{f"{field}__iexact": value})

        return qs

    def get_unique_values(self, field: str) -> list:
        qs = self.exclude(**{f"{field}__isnull": True}).exclude(**{field: ""})
        return sorted(set(str(v) for v in qs.values_list(field, flat=True)))


class PriceRecord(models.Model):
    class Meta:
        indexes = [
            models.Index(fields=['-timestamp'], name='price_timestamp_idx'),
            models.Index(fields=['commodity', 'store'], name='price_commodity_store_idx'),
            models.Index(fields=['month', 'years'], name='price_month_years_idx'),
            models.Index(fields=['commodity', 'store', 'timestamp'], name='price_comm_store_ts_idx'),
        ]

    id = models.BigAutoField(primary_key=True)
    commodity = models.CharField(max_length=255)
    brand = models.CharField(max_length=255, blank=True, default="")
    variant = models.CharField(max_length=255, blank=True, default="")
    size = models.CharField(max_length=64, blank=True, default="")
    store = models.CharField(max_length=255, blank=True, default="")
    category = models.CharField(choices=PriceCategory.choices, max_length=32, default=PriceCategory.GENERAL)
    month = models.CharField(max_length=32, blank=True, default="")
    years = models.CharField(max_length=16, blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    srp = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PriceRecordManager()

    def __str__(self):
        return f"ID: {self.id}, COMMODITY: {self.commodity}, STORE: {self.store}, PRICE: {self.price}"

    @staticmethod
    def get_base_fields():
        return ['commodity', 'brand', 'variant', 'size', 'store', 'category', 'month', 'years']


def clear_analysis_cache():
    cache.delete(const.ANALYSIS_CACHE_KEY)


@receiver(post_save, sender=PriceRecord)
@receiver(post_delete, sender=PriceRecord)
def invalidate_analysis_cache(sender, instance, **kwargs):
    logger.debug(f"Invalidate analysis cache on change of PriceRecord {instance.id}")
    clear_analysis_cache()
