from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

import factory

from price_portal.models import PriceRecord, PriceCategory


class TestConstant(Enum):
    commodity = "Sardines"
    commodity2 = "Instant Noodles"
    brand = "Ligo"
    brand2 = "Lucky Me"
    variant = "in Tomato Sauce"
    size = "155g"
    store = "SAVEMORE TAGBILARAN"
    store2 = "ALTURAS MALL"
    month = "March"
    years = "2025"
    price = Decimal("22.50")
    srp = Decimal("21.00")
    timestamp = datetime(2025, 3, 15, 8, 0, 0, tzinfo=timezone.utc)
    previous_timestamp = datetime(2025, 3, 1, 8, 0, 0, tzinfo=timezone.utc)


class PriceRecordFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PriceRecord

    commodity = TestConstant.commodity.value
    brand = TestConstant.brand.value
    variant = TestConstant.variant.value
    size = TestConstant.size.value
    store = TestConstant.store.value
    category = PriceCategory.BASIC.value
    month = TestConstant.month.value
    years = TestConstant.years.value
    price = TestConstant.price.value
    srp = TestConstant.srp.value
    timestamp = TestConstant.timestamp.value


class PreviousPriceRecordFactory(PriceRecordFactory):
    """Earlier observation of the same product and store"""
    price = Decimal("20.00")
    timestamp = TestConstant.previous_timestamp.value


class NoodlePriceRecordFactory(PriceRecordFactory):
    commodity = TestConstant.commodity2.value
    brand = TestConstant.brand2.value
    variant = "Pancit Canton"
    size = "60g"
    store = TestConstant.store2.value
    price = Decimal("15.00")
    srp = Decimal("15.50")
