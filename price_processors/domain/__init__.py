# -*- coding: utf-8 -*-
"""price domain package

Pure price analysis rules. Modules in this package take plain record dicts (as produced by the
PriceRecord queryset `values()` call, an import parser or a JSON payload) and return DTOs from
price_processors.dto. They do not touch the database, the cache nor the file system; that is the
job of price_processors.services.

normalizer   - heterogeneous record fields to PriceObservation
prevailing   - statistical mode with SRP capped tie-break
comparative  - per product group current/previous price, status and compliance
summary      - compliance counts, top movers and situationer narrative
dashboard    - overview statistics
validation   - record cleaning and batch validation prior persist
"""
