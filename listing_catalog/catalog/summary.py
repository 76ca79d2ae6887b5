"""
Catalog summary - counts and per-currency price statistics.
"""
from collections import Counter, defaultdict
from typing import Iterable

import numpy as np

from .builder import AnyListing
from ..models.summary import CatalogSummary, PriceStats


class CatalogSummarizer:
    """Aggregates a catalog snapshot into a CatalogSummary."""

    def summarize(self, listings: Iterable[AnyListing]) -> CatalogSummary:
        listings = list(listings)
        if not listings:
            return CatalogSummary()

        by_category = Counter(listing.category for listing in listings)
        by_status = Counter(listing.status for listing in listings)

        rated = [listing.rating for listing in listings if listing.review_count > 0]
        average_rating = round(float(np.mean(rated)), 2) if rated else None

        return CatalogSummary(
            total=len(listings),
            by_category={str(k): v for k, v in by_category.items()},
            by_status=dict(by_status),
            verified=sum(1 for listing in listings if listing.verified),
            average_rating=average_rating,
            prices=self.price_stats(listings),
        )

    def price_stats(self, listings: Iterable[AnyListing]) -> dict[str, PriceStats]:
        """
        Price statistics grouped by currency.
        Amounts in different currencies are never mixed.
        """
        grouped: dict[str, list[float]] = defaultdict(list)
        for listing in listings:
            if listing.pricing is not None:
                grouped[listing.pricing.currency].append(listing.pricing.amount)

        stats = {}
        for currency, prices in grouped.items():
            prices_array = np.array(prices)
            stats[currency] = PriceStats(
                currency=currency,
                median=float(np.median(prices_array)),
                q1=float(np.percentile(prices_array, 25)),
                q3=float(np.percentile(prices_array, 75)),
                min_price=float(np.min(prices_array)),
                max_price=float(np.max(prices_array)),
                n=len(prices),
            )
        return stats
