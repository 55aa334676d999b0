"""Job reviews and worker rating aggregation."""

from .rating_aggregator import RatingAggregator, mean_rating

__all__ = ["RatingAggregator", "mean_rating"]
