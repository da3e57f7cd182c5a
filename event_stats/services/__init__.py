from .combiner import MetricsCombiner, combine_series
from .statistics_service import StatisticsService

__all__ = ["StatisticsService", "MetricsCombiner", "combine_series"]
