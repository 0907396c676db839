"""Services package - Business logic layer"""

from services.record_service import RecordService
from services.analytics_service import AnalyticsService
from services.generator_service import GeneratorService
from services.query_timer import QueryTimer, measure

__all__ = [
    "RecordService",
    "AnalyticsService",
    "GeneratorService",
    "QueryTimer",
    "measure",
]
