from .pipeline import IngestReport, ingest_questions
from .resolver import NormalizationResolver, make_sentinel_id, parse_category_id
from .writer import DeduplicatingWriter, WriteResult

__all__ = [
    'IngestReport',
    'ingest_questions',
    'NormalizationResolver',
    'make_sentinel_id',
    'parse_category_id',
    'DeduplicatingWriter',
    'WriteResult',
]
