from .news import (
    ExtractionFailure,
    ExtractionResult,
    FailureReason,
    NewsRecord,
    NewsSection,
    SectionDiagnostics,
)

__all__ = [
    'ExtractionFailure',
    'ExtractionResult',
    'FailureReason',
    'NewsRecord',
    'NewsSection',
    'SectionDiagnostics',
]
