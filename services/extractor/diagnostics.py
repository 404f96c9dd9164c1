# services/extractor/diagnostics.py
from typing import Dict, List, Optional

from models.news import (
    ExtractionFailure,
    FailureReason,
    NewsSection,
    SectionDiagnostics,
)


class _SectionTally:
    __slots__ = ("found", "parsed", "failures", "groups_skipped", "error")

    def __init__(self):
        self.found = 0
        self.parsed = 0
        self.failures: List[ExtractionFailure] = []
        self.groups_skipped = 0
        self.error: Optional[str] = None


class DiagnosticsCollector:
    """
    Per-call accumulator of what each section saw and produced.

    Write-only from the extractors' point of view: nothing in the pipeline
    reads it back to decide which records to emit.
    """

    def __init__(self):
        self._tallies: Dict[NewsSection, _SectionTally] = {}

    def _tally(self, section: NewsSection) -> _SectionTally:
        return self._tallies.setdefault(section, _SectionTally())

    def start(self, section: NewsSection) -> None:
        """Reset ``section`` (a re-run replaces earlier numbers)."""
        self._tallies[section] = _SectionTally()

    def found(self, section: NewsSection, count: int) -> None:
        self._tally(section).found += count

    def parsed(self, section: NewsSection) -> None:
        self._tally(section).parsed += 1

    def failed(
        self,
        section: NewsSection,
        index: int,
        reason: FailureReason,
        category: Optional[str] = None,
    ) -> None:
        self._tally(section).failures.append(
            ExtractionFailure(index=index, reason=reason, category=category)
        )

    def group_skipped(self, section: NewsSection) -> None:
        self._tally(section).groups_skipped += 1

    def aborted(self, section: NewsSection, error: BaseException) -> None:
        """The section raised: its records are dropped, so parsed goes to 0."""
        tally = self._tally(section)
        tally.parsed = 0
        tally.error = f"{type(error).__name__}: {error}"

    def snapshot(self) -> Dict[NewsSection, SectionDiagnostics]:
        """Frozen per-section diagnostics in processing order."""
        return {
            section: SectionDiagnostics(
                elements_found=t.found,
                elements_parsed=t.parsed,
                failures=list(t.failures),
                groups_skipped=t.groups_skipped,
                error=t.error,
            )
            for section, t in sorted(
                self._tallies.items(), key=lambda kv: list(NewsSection).index(kv[0])
            )
        }
