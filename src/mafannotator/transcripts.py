"""Canonical transcript selection strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from .config import AnnotatorSettings
from .response import TranscriptConsequence


class TranscriptSelector(ABC):
    """Pick the single transcript consequence reported for a variant."""

    name: str

    @abstractmethod
    def select(
        self,
        transcripts: Sequence[TranscriptConsequence],
        most_severe_consequence: str | None = None,
    ) -> TranscriptConsequence | None:
        """Return the canonical transcript, or None when there is none."""


class FirstTranscriptSelector(TranscriptSelector):
    """Trust the service ordering: the first transcript is canonical."""

    name = "first"

    def select(
        self,
        transcripts: Sequence[TranscriptConsequence],
        most_severe_consequence: str | None = None,
    ) -> TranscriptConsequence | None:
        return transcripts[0] if transcripts else None


class IsoformOverrideSelector(TranscriptSelector):
    """Prefer transcripts named in an isoform override set.

    When no transcript id is overridden, transcripts the service marked
    canonical are used instead. A single candidate wins outright; with several
    candidates, or none at all, the first transcript whose consequence terms
    contain the most severe consequence is chosen.
    """

    name = "isoform_override"

    def __init__(self, overrides: Iterable[str] = ()) -> None:
        self.overrides = frozenset(overrides)

    def select(
        self,
        transcripts: Sequence[TranscriptConsequence],
        most_severe_consequence: str | None = None,
    ) -> TranscriptConsequence | None:
        candidates = [t for t in transcripts if t.transcript_id in self.overrides]
        if not candidates:
            candidates = [t for t in transcripts if t.canonical]
        if len(candidates) == 1:
            return candidates[0]

        pool = candidates or list(transcripts)
        if most_severe_consequence:
            for transcript in pool:
                if most_severe_consequence in transcript.consequence_terms:
                    return transcript
        return None


SELECTORS: dict[str, type[TranscriptSelector]] = {
    FirstTranscriptSelector.name: FirstTranscriptSelector,
    IsoformOverrideSelector.name: IsoformOverrideSelector,
}


def selector_from_settings(settings: AnnotatorSettings) -> TranscriptSelector:
    """Instantiate the selector a run is configured with."""

    name = settings.transcript_selector.value
    if name == IsoformOverrideSelector.name:
        return IsoformOverrideSelector(settings.isoform_overrides)
    return SELECTORS[name]()
