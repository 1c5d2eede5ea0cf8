import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from mafannotator.config import AnnotatorSettings, TranscriptSelectorName  # noqa: E402
from mafannotator.response import TranscriptConsequence  # noqa: E402
from mafannotator.transcripts import (  # noqa: E402
    FirstTranscriptSelector,
    IsoformOverrideSelector,
    SELECTORS,
    selector_from_settings,
)


def _transcript(transcript_id: str, terms: tuple[str, ...] = (), canonical: bool = False) -> TranscriptConsequence:
    return TranscriptConsequence(transcript_id=transcript_id, consequence_terms=terms, canonical=canonical)


def test_first_selector_returns_first_transcript() -> None:
    transcripts = [_transcript("ENST1"), _transcript("ENST2")]

    assert FirstTranscriptSelector().select(transcripts).transcript_id == "ENST1"
    assert FirstTranscriptSelector().select([]) is None


def test_override_selector_returns_single_override_match() -> None:
    transcripts = [_transcript("ENST1"), _transcript("ENST2")]

    selected = IsoformOverrideSelector({"ENST2"}).select(transcripts, "missense_variant")

    assert selected.transcript_id == "ENST2"


def test_override_selector_breaks_ties_on_most_severe_consequence() -> None:
    transcripts = [
        _transcript("ENST1", ("intron_variant",)),
        _transcript("ENST2", ("missense_variant",)),
        _transcript("ENST3", ("missense_variant", "splice_region_variant")),
    ]

    selected = IsoformOverrideSelector({"ENST1", "ENST3"}).select(transcripts, "missense_variant")

    assert selected.transcript_id == "ENST3"


def test_override_selector_falls_back_to_service_canonical_flag() -> None:
    transcripts = [_transcript("ENST1"), _transcript("ENST2", canonical=True)]

    assert IsoformOverrideSelector().select(transcripts).transcript_id == "ENST2"


def test_override_selector_without_match_uses_most_severe_over_all() -> None:
    transcripts = [_transcript("ENST1", ("intron_variant",)), _transcript("ENST2", ("stop_gained",))]
    selector = IsoformOverrideSelector({"ENST9"})

    assert selector.select(transcripts, "stop_gained").transcript_id == "ENST2"
    assert selector.select(transcripts, "frameshift_variant") is None
    assert selector.select(transcripts) is None


def test_selector_from_settings() -> None:
    assert sorted(SELECTORS) == ["first", "isoform_override"]

    settings = AnnotatorSettings(
        transcript_selector=TranscriptSelectorName.ISOFORM_OVERRIDE,
        isoform_overrides=("ENST2",),
    )
    selector = selector_from_settings(settings)

    assert isinstance(selector, IsoformOverrideSelector)
    assert selector.overrides == frozenset({"ENST2"})
    assert isinstance(selector_from_settings(AnnotatorSettings()), FirstTranscriptSelector)
