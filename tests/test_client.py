import sys
from pathlib import Path
from typing import Any

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from mafannotator.client import GenomeNexusClient  # noqa: E402
from mafannotator.config import AnnotatorSettings  # noqa: E402
from mafannotator.errors import AnnotationCallFailed  # noqa: E402
from mafannotator.genomic_location import GenomicLocation  # noqa: E402

LOCATION = GenomicLocation("7", "140453136", "140453136", "A", "T")


class _Response:
    def __init__(self, payload: Any = None, status: int = 200, bad_json: bool = False) -> None:
        self.payload = payload
        self.status_code = status
        self.bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


class _Session:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def test_url_for_matches_report_format() -> None:
    client = GenomeNexusClient(AnnotatorSettings(isoform_override_source="mskcc"), session=_Session(None))

    assert client.url_for(LOCATION) == (
        "https://www.genomenexus.org/annotation/genomic/7,140453136,140453136,A,T"
        "?isoformOverrideSource=mskcc&fields=annotation_summary"
    )


def test_annotate_parses_payload_and_sends_query_params() -> None:
    session = _Session(_Response({"assembly_name": "GRCh37", "annotation_summary": {"transcriptConsequences": []}}))
    client = GenomeNexusClient(AnnotatorSettings(isoform_override_source="uniprot", timeout_seconds=5), session=session)

    response = client.annotate(LOCATION)

    assert response.assembly_name == "GRCh37"
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"].endswith("annotation/genomic/7,140453136,140453136,A,T")
    assert call["params"] == {"isoformOverrideSource": "uniprot", "fields": "annotation_summary"}
    assert call["timeout"] == 5


@pytest.mark.parametrize(
    "result",
    [
        _Response({}, status=200),
        _Response(None, status=500),
        _Response(None, bad_json=True),
        requests.exceptions.Timeout("slow"),
        requests.exceptions.ConnectionError("down"),
    ],
)
def test_annotate_wraps_failures(result: Any) -> None:
    client = GenomeNexusClient(AnnotatorSettings(), session=_Session(result))

    with pytest.raises(AnnotationCallFailed):
        client.annotate(LOCATION)


def test_annotate_batch_posts_locations() -> None:
    payload = [
        {
            "successfully_annotated": True,
            "annotation_summary": {
                "genomicLocation": {
                    "chromosome": "7",
                    "start": 140453136,
                    "end": 140453136,
                    "referenceAllele": "A",
                    "variantAllele": "T",
                }
            },
        }
    ]
    session = _Session(_Response(payload))
    client = GenomeNexusClient(AnnotatorSettings(), session=session)

    responses = client.annotate_batch([LOCATION])

    assert [response.location_key() for response in responses] == ["7,140453136,140453136,A,T"]
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"][0]["variantAllele"] == "T"


def test_fetch_version_reports_unknown_on_failure() -> None:
    assert GenomeNexusClient(AnnotatorSettings(), session=_Session(_Response({"version": "1.2.3"}))).fetch_version() == "1.2.3"
    failing = GenomeNexusClient(AnnotatorSettings(), session=_Session(requests.exceptions.ConnectionError("down")))
    assert failing.fetch_version() == "unknown"


def test_url_for_without_isoform_source_writes_null() -> None:
    client = GenomeNexusClient(AnnotatorSettings(), session=_Session(None))

    assert "?isoformOverrideSource=null&fields=annotation_summary" in client.url_for(LOCATION)


def test_malformed_payload_is_a_call_failure() -> None:
    payload = {"annotation_summary": {"transcriptConsequences": [{"proteinPosition": "600"}]}}
    client = GenomeNexusClient(AnnotatorSettings(), session=_Session(_Response(payload)))

    with pytest.raises(AnnotationCallFailed, match="Malformed annotation"):
        client.annotate(LOCATION)


def test_batch_skips_malformed_items() -> None:
    good = {
        "annotation_summary": {
            "genomicLocation": {
                "chromosome": "7",
                "start": 140453136,
                "end": 140453136,
                "referenceAllele": "A",
                "variantAllele": "T",
            }
        }
    }
    bad = {"annotation_summary": {"transcriptConsequences": ["missense_variant"]}}
    client = GenomeNexusClient(AnnotatorSettings(), session=_Session(_Response([bad, good])))

    responses = client.annotate_batch([LOCATION])

    assert [response.location_key() for response in responses] == ["7,140453136,140453136,A,T"]
