"""HTTP client for the Genome Nexus variant annotation service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlencode

import requests

from .config import AnnotatorSettings
from .errors import AnnotationCallFailed
from .genomic_location import GenomicLocation
from .response import AnnotationResponse

logger = logging.getLogger("mafannotator.client")


class GenomeNexusClient:
    """Thin wrapper over ``requests`` that returns parsed annotation responses.

    Every transport problem (HTTP status, timeout, connection error, bad JSON
    or an empty body) surfaces as :class:`AnnotationCallFailed`.
    """

    def __init__(self, settings: AnnotatorSettings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.settings.isoform_override_source:
            params[self.settings.isoform_query_parameter] = self.settings.isoform_override_source
        if self.settings.enrichment_fields:
            params["fields"] = ",".join(self.settings.enrichment_fields)
        return params

    def url_for(self, location: GenomicLocation) -> str:
        """Human-readable GET URL for ``location``, used in failure reports."""

        source = self.settings.isoform_override_source or "null"
        fields = ",".join(self.settings.enrichment_fields)
        return (
            f"{self.settings.base_url}annotation/genomic/{location.encode()}"
            f"?{self.settings.isoform_query_parameter}={source}&fields={fields}"
        )

    def annotate(self, location: GenomicLocation) -> AnnotationResponse:
        url = f"{self.settings.base_url}annotation/genomic/{location.encode()}"
        payload = self._request("GET", url)
        if not isinstance(payload, dict) or not payload:
            raise AnnotationCallFailed(f"Empty annotation returned for {location.encode()}")
        return self._parse(payload, url)

    def annotate_batch(self, locations: Sequence[GenomicLocation]) -> list[AnnotationResponse]:
        """POST ``locations`` in one request; responses come back unordered and may be partial."""

        if not locations:
            return []
        body = [
            {
                "chromosome": location.chromosome,
                "start": location.start,
                "end": location.end,
                "referenceAllele": location.reference_allele,
                "variantAllele": location.variant_allele,
            }
            for location in locations
        ]
        url = f"{self.settings.base_url}annotation/genomic"
        payload = self._request("POST", url, json=body)
        if not isinstance(payload, list):
            raise AnnotationCallFailed(f"Expected a list of annotations, got {type(payload).__name__}")
        responses = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            try:
                responses.append(self._parse(item, url))
            except AnnotationCallFailed as exc:
                logger.warning("Skipping annotation in batch response: %s", exc)
        return responses

    def fetch_version(self) -> str:
        try:
            payload = self._request("GET", f"{self.settings.base_url}version", with_params=False)
        except AnnotationCallFailed as exc:
            logger.warning("Unable to fetch annotation service version: %s", exc)
            return "unknown"
        if isinstance(payload, dict) and payload.get("version"):
            return str(payload["version"])
        return "unknown"

    @staticmethod
    def _parse(payload: dict[str, Any], url: str) -> AnnotationResponse:
        try:
            return AnnotationResponse.from_payload(payload)
        except (AttributeError, TypeError, ValueError) as exc:
            raise AnnotationCallFailed(f"Malformed annotation returned by {url}: {exc}") from exc

    def _request(self, method: str, url: str, *, with_params: bool = True, **kwargs: Any) -> Any:
        params = self.query_params() if with_params else None
        logger.debug("%s %s?%s", method, url, urlencode(params or {}))
        try:
            response = self.session.request(
                method, url, params=params, timeout=self.settings.timeout_seconds, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as exc:
            raise AnnotationCallFailed(f"Timed out calling {url}") from exc
        except requests.exceptions.HTTPError as exc:
            raise AnnotationCallFailed(f"HTTP error calling {url}: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise AnnotationCallFailed(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise AnnotationCallFailed(f"Undecodable response from {url}") from exc
