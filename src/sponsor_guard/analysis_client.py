"""
Remote classifier client.

Sends one email to the analysis endpoint and maps the answer onto an
AnalysisResult. Failures never reach the caller: they are logged and turned
into a locally synthesized fallback result.
"""

from __future__ import annotations

import httpx

from .constants import (
    ANALYSIS_ENDPOINT,
    DEFAULT_RISK_SCORE,
    FALLBACK_FLAG_MESSAGE,
    HEALTH_PROBE_CONTENT,
    HEALTHY_STATUS_CODES,
)
from .heuristics import find_company, find_website
from .logging import get_logger
from .models import (
    AnalysisResult,
    EmailRecord,
    ExtractedInfo,
    Flag,
    FlagKind,
    RiskStatus,
)
from .prefilter import is_candidate

log = get_logger(__name__)


def fallback_result(record: EmailRecord) -> AnalysisResult:
    """Best-effort result used when the endpoint cannot be reached.

    The company name is only filled in for keyword candidates so the
    reconciled verdict matches the prefilter.
    """
    candidate = is_candidate(record)
    return AnalysisResult(
        risk_score=DEFAULT_RISK_SCORE,
        status=RiskStatus.WARNING,
        is_sponsor=candidate,
        extracted_info=ExtractedInfo(
            company_name=find_company(record.body) if candidate else None,
            website=find_website(record.body),
            contact_person=record.sender or None,
        ),
        flags=[Flag(kind=FlagKind.CAUTION, message=FALLBACK_FLAG_MESSAGE)],
        fallback=True,
    )


class AnalysisClient:
    """Async HTTP client for the remote analysis endpoint."""

    def __init__(
        self,
        endpoint: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint or ANALYSIS_ENDPOINT
        self._client = httpx.AsyncClient(transport=transport)

    async def analyze(self, record: EmailRecord) -> AnalysisResult:
        """Classify an email; returns the fallback result on any failure."""
        try:
            response = await self._client.post(
                self.endpoint,
                json={"emailContent": record.to_payload()},
            )
            response.raise_for_status()
            result = AnalysisResult.from_dict(response.json())

        except httpx.HTTPStatusError as e:
            log.warning(
                "analysis_http_error",
                identity=record.identity,
                status=e.response.status_code,
            )
            return fallback_result(record)

        except httpx.HTTPError as e:
            log.warning("analysis_request_error", identity=record.identity, error=str(e))
            return fallback_result(record)

        except (ValueError, TypeError, OverflowError) as e:
            log.warning("analysis_bad_response", identity=record.identity, error=str(e))
            return fallback_result(record)

        log.info(
            "analysis_success",
            identity=record.identity,
            risk_score=result.risk_score,
            status=result.status.value,
        )
        return result

    async def health_check(self) -> bool:
        """Check whether the endpoint answers; a 400 for the probe counts as online."""
        try:
            response = await self._client.post(
                self.endpoint,
                json={"emailContent": HEALTH_PROBE_CONTENT},
            )
        except httpx.HTTPError as e:
            log.warning("analysis_health_check_failed", error=str(e))
            return False
        return response.status_code in HEALTHY_STATUS_CODES

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AnalysisClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.aclose()
