"""
Submission feed client.

Fetches a user's recent accepted submissions from the LeetCode GraphQL API.
The feed is slow and rate-limited at times; every call carries an explicit
timeout and any failure surfaces as UpstreamUnavailable.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Protocol

import httpx
import structlog

from core.config import settings
from core.exceptions import UpstreamUnavailable
from models.streak import SubmissionEvent

logger = structlog.get_logger(__name__)


RECENT_AC_SUBMISSIONS_QUERY = """
query recentAcSubmissions($username: String!, $limit: Int!) {
    recentAcSubmissionList(username: $username, limit: $limit) {
        id
        title
        titleSlug
        timestamp
    }
}
"""


class SubmissionFeed(Protocol):
    """Anything that can list a user's accepted submissions."""

    async def fetch_submissions(self, username: str) -> list[SubmissionEvent]: ...


class LeetCodeSubmissionFeed:
    """SubmissionFeed backed by the LeetCode GraphQL endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: Optional[str] = None,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.http_client = http_client
        self.url = url or settings.SUBMISSION_FEED_URL
        self.limit = limit or settings.SUBMISSION_FEED_LIMIT
        self.timeout = timeout or settings.SUBMISSION_FEED_TIMEOUT_SECONDS

    async def fetch_submissions(self, username: str) -> list[SubmissionEvent]:
        """
        Fetch accepted submissions for ``username``.

        Raises:
            UpstreamUnavailable: on timeout, transport error, non-2xx status
                or a body that is not JSON.
        """
        try:
            response = await self.http_client.post(
                self.url,
                json={
                    "query": RECENT_AC_SUBMISSIONS_QUERY,
                    "variables": {"username": username, "limit": self.limit},
                },
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": settings.SUBMISSION_FEED_USER_AGENT,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.warning("submission_feed_timeout", username=username, timeout=self.timeout)
            raise UpstreamUnavailable("Timed out fetching submissions from LeetCode") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                "submission_feed_http_error",
                username=username,
                status_code=e.response.status_code,
            )
            raise UpstreamUnavailable(
                f"LeetCode API returned status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("submission_feed_error", username=username, error=str(e))
            raise UpstreamUnavailable(f"Failed to fetch submissions from LeetCode: {e}") from e

        try:
            submissions = _extract_submissions(payload)
        except UpstreamUnavailable:
            logger.warning("submission_feed_malformed_payload", username=username)
            raise
        if submissions is None:
            logger.info("submission_feed_no_submissions", username=username)
            return []

        events = [event for event in (_to_event(raw) for raw in submissions) if event is not None]
        logger.debug("submission_feed_fetched", username=username, count=len(events))
        return events


def _extract_submissions(payload: Any) -> Optional[list[Any]]:
    """
    Pull the submission list out of a GraphQL response body.

    Returns None when there is no list (unknown user, GraphQL errors without
    data). A body that does not have the GraphQL response shape raises
    UpstreamUnavailable.
    """
    if not isinstance(payload, dict):
        raise UpstreamUnavailable("Unexpected response body from LeetCode")
    data = payload.get("data")
    if data is None:
        return None
    if not isinstance(data, dict):
        raise UpstreamUnavailable("Unexpected response body from LeetCode")
    submissions = data.get("recentAcSubmissionList")
    if submissions is None:
        return None
    if not isinstance(submissions, list):
        raise UpstreamUnavailable("Unexpected response body from LeetCode")
    return submissions


def _to_event(raw: dict[str, Any]) -> Optional[SubmissionEvent]:
    """Convert one GraphQL submission entry; entries without a usable timestamp are skipped."""
    try:
        occurred_at = datetime.fromtimestamp(int(raw["timestamp"]), tz=timezone.utc)
    except (KeyError, TypeError, ValueError, OverflowError, OSError):
        logger.warning("submission_feed_bad_entry", entry_id=raw.get("id") if isinstance(raw, dict) else None)
        return None
    problem_id = str(raw.get("titleSlug") or raw.get("id") or "")
    return SubmissionEvent(problem_id=problem_id, occurred_at=occurred_at)
