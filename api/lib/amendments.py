"""
Constitutional amendment pipeline.

Fetches House and Senate joint resolutions for a Congress, keeps the ones
proposing a constitutional amendment, enriches them with bill detail and
cosponsor counts, and assembles a digest sorted by introduction date.

Every upstream failure is absorbed here: a failed list fetch contributes no
bills, a failed or malformed detail drops that one resolution, and a failed
cosponsor fetch counts as zero cosponsors.
"""

import logging
import concurrent.futures
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests
from pydantic import ValidationError

from .congress_api_client import CongressAPIClient, CongressAPIError
from .response_models import AmendmentDigest, AmendmentRecord, Sponsor

logger = logging.getLogger(__name__)

RESOLUTION_TYPES = ("hjres", "sjres")
AMENDMENT_MARKER = "Proposing an amendment to the Constitution"
CONGRESS_GOV_URL = "https://www.congress.gov"
UNKNOWN = "Unknown"
DEFAULT_STATUS = "Introduced"

# Both network and upstream failures degrade rather than propagate
UPSTREAM_ERRORS = (CongressAPIError, requests.exceptions.RequestException)

# Raised while mapping a detail payload of unexpected shape
MALFORMED_DETAIL_ERRORS = (AttributeError, KeyError, TypeError, ValueError, ValidationError)


# ============================================================================
# Fetch
# ============================================================================


def fetch_resolutions(
    client: CongressAPIClient, congress: int, bill_type: str, limit: int = 250
) -> List[Dict[str, Any]]:
    """Fetch one page of joint resolutions of ``bill_type``.

    Returns an empty list when the request fails or the payload carries no
    ``bills``; never raises for upstream errors.
    """
    try:
        data = client.list_bills(congress, bill_type, limit=limit)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Error fetching {bill_type}: {e}")
        return []

    return data.get("bills") or []


def fetch_all_resolutions(
    client: CongressAPIClient, congress: int, limit: int = 250
) -> List[Dict[str, Any]]:
    """Fetch House and Senate joint resolutions concurrently.

    Results are concatenated House first, then Senate.
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(RESOLUTION_TYPES)) as executor:
        futures = [
            executor.submit(fetch_resolutions, client, congress, bill_type, limit)
            for bill_type in RESOLUTION_TYPES
        ]
        results = [future.result() for future in futures]

    counts = ", ".join(
        f"{len(bills)} {bill_type}" for bill_type, bills in zip(RESOLUTION_TYPES, results)
    )
    logger.info(f"Fetched {counts}")

    return [bill for bills in results for bill in bills]


# ============================================================================
# Filter
# ============================================================================


def is_constitutional_amendment(summary: Dict[str, Any]) -> bool:
    """True if the summary title marks a proposed constitutional amendment."""
    title = summary.get("title")
    return isinstance(title, str) and bool(title) and AMENDMENT_MARKER in title


def filter_amendments(summaries: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only the summaries proposing a constitutional amendment."""
    return [summary for summary in summaries if is_constitutional_amendment(summary)]


# ============================================================================
# Enrich
# ============================================================================


def fetch_bill_detail(
    client: CongressAPIClient, summary: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    """Fetch the full bill record behind a list summary, or None on failure."""
    number = summary.get("number")
    url = summary.get("url")
    if not url:
        logger.error(f"Detail fetch skipped for {number}: no detail URL")
        return None

    try:
        data = client.get_bill_by_url(url)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Detail fetch failed for {number}: {e}")
        return None

    detail = data.get("bill")
    if not isinstance(detail, dict):
        logger.error(f"Detail fetch for {number} returned no bill record")
        return None
    return detail


def fetch_cosponsor_count(
    client: CongressAPIClient, congress: int, summary: Dict[str, Any]
) -> int:
    """Count cosponsors of a bill; any failure counts as zero.

    Uses the total from ``pagination.count`` when present, since the list
    itself only holds the first page of cosponsors.
    """
    try:
        data = client.get_bill_cosponsors(congress, summary["type"], summary["number"])
    except (KeyError, AttributeError) + UPSTREAM_ERRORS as e:
        logger.debug(f"Cosponsor fetch failed for {summary.get('number')}: {e}")
        return 0

    pagination = data.get("pagination")
    if isinstance(pagination, dict):
        total = pagination.get("count")
        if isinstance(total, int) and not isinstance(total, bool) and total >= 0:
            return total

    cosponsors = data.get("cosponsors")
    return len(cosponsors) if isinstance(cosponsors, list) else 0


def enrich_candidates(
    client: CongressAPIClient,
    congress: int,
    candidates: List[Dict[str, Any]],
    max_workers: int = 16,
) -> List[Tuple[Dict[str, Any], Optional[Dict[str, Any]], int]]:
    """Fetch detail and cosponsor count for every candidate concurrently.

    Returns ``(summary, detail, cosponsors_count)`` tuples in candidate order.
    ``detail`` is None where the detail fetch failed.
    """
    if not candidates:
        return []

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        pending = [
            (
                summary,
                executor.submit(fetch_bill_detail, client, summary),
                executor.submit(fetch_cosponsor_count, client, congress, summary),
            )
            for summary in candidates
        ]
        enriched = [
            (summary, detail_future.result(), cosponsor_future.result())
            for summary, detail_future, cosponsor_future in pending
        ]

    return enriched


# ============================================================================
# Assemble
# ============================================================================


def first_present(*values: Any, default: Any = None) -> Any:
    """Return the first value that is neither None nor an empty string.

    Values are checked left to right; ``default`` is returned when none
    qualifies. Falsy values such as ``0`` count as present.
    """
    for value in values:
        if value is not None and value != "":
            return value
    return default


def sponsor_from_detail(detail: Dict[str, Any]) -> Sponsor:
    """Build the primary sponsor from a bill detail record.

    Only the first entry of ``sponsors`` is used. Precedence:
        name: fullName, then name, then "Unknown"
        party, state: the field, then "Unknown"
        district: the field, then None
    """
    sponsors = detail.get("sponsors")
    if isinstance(sponsors, list) and sponsors and isinstance(sponsors[0], dict):
        sponsor = sponsors[0]
    else:
        sponsor = {}

    return Sponsor(
        name=first_present(sponsor.get("fullName"), sponsor.get("name"), default=UNKNOWN),
        party=first_present(sponsor.get("party"), default=UNKNOWN),
        state=first_present(sponsor.get("state"), default=UNKNOWN),
        district=first_present(sponsor.get("district"), default=None),
    )


def ordinal(n: int) -> str:
    """119 -> '119th', 121 -> '121st', 112 -> '112th'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def congress_url(congress: int, bill_type: str, bill_number: Any) -> str:
    """Public congress.gov page for a bill.

    The type is lower-cased with its first '.' replaced by '-'.
    """
    slug = str(bill_type).lower().replace(".", "-", 1)
    return f"{CONGRESS_GOV_URL}/bill/{ordinal(congress)}-congress/{slug}/{bill_number}"


def assemble_record(
    summary: Dict[str, Any],
    detail: Dict[str, Any],
    cosponsors_count: int,
    congress: int,
) -> AmendmentRecord:
    """Map an enriched resolution onto the output record.

    Status falls back to "Introduced" and status date to the introduction
    date when the bill has no latest action.
    """
    introduced_date = detail.get("introducedDate")
    latest_action = detail.get("latestAction")
    if not isinstance(latest_action, dict):
        latest_action = {}

    return AmendmentRecord(
        number=f"{summary.get('type')} {summary.get('number')}",
        title=summary.get("title") or "",
        introduced_date=introduced_date,
        sponsor=sponsor_from_detail(detail),
        status=first_present(latest_action.get("text"), default=DEFAULT_STATUS),
        status_date=first_present(latest_action.get("actionDate"), default=introduced_date),
        cosponsors_count=max(cosponsors_count, 0),
        congress_url=congress_url(congress, summary.get("type", ""), summary.get("number")),
    )


def try_assemble_record(
    summary: Dict[str, Any],
    detail: Optional[Dict[str, Any]],
    cosponsors_count: int,
    congress: int,
) -> Optional[AmendmentRecord]:
    """Assemble a record, or None when the detail is missing or malformed."""
    if detail is None:
        return None
    try:
        return assemble_record(summary, detail, cosponsors_count, congress)
    except MALFORMED_DETAIL_ERRORS as e:
        logger.error(f"Malformed detail for {summary.get('number')}: {e}")
        return None


# ============================================================================
# Digest
# ============================================================================


def _utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_digest(
    records: Iterable[Optional[AmendmentRecord]],
    congress: int,
    now: Optional[datetime] = None,
) -> AmendmentDigest:
    """Drop failed records and sort the rest by introduction date, newest first.

    Records without an introduction date sort last.
    """
    valid = [record for record in records if record is not None]
    valid.sort(
        key=lambda record: (record.introduced_date is not None, record.introduced_date or ""),
        reverse=True,
    )

    return AmendmentDigest(
        count=len(valid),
        congress=congress,
        last_updated=_utc_timestamp(now),
        amendments=valid,
    )


def collect_amendments(
    client: CongressAPIClient,
    congress: int,
    list_limit: int = 250,
    max_workers: int = 16,
    now: Optional[datetime] = None,
) -> AmendmentDigest:
    """Run the full fetch, filter, enrich, assemble and sort pipeline."""
    summaries = fetch_all_resolutions(client, congress, limit=list_limit)

    candidates = filter_amendments(summaries)
    logger.info(f"Filtered to {len(candidates)} constitutional amendments")

    records = [
        try_assemble_record(summary, detail, cosponsors_count, congress)
        for summary, detail, cosponsors_count in enrich_candidates(
            client, congress, candidates, max_workers=max_workers
        )
    ]

    digest = build_digest(records, congress, now=now)
    dropped = len(candidates) - digest.count
    if dropped:
        logger.warning(f"Dropped {dropped} amendments with failed or malformed details")

    return digest
