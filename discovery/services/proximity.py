"""Nearby-user ranking — storage-independent filter/sort pipeline

Every storage backend feeds its raw candidate rows through
`rank_candidates`; none of them computes distances on its own.
"""
import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Optional

from ..config import DEFAULT_MAX_DISTANCE_MILES
from .geo import Point, haversine_km, km_to_miles, round_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    id: Hashable
    location: Optional[Point]
    discoverable: bool = True
    max_distance: Optional[float] = None  # candidate's own radius; not used for filtering
    payload: Any = None                   # source record, handed back untouched


@dataclass(frozen=True)
class RankedCandidate:
    candidate: Candidate
    distance_miles: float


def effective_max_distance(value: Optional[float]) -> float:
    """Unset or non-positive preferences fall back to the default radius"""
    if value is None or value <= 0:
        return DEFAULT_MAX_DISTANCE_MILES
    return float(value)


def rank_candidates(
    origin: Optional[Point],
    max_distance: float,
    candidates: Iterable[Candidate],
    requester_id: Optional[Hashable] = None,
) -> List[RankedCandidate]:
    """Filter candidates to those within `max_distance` miles of `origin`, nearest first.

    Distances are rounded to one decimal before the radius check, so a
    candidate whose rounded distance equals the radius is kept. Ties keep
    input order. Returns an empty list when `origin` is None.
    """
    if origin is None:
        return []

    results = []
    for cand in candidates:
        if requester_id is not None and cand.id == requester_id:
            continue
        if not cand.discoverable or cand.location is None:
            continue
        miles = round_distance(km_to_miles(haversine_km(origin, cand.location)))
        # TODO: only the requester's radius applies; decide with product
        # whether cand.max_distance should also cap who can see them.
        if miles > max_distance:
            continue
        results.append(RankedCandidate(candidate=cand, distance_miles=miles))

    # list.sort is stable
    results.sort(key=lambda r: r.distance_miles)
    return results


def rank_nearby(repository, requester_id: Hashable) -> List[RankedCandidate]:
    """Rank the users near `requester_id` using its stored location and radius.

    Unknown requesters and requesters without a location get an empty list;
    telling those apart from "nobody nearby" is up to the caller.
    """
    user = repository.get_user(requester_id)
    if user is None or user.location is None:
        return []

    me = user.to_candidate()
    radius = effective_max_distance(user.max_distance)
    pool = [u.to_candidate() for u in repository.list_candidates(requester_id)]
    ranked = rank_candidates(me.location, radius, pool, requester_id=requester_id)
    logger.debug(
        f"nearby: user={requester_id} radius={radius}mi pool={len(pool)} hits={len(ranked)}"
    )
    return ranked
