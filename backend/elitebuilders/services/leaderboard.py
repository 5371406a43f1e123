from datetime import datetime, timezone
from typing import Iterable, List

from ..schemas import LeaderboardEntry, Submission


def _submitted_at(sub: Submission) -> datetime:
    # naive timestamps are taken as UTC so they compare with offset-aware ones
    if sub.created_at.tzinfo is None:
        return sub.created_at.replace(tzinfo=timezone.utc)
    return sub.created_at


def rank_submissions(submissions: Iterable[Submission]) -> List[LeaderboardEntry]:
    """Highest score first; equal scores keep the earlier submission ahead."""
    ordered = sorted(submissions, key=_submitted_at)
    ordered.sort(key=lambda s: s.llm_score, reverse=True)
    return [
        LeaderboardEntry(
            builder_id=sub.builder_id,
            github_username=sub.github_username,
            submission_id=sub.id,
            llm_score=sub.llm_score,
            rank=position,
        )
        for position, sub in enumerate(ordered, start=1)
    ]
