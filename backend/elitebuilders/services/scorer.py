import random
from typing import Optional

from loguru import logger

from ..datasources.base import RepositorySource, parse_github_url
from ..datasources.github_adapter import GitHubAdapter
from ..errors import CompletionApiFailure, InvalidUrl, MalformedResponse
from ..schemas import ScoringResult
from .llm_client import LLMClient
from .mock_scorer import NOT_CONFIGURED, UNAVAILABLE, generate_mock_score
from .prompt_composer import SYSTEM_PROMPT, compose_scoring_prompt
from .scoring import normalize_scores


class SubmissionScorer:
    """Fetch repository metadata, ask the model for a rubric score, validate it.

    Every outcome comes back as a ``ScoringResult``; nothing is raised to the caller.
    Rate limiting and unusable model replies fall back to a mock score.
    """

    def __init__(
        self,
        source: Optional[RepositorySource] = None,
        llm: Optional[LLMClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.source = source or GitHubAdapter()
        self.llm = llm or LLMClient()
        self.rng = rng

    async def score_submission(
        self, github_url: str, challenge_title: str, challenge_description: str
    ) -> ScoringResult:
        if not self.llm.configured:
            logger.warning("[scoring] API key not found, using mock scoring")
            return generate_mock_score(self.rng, reason=NOT_CONFIGURED)

        try:
            ref = parse_github_url(github_url)
        except InvalidUrl as exc:
            logger.warning(f"[scoring] {exc}")
            return ScoringResult.fail("Invalid GitHub URL format")

        try:
            logger.info(f"[scoring] fetching repository content for {ref.full_name}")
            fetched = await self.source.fetch_repository(ref.owner, ref.repo)
            if not fetched.success:
                logger.warning(
                    f"[scoring] failed to fetch {ref.full_name} ({fetched.error}), using basic analysis"
                )
            prompt = compose_scoring_prompt(ref, challenge_title, challenge_description, fetched.data)

            raw = await self.llm.complete_json(SYSTEM_PROMPT, prompt)
            score = normalize_scores(raw)
        except CompletionApiFailure as exc:
            if exc.rate_limited:
                logger.warning(f"[scoring] API limit hit, using mock scoring: {exc}")
                return generate_mock_score(self.rng, reason=UNAVAILABLE)
            logger.error(f"[scoring] completion failed for {ref.full_name}: {exc}")
            return ScoringResult.fail(str(exc))
        except MalformedResponse as exc:
            logger.warning(f"[scoring] unusable model reply, using mock scoring: {exc}")
            return generate_mock_score(self.rng, reason=UNAVAILABLE)
        except Exception as exc:
            logger.exception(f"[scoring] unexpected error scoring {ref.full_name}")
            return ScoringResult.fail(str(exc) or type(exc).__name__)

        logger.info(f"[scoring] {ref.full_name} scored {score.total}/100")
        return ScoringResult.ok(score, used_mock=False)
