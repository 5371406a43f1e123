from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import get_settings
from .schemas import (
    LeaderboardEntry,
    ScoreRequest,
    ScoringResult,
    Submission,
    SubmissionRequest,
)
from .services.leaderboard import rank_submissions
from .services.scorer import SubmissionScorer

settings = get_settings()
app = FastAPI(title="EliteBuilders Scoring", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

scorer = SubmissionScorer()


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post("/score", response_model=ScoringResult)
async def score(body: ScoreRequest):
    # failures are reported in the body; the caller decides whether to persist a zero
    result = await scorer.score_submission(
        body.github_url, body.challenge_title, body.challenge_description
    )
    if not result.success:
        logger.warning(f"[api] scoring failed for {body.github_url}: {result.error}")
    return result


@app.post("/submissions/validate")
async def validate_submission(body: SubmissionRequest):
    return {"valid": True, "github_url": body.github_url}


@app.post("/leaderboard", response_model=List[LeaderboardEntry])
async def leaderboard(submissions: List[Submission]):
    return rank_submissions(submissions)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
