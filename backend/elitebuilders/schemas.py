from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .services.submissions import (
    MAX_VIDEO_FILE_BYTES,
    validate_github_url,
    validate_video_url,
)


class ScoreBreakdown(BaseModel):
    """Five-part rubric score. ``total`` is always the sum of the parts."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    functionality: int = Field(ge=0, le=30)
    code_quality: int = Field(ge=0, le=30, alias="codeQuality")
    documentation: int = Field(ge=0, le=20)
    innovation: int = Field(ge=0, le=10)
    uiux: int = Field(ge=0, le=10)
    total: int = Field(ge=0, le=100)
    feedback: str

    @model_validator(mode="after")
    def _total_matches_parts(self) -> "ScoreBreakdown":
        expected = (
            self.functionality
            + self.code_quality
            + self.documentation
            + self.innovation
            + self.uiux
        )
        if self.total != expected:
            raise ValueError(f"total {self.total} does not equal sum of sub-scores {expected}")
        return self

    @classmethod
    def from_components(
        cls,
        functionality: int,
        code_quality: int,
        documentation: int,
        innovation: int,
        uiux: int,
        feedback: str,
    ) -> "ScoreBreakdown":
        return cls(
            functionality=functionality,
            code_quality=code_quality,
            documentation=documentation,
            innovation=innovation,
            uiux=uiux,
            total=functionality + code_quality + documentation + innovation + uiux,
            feedback=feedback,
        )


class ScoringResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    score: Optional[ScoreBreakdown] = None
    error: Optional[str] = None
    used_mock: bool = Field(default=False, alias="usedMock")

    @classmethod
    def ok(cls, score: ScoreBreakdown, used_mock: bool = False) -> "ScoringResult":
        return cls(success=True, score=score, used_mock=used_mock)

    @classmethod
    def fail(cls, message: str) -> "ScoringResult":
        return cls(success=False, error=message or "Failed to score submission")


class RepositoryMetadata(BaseModel):
    """Transient snapshot of a repository used to build the scoring prompt."""

    name: str
    description: str = ""
    language: str = "Unknown"
    topics: List[str] = []
    stars: int = 0
    forks: int = 0
    readme: str = ""
    files: List[str] = []
    package_json: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MetadataFetchResult(BaseModel):
    success: bool
    data: Optional[RepositoryMetadata] = None
    error: Optional[str] = None


class ScoreRequest(BaseModel):
    github_url: str
    challenge_title: str
    challenge_description: str = ""


class SubmissionRequest(BaseModel):
    github_url: str
    demo_video_url: Optional[str] = None
    video_file_size: Optional[int] = None  # bytes, when uploading a file

    @field_validator("github_url")
    @classmethod
    def _check_github_url(cls, value: str) -> str:
        if not validate_github_url(value):
            raise ValueError(
                "Please enter a valid GitHub repository URL (e.g., https://github.com/username/repo)"
            )
        return value

    @field_validator("demo_video_url")
    @classmethod
    def _check_video_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("Please enter a video URL")
        if not validate_video_url(value):
            raise ValueError(
                "Please enter a valid video URL (YouTube, Vimeo, Loom, or direct video link)"
            )
        return value

    @field_validator("video_file_size")
    @classmethod
    def _check_video_size(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value > MAX_VIDEO_FILE_BYTES:
            raise ValueError("Video file must be less than 100MB")
        return value

    @model_validator(mode="after")
    def _one_video_source(self) -> "SubmissionRequest":
        if self.demo_video_url is None and self.video_file_size is None:
            raise ValueError("Please provide a demo video URL or upload a video file")
        if self.demo_video_url is not None and self.video_file_size is not None:
            raise ValueError("Provide a demo video URL or a video file, not both")
        return self


class Submission(BaseModel):
    id: str
    challenge_id: str
    builder_id: str
    github_url: str
    demo_video_url: str = ""
    llm_score: int = 0
    created_at: datetime
    github_username: Optional[str] = None


class LeaderboardEntry(BaseModel):
    builder_id: str
    github_username: Optional[str] = None
    submission_id: str
    llm_score: int
    rank: int
