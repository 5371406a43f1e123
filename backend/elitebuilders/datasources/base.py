from typing import NamedTuple, Protocol
from urllib.parse import urlparse

from ..errors import InvalidUrl
from ..schemas import MetadataFetchResult


class RepoRef(NamedTuple):
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


def parse_github_url(url: str) -> RepoRef:
    """Split ``https://github.com/<owner>/<repo>[/...]`` into owner and repo."""
    try:
        parsed = urlparse(url.strip())
    except ValueError as exc:
        raise InvalidUrl(url) from exc
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrl(url)
    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        raise InvalidUrl(url)
    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InvalidUrl(url)
    return RepoRef(owner=owner, repo=repo)


class RepositorySource(Protocol):
    async def fetch_repository(self, owner: str, repo: str) -> MetadataFetchResult:
        ...
