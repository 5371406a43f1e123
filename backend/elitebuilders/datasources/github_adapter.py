import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..errors import MetadataFetchFailure
from ..schemas import MetadataFetchResult, RepositoryMetadata
from .base import RepositorySource

README_MAX_CHARS = 3000
FILE_LIST_MAX = 50
MANIFEST_PATH = "package.json"
RAW_ACCEPT = "application/vnd.github.raw"


class GitHubAdapter(RepositorySource):
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "EliteBuilders-Scoring",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        client_kwargs: Dict[str, Any] = {
            "base_url": str(self.settings.github_base_url),
            "headers": headers,
            "timeout": self.settings.github_timeout_seconds,
        }
        if self.settings.github_proxy:
            client_kwargs["proxy"] = self.settings.github_proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**client_kwargs)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, **kwargs) -> httpx.Response:
        resp = await self.client.get(path, **kwargs)
        resp.raise_for_status()
        return resp

    async def get_summary(self, owner: str, repo: str) -> Dict[str, Any]:
        """Repository summary. The only lookup whose failure is fatal."""
        try:
            resp = await self._get(f"/repos/{owner}/{repo}")
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise MetadataFetchFailure(f"GitHub API error: {status}", status_code=status) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise MetadataFetchFailure(
                f"GitHub request error: {type(exc).__name__} {exc!r}"
            ) from exc
        try:
            item = resp.json()
        except ValueError as exc:
            raise MetadataFetchFailure("GitHub API returned an unreadable summary") from exc
        if not isinstance(item, dict):
            raise MetadataFetchFailure("GitHub API returned an unexpected summary")
        return item

    async def get_readme(self, owner: str, repo: str) -> str:
        try:
            resp = await self._get(f"/repos/{owner}/{repo}/readme", headers={"Accept": RAW_ACCEPT})
        except httpx.HTTPError as exc:
            logger.warning(f"[github] no README for {owner}/{repo}: {exc}")
            return ""
        return resp.text[:README_MAX_CHARS]

    async def get_file_list(self, owner: str, repo: str, branch: Optional[str]) -> List[str]:
        try:
            resp = await self._get(
                f"/repos/{owner}/{repo}/git/trees/{branch or 'HEAD'}",
                params={"recursive": "1"},
            )
            tree = resp.json().get("tree") or []
            paths = [item["path"] for item in tree if item.get("type") == "blob" and item.get("path")]
        except (httpx.HTTPError, ValueError, AttributeError, KeyError) as exc:
            logger.warning(f"[github] could not fetch file tree for {owner}/{repo}: {exc}")
            return []
        return paths[:FILE_LIST_MAX]

    async def get_manifest(self, owner: str, repo: str) -> Optional[Dict[str, Any]]:
        try:
            resp = await self._get(
                f"/repos/{owner}/{repo}/contents/{MANIFEST_PATH}",
                headers={"Accept": RAW_ACCEPT},
            )
            manifest = json.loads(resp.text)
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            logger.debug(f"[github] no {MANIFEST_PATH} for {owner}/{repo}: {exc}")
            return None
        return manifest if isinstance(manifest, dict) else None

    async def fetch_repository(self, owner: str, repo: str) -> MetadataFetchResult:
        """Summary is required; README, file tree and manifest degrade to empty."""
        try:
            item = await self.get_summary(owner, repo)
        except MetadataFetchFailure as exc:
            logger.warning(f"[github] summary fetch failed for {owner}/{repo}: {exc}")
            return MetadataFetchResult(success=False, error=str(exc))

        readme, files, manifest = await asyncio.gather(
            self.get_readme(owner, repo),
            self.get_file_list(owner, repo, item.get("default_branch")),
            self.get_manifest(owner, repo),
        )
        try:
            metadata = RepositoryMetadata(
                name=item.get("name") or repo,
                description=item.get("description") or "",
                language=item.get("language") or "Unknown",
                topics=item.get("topics") or [],
                stars=item.get("stargazers_count") or 0,
                forks=item.get("forks_count") or 0,
                readme=readme,
                files=files,
                package_json=manifest,
                created_at=item.get("created_at"),
                updated_at=item.get("updated_at"),
            )
        except ValidationError as exc:
            logger.warning(f"[github] unexpected summary fields for {owner}/{repo}: {exc}")
            return MetadataFetchResult(success=False, error="GitHub API returned an unexpected summary")
        logger.info(
            f"[github] fetched {owner}/{repo}: readme={len(readme)} chars, "
            f"files={len(files)}, manifest={'yes' if manifest is not None else 'no'}"
        )
        return MetadataFetchResult(success=True, data=metadata)
