"""GitHub Actions API client for firmware artifacts."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests

from zmkdeploy.core.errors import ArtifactUnavailableError, GitHubAPIError
from zmkdeploy.core.structlog_logger import get_struct_logger
from zmkdeploy.models.artifact import Artifact, WorkflowRun


if TYPE_CHECKING:
    from zmkdeploy.config.settings import DeploySettings


logger = get_struct_logger(__name__)

ARCHIVE_FILENAME = "firmware.zip"
REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)


class GitHubActionsClient:
    """Client for the GitHub Actions artifacts and workflow runs endpoints."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        download_dir: Path,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.download_dir = download_dir
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "User-Agent": "zmk-deploy",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"

    def _get_full_url(self, endpoint: str) -> str:
        return f"{self.BASE_URL}/repos/{self.owner}/{self.repo}/{endpoint.lstrip('/')}"

    def _handle_response(self, response: requests.Response) -> Any:
        """Return the JSON body or raise GitHubAPIError."""
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            try:
                data = response.json()
            except ValueError:
                data = None
            message = data.get("message") if isinstance(data, dict) else response.text
            raise GitHubAPIError(
                f"GitHub API request failed ({response.status_code}): {message}",
                status_code=response.status_code,
                response_data=data,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            content_preview = response.text[:200] if response.text else "(empty)"
            raise GitHubAPIError(
                f"GitHub API returned invalid JSON. Status: {response.status_code}, "
                f"Content preview: {content_preview}",
                status_code=response.status_code,
            ) from e

    def _get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        url = self._get_full_url(endpoint)
        logger.debug("github_request", url=url, params=params)
        response = self.session.get(url, params=params, timeout=self.timeout)
        return self._handle_response(response)

    def get_workflow_run(self, run_id: int) -> WorkflowRun:
        data = self._get_json(f"actions/runs/{run_id}")
        return WorkflowRun.model_validate(data)

    def get_latest_artifact(self) -> Artifact:
        """Newest artifact, with commit details from its workflow run.

        Raises:
            ArtifactUnavailableError: If there is no artifact, or the run that
                produced the newest one has not completed successfully
        """
        data = self._get_json("actions/artifacts")
        artifacts = data.get("artifacts") or []
        if not artifacts:
            raise ArtifactUnavailableError("No artifacts found")

        artifact = Artifact.model_validate(artifacts[0])
        if artifact.workflow_run_id is None:
            raise ArtifactUnavailableError(
                f"Artifact {artifact.id} has no associated workflow run"
            )

        run = self.get_workflow_run(artifact.workflow_run_id)
        if not run.is_successful:
            raise ArtifactUnavailableError(
                "Latest workflow run is not completed successfully"
            )

        logger.debug(
            "latest_artifact_found",
            artifact_id=artifact.id,
            workflow_run_id=run.id,
            head_sha=run.head_sha,
        )
        return artifact.model_copy(update={"commit": run.commit})

    def get_latest_workflow_run(self, status: str = "in_progress") -> WorkflowRun | None:
        data = self._get_json("actions/runs", params={"status": status})
        runs = data.get("workflow_runs") or []
        if not runs:
            return None
        return WorkflowRun.model_validate(runs[0])

    def download_artifact(self, artifact: Artifact) -> Path:
        """Download the artifact zip into the download directory.

        GitHub answers the zip endpoint with a redirect to a short-lived blob
        URL. The blob is fetched without the API credentials.

        Returns:
            Path of the downloaded archive
        """
        url = self._get_full_url(f"actions/artifacts/{artifact.id}/zip")
        response = self.session.get(url, allow_redirects=False, timeout=self.timeout)

        if response.status_code not in REDIRECT_STATUS_CODES:
            raise GitHubAPIError(
                f"Failed to get download URL: {response.status_code}",
                status_code=response.status_code,
            )

        location = response.headers["Location"]
        self.download_dir.mkdir(parents=True, exist_ok=True)
        zip_path = self.download_dir / ARCHIVE_FILENAME

        with self.session.get(
            location,
            headers={"Authorization": None},  # type: ignore[dict-item]
            stream=True,
            timeout=self.timeout,
        ) as download:
            if download.status_code >= 400:
                raise GitHubAPIError(
                    f"Failed to download artifact: {download.status_code}",
                    status_code=download.status_code,
                )
            with zip_path.open("wb") as f:
                for chunk in download.iter_content(chunk_size=64 * 1024):
                    if chunk:
                        f.write(chunk)

        logger.info("artifact_downloaded", artifact_id=artifact.id, path=str(zip_path))
        return zip_path


def create_github_client(settings: "DeploySettings") -> GitHubActionsClient:
    """Factory function to create a GitHubActionsClient from settings.

    Raises:
        ConfigError: If the repository URL or token is missing or invalid
    """
    owner, repo = settings.github_repository()
    token = settings.require_token()
    return GitHubActionsClient(
        owner=owner,
        repo=repo,
        token=token,
        download_dir=settings.scratch_dir,
    )
