"""
Bugsink API client for projects, teams, issues, events and releases
"""

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from bugsink_mcp.exceptions import (
    BugsinkAPIError,
    BugsinkConnectionError,
    BugsinkError,
    BugsinkResponseError,
)
from bugsink_mcp.models.bugsink import (
    ConnectionResult,
    Event,
    EventListFilter,
    Issue,
    IssueListFilter,
    Page,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Release,
    ReleaseCreate,
    Team,
    TeamCreate,
    TeamUpdate,
)
from bugsink_mcp.models.config import BugsinkConfig

logger = logging.getLogger(__name__)


class BugsinkClient:
    """Client for Bugsink's canonical REST API"""

    def __init__(self, config: BugsinkConfig):
        self.config = config
        self.base_url = f"{config.base_url}/api/canonical/0"
        self.headers = {
            "Authorization": f"Bearer {config.token}",
            "Content-Type": "application/json",
        }
        self.timeout = aiohttp.ClientTimeout(total=config.timeout)

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        expect_json: bool = True,
    ) -> Any:
        """Make one authenticated request to the Bugsink API"""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url} params={params}")

        try:
            async with aiohttp.ClientSession(
                headers=self.headers, timeout=self.timeout
            ) as session:
                async with session.request(
                    method, url, params=params, json=json
                ) as response:
                    if not 200 <= response.status < 300:
                        body = await response.text()
                        logger.error(
                            f"Bugsink API error on {method} {endpoint}: {response.status}"
                        )
                        raise BugsinkAPIError(response.status, body)

                    if not expect_json:
                        return await response.text()

                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        logger.error(f"Invalid JSON from {method} {endpoint}: {e}")
                        raise BugsinkResponseError(
                            f"Invalid JSON in Bugsink response to {method} {endpoint}: {e}"
                        ) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Could not reach Bugsink at {self.config.base_url}: {e}")
            raise BugsinkConnectionError(
                f"Could not reach Bugsink at {self.config.base_url}: {e}"
            ) from e

    # Projects

    async def list_projects(self) -> Page[Project]:
        data = await self._make_request("GET", "/projects/")
        return Page[Project].model_validate(data)

    async def get_project(self, project_id: int) -> Project:
        data = await self._make_request("GET", f"/projects/{project_id}/")
        return Project.model_validate(data)

    async def create_project(self, project: ProjectCreate) -> Project:
        data = await self._make_request(
            "POST", "/projects/", json=project.to_payload()
        )
        return Project.model_validate(data)

    async def update_project(self, project_id: int, update: ProjectUpdate) -> Project:
        data = await self._make_request(
            "PATCH", f"/projects/{project_id}/", json=update.to_payload()
        )
        return Project.model_validate(data)

    # Teams

    async def list_teams(self) -> Page[Team]:
        data = await self._make_request("GET", "/teams/")
        return Page[Team].model_validate(data)

    async def create_team(self, team: TeamCreate) -> Team:
        data = await self._make_request("POST", "/teams/", json=team.to_payload())
        return Team.model_validate(data)

    async def update_team(self, team_id: str, update: TeamUpdate) -> Team:
        data = await self._make_request(
            "PATCH", f"/teams/{team_id}/", json=update.to_payload()
        )
        return Team.model_validate(data)

    # Issues

    async def list_issues(
        self, project_id: int, filters: IssueListFilter | None = None
    ) -> Page[Issue]:
        """List issues of a project, sending only the filters that are set"""
        params: dict[str, Any] = {"project": project_id}
        if filters:
            params.update(filters.to_params())

        data = await self._make_request("GET", "/issues/", params=params)
        return Page[Issue].model_validate(data)

    async def get_issue(self, issue_id: str) -> Issue:
        data = await self._make_request("GET", f"/issues/{issue_id}/")
        return Issue.model_validate(data)

    # Events

    async def list_events(
        self, issue_id: str, filters: EventListFilter | None = None
    ) -> Page[Event]:
        params: dict[str, Any] = {"issue": issue_id}
        if filters:
            params.update(filters.to_params())

        data = await self._make_request("GET", "/events/", params=params)
        return Page[Event].model_validate(data)

    async def get_event(self, event_id: str) -> Event:
        data = await self._make_request("GET", f"/events/{event_id}/")
        return Event.model_validate(data)

    async def get_event_stacktrace(self, event_id: str) -> str:
        """Get the server-rendered Markdown stacktrace of an event"""
        return await self._make_request(
            "GET", f"/events/{event_id}/stacktrace/", expect_json=False
        )

    # Releases

    async def list_releases(self, project_id: int) -> Page[Release]:
        data = await self._make_request(
            "GET", "/releases/", params={"project": project_id}
        )
        return Page[Release].model_validate(data)

    async def get_release(self, release_id: str) -> Release:
        data = await self._make_request("GET", f"/releases/{release_id}/")
        return Release.model_validate(data)

    async def create_release(self, release: ReleaseCreate) -> Release:
        data = await self._make_request(
            "POST", "/releases/", json=release.to_payload()
        )
        return Release.model_validate(data)

    async def test_connection(self) -> ConnectionResult:
        """Check connectivity by listing projects; never raises"""
        try:
            projects = await self.list_projects()
        except (BugsinkError, ValidationError) as e:
            return ConnectionResult(success=False, message=str(e))

        return ConnectionResult(
            success=True,
            message=f"Connected successfully. Found {len(projects.results)} project(s).",
        )
