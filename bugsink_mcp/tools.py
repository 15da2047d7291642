import logging
from typing import Annotated, Literal

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from bugsink_mcp.models.bugsink import (
    EventListFilter,
    IssueListFilter,
    ProjectCreate,
    ProjectUpdate,
    ProjectVisibility,
    ReleaseCreate,
    TeamCreate,
    TeamUpdate,
    TeamVisibility,
)
from bugsink_mcp.services.bugsink_client import BugsinkClient
from bugsink_mcp.services.formatters import (
    format_event,
    format_event_detail,
    format_issue,
    format_project,
    format_project_summary,
    format_release,
    format_release_summary,
    format_team,
    format_team_summary,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "bugsink-mcp"


class BugsinkTools:
    """MCP tools backed by a BugsinkClient; every tool returns display text"""

    def __init__(self, client: BugsinkClient):
        self.client = client

    def register(self, mcp: FastMCP) -> None:
        tools = [
            (self.test_connection, "Test the connection to the Bugsink instance"),
            (self.list_projects, "List all projects in the Bugsink instance"),
            (self.list_teams, "List all teams in the Bugsink instance"),
            (
                self.get_project,
                "Get detailed information about a specific project including DSN",
            ),
            (
                self.list_issues,
                "List issues for a specific project. "
                "Issues represent grouped error occurrences.",
            ),
            (self.get_issue, "Get detailed information about a specific issue"),
            (
                self.list_events,
                "List events (individual error occurrences) for a specific issue. "
                "Returns basic event info.",
            ),
            (
                self.get_event,
                "Get detailed information about a specific event, "
                "including full stacktrace and context",
            ),
            (
                self.get_stacktrace,
                "Get an event's stacktrace as pre-rendered Markdown. "
                "More readable than raw frame data.",
            ),
            (self.create_project, "Create a new project in a team"),
            (self.update_project, "Update an existing project's settings"),
            (self.create_team, "Create a new team"),
            (self.update_team, "Update an existing team"),
            (
                self.list_releases,
                "List releases for a project. Releases help track which version "
                "introduced or fixed issues.",
            ),
            (self.get_release, "Get detailed information about a specific release"),
            (self.create_release, "Create a new release for a project"),
        ]
        for handler, description in tools:
            mcp.add_tool(handler, name=handler.__name__, description=description)
        logger.info(f"Registered {len(tools)} Bugsink tools")

    async def test_connection(self) -> str:
        result = await self.client.test_connection()
        if result.success:
            return f"Connection successful: {result.message}"
        logger.warning(f"Connection test failed: {result.message}")
        return f"Connection failed: {result.message}"

    async def list_projects(self) -> str:
        page = await self.client.list_projects()
        if not page.results:
            return "No projects found."

        text = "\n".join(format_project_summary(p) for p in page.results)
        return f"Found {len(page.results)} project(s):\n\n{text}"

    async def list_teams(self) -> str:
        page = await self.client.list_teams()
        if not page.results:
            return "No teams found."

        text = "\n".join(format_team_summary(t) for t in page.results)
        return f"Found {len(page.results)} team(s):\n\n{text}"

    async def get_project(
        self, project_id: Annotated[int, Field(description="The project ID to retrieve")]
    ) -> str:
        project = await self.client.get_project(project_id)
        return format_project(project)

    async def list_issues(
        self,
        project_id: Annotated[
            int, Field(description="The project ID to list issues for")
        ],
        status: Annotated[
            str | None,
            Field(
                description="Filter by status (e.g., 'unresolved', 'resolved', 'muted')"
            ),
        ] = None,
        limit: Annotated[
            int, Field(description="Maximum number of issues to return (default: 25)")
        ] = 25,
        sort: Annotated[
            Literal["digest_order", "last_seen"] | None,
            Field(
                description="Sort mode: 'digest_order' or 'last_seen' (default: digest_order)"
            ),
        ] = None,
        order: Annotated[
            Literal["asc", "desc"] | None,
            Field(description="Sort order: 'asc' or 'desc' (default: desc)"),
        ] = None,
    ) -> str:
        logger.info(f"Listing issues for project {project_id}")
        filters = IssueListFilter(status=status, limit=limit, sort=sort, order=order)
        page = await self.client.list_issues(project_id, filters)
        if not page.results:
            return f"No issues found for project {project_id}."

        text = "\n\n".join(format_issue(i) for i in page.results)
        return f"Found {len(page.results)} issue(s):\n\n{text}"

    async def get_issue(
        self, issue_id: Annotated[str, Field(description="The issue ID (UUID) to retrieve")]
    ) -> str:
        issue = await self.client.get_issue(issue_id)
        return format_issue(issue)

    async def list_events(
        self,
        issue_id: Annotated[
            str, Field(description="The issue ID (UUID) to list events for")
        ],
        limit: Annotated[
            int, Field(description="Maximum number of events to return (default: 10)")
        ] = 10,
    ) -> str:
        logger.info(f"Listing events for issue {issue_id}")
        page = await self.client.list_events(issue_id, EventListFilter(limit=limit))
        if not page.results:
            return f"No events found for issue {issue_id}."

        text = "\n\n---\n\n".join(format_event(e) for e in page.results)
        return f"Found {len(page.results)} event(s):\n\n{text}"

    async def get_event(
        self, event_id: Annotated[str, Field(description="The event ID (UUID) to retrieve")]
    ) -> str:
        event = await self.client.get_event(event_id)
        return format_event_detail(event)

    async def get_stacktrace(
        self,
        event_id: Annotated[
            str, Field(description="The event ID (UUID) to get stacktrace for")
        ],
    ) -> str:
        return await self.client.get_event_stacktrace(event_id)

    async def create_project(
        self,
        team_id: Annotated[str, Field(description="The team UUID to create the project in")],
        name: Annotated[str, Field(description="The project name")],
        visibility: Annotated[
            ProjectVisibility, Field(description="Project visibility")
        ] = ProjectVisibility.TEAM_MEMBERS,
        alert_on_new_issue: Annotated[
            bool, Field(description="Send alerts for new issues")
        ] = True,
        alert_on_regression: Annotated[
            bool, Field(description="Send alerts for regressions")
        ] = True,
        alert_on_unmute: Annotated[
            bool, Field(description="Send alerts when issues are unmuted")
        ] = True,
    ) -> str:
        logger.info(f"Creating project '{name}' in team {team_id}")
        project = await self.client.create_project(
            ProjectCreate(
                team=team_id,
                name=name,
                visibility=visibility,
                alert_on_new_issue=alert_on_new_issue,
                alert_on_regression=alert_on_regression,
                alert_on_unmute=alert_on_unmute,
            )
        )
        return (
            "Project created successfully:\n"
            f"  Name: {project.name}\n"
            f"  ID: {project.id}\n"
            f"  DSN: {project.dsn}"
        )

    async def update_project(
        self,
        project_id: Annotated[int, Field(description="The project ID to update")],
        name: Annotated[str | None, Field(description="New project name")] = None,
        visibility: Annotated[
            ProjectVisibility | None, Field(description="Project visibility")
        ] = None,
        alert_on_new_issue: Annotated[
            bool | None, Field(description="Send alerts for new issues")
        ] = None,
        alert_on_regression: Annotated[
            bool | None, Field(description="Send alerts for regressions")
        ] = None,
        alert_on_unmute: Annotated[
            bool | None, Field(description="Send alerts when issues are unmuted")
        ] = None,
        retention_max_event_count: Annotated[
            int | None, Field(description="Maximum events to retain")
        ] = None,
    ) -> str:
        fields = {
            "name": name,
            "visibility": visibility,
            "alert_on_new_issue": alert_on_new_issue,
            "alert_on_regression": alert_on_regression,
            "alert_on_unmute": alert_on_unmute,
            "retention_max_event_count": retention_max_event_count,
        }
        # Only explicitly supplied fields may reach the server
        update = ProjectUpdate(**{k: v for k, v in fields.items() if v is not None})
        logger.info(
            f"Updating project {project_id}: {sorted(update.model_fields_set)}"
        )

        project = await self.client.update_project(project_id, update)
        return (
            "Project updated successfully:\n"
            f"  Name: {project.name}\n"
            f"  ID: {project.id}\n"
            f"  Visibility: {project.visibility}"
        )

    async def create_team(
        self,
        name: Annotated[str, Field(description="The team name")],
        visibility: Annotated[
            TeamVisibility, Field(description="Team visibility")
        ] = TeamVisibility.DISCOVERABLE,
    ) -> str:
        logger.info(f"Creating team '{name}'")
        team = await self.client.create_team(TeamCreate(name=name, visibility=visibility))
        return f"Team created successfully:\n{format_team(team)}"

    async def update_team(
        self,
        team_id: Annotated[str, Field(description="The team UUID to update")],
        name: Annotated[str | None, Field(description="New team name")] = None,
        visibility: Annotated[
            TeamVisibility | None, Field(description="Team visibility")
        ] = None,
    ) -> str:
        fields = {"name": name, "visibility": visibility}
        update = TeamUpdate(**{k: v for k, v in fields.items() if v is not None})
        logger.info(f"Updating team {team_id}: {sorted(update.model_fields_set)}")

        team = await self.client.update_team(team_id, update)
        return f"Team updated successfully:\n{format_team(team)}"

    async def list_releases(
        self,
        project_id: Annotated[
            int, Field(description="The project ID to list releases for")
        ],
    ) -> str:
        page = await self.client.list_releases(project_id)
        if not page.results:
            return f"No releases found for project {project_id}."

        text = "\n".join(format_release_summary(r) for r in page.results)
        return f"Found {len(page.results)} release(s):\n\n{text}"

    async def get_release(
        self,
        release_id: Annotated[str, Field(description="The release ID (UUID) to retrieve")],
    ) -> str:
        release = await self.client.get_release(release_id)
        return format_release(release)

    async def create_release(
        self,
        project_id: Annotated[
            int, Field(description="The project ID to create the release for")
        ],
        version: Annotated[
            str,
            Field(description="The release version string (e.g., '1.0.0', 'v2.3.1')"),
        ],
        timestamp: Annotated[
            str | None,
            Field(description="Release timestamp (ISO 8601 format). Defaults to now."),
        ] = None,
    ) -> str:
        logger.info(f"Creating release '{version}' for project {project_id}")
        release = await self.client.create_release(
            ReleaseCreate(project=project_id, version=version, timestamp=timestamp)
        )
        return (
            "Release created successfully:\n"
            f"  Version: {release.version}\n"
            f"  ID: {release.id}\n"
            f"  Released: {release.date_released}"
        )


def create_server(client: BugsinkClient) -> FastMCP:
    """Create a FastMCP server exposing every Bugsink tool"""
    mcp = FastMCP(SERVER_NAME)
    BugsinkTools(client).register(mcp)
    return mcp
