"""
Text formatting of Bugsink entities for display to a language model
"""

import json
from typing import Any

from bugsink_mcp.models.bugsink import (
    Event,
    ExceptionValue,
    Issue,
    Project,
    Release,
    StackFrame,
    Team,
)

LEGACY_MAX_FRAMES = 10
DETAIL_MAX_FRAMES = 15


def _bool(value: bool | None) -> str:
    if value is None:
        return "unknown"
    return "true" if value else "false"


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def most_recent_frames(frames: list[StackFrame], max_frames: int) -> list[StackFrame]:
    """Return frames most-recent-first, capped at max_frames"""
    return list(reversed(frames))[:max_frames]


def format_frame(frame: StackFrame, indent: str = "      ") -> list[str]:
    loc = f":{frame.lineno}" if frame.lineno else ""
    col = f":{frame.colno}" if frame.colno else ""
    filename = frame.filename or frame.abs_path or "<unknown>"
    function = frame.function or "<unknown>"

    lines = [f"{indent}{filename}{loc}{col} in {function}"]
    if frame.context_line:
        lines.append(f"{indent}  > {frame.context_line.strip()}")
    return lines


def format_exception(exc: ExceptionValue, max_frames: int = LEGACY_MAX_FRAMES) -> str:
    """Format a single exception with its stacktrace as one block"""
    lines = [f"{exc.type}: {exc.value}"]
    if exc.stacktrace and exc.stacktrace.frames:
        lines.append("Stacktrace (most recent first):")
        for frame in most_recent_frames(exc.stacktrace.frames, max_frames):
            lines.extend(format_frame(frame, indent="  "))
    return "\n".join(lines)


def format_project_summary(project: Project) -> str:
    return (
        f"- {project.name} (ID: {project.id}, slug: {project.slug})\n"
        f"  Events: {project.stored_event_count} stored, "
        f"{project.digested_event_count} digested"
    )


def format_project(project: Project) -> str:
    return "\n".join(
        [
            f"Project: {project.name}",
            f"  ID: {project.id}",
            f"  Slug: {project.slug}",
            f"  Team: {project.team}",
            f"  DSN: {project.dsn}",
            f"  Visibility: {project.visibility}",
            f"  Events: {project.stored_event_count} stored, "
            f"{project.digested_event_count} digested",
            f"  Retention: {project.retention_max_event_count} max events",
            "  Alerts:",
            f"    New issue: {_bool(project.alert_on_new_issue)}",
            f"    Regression: {_bool(project.alert_on_regression)}",
            f"    Unmute: {_bool(project.alert_on_unmute)}",
        ]
    )


def format_team_summary(team: Team) -> str:
    return f"- {team.name} (ID: {team.id}, visibility: {team.visibility})"


def format_team(team: Team) -> str:
    return f"  Name: {team.name}\n  ID: {team.id}\n  Visibility: {team.visibility}"


def format_issue(issue: Issue) -> str:
    lines = [
        f"[{issue.calculated_type}] {issue.calculated_value}",
        f"  ID: {issue.id}",
        f"  Status: {issue.status}",
        f"  Occurrences: {issue.digested_event_count}",
        f"  First seen: {issue.first_seen}",
        f"  Last seen: {issue.last_seen}",
    ]
    if issue.transaction:
        lines.append(f"  Transaction: {issue.transaction}")
    return "\n".join(lines)


def format_event(event: Event, include_stacktrace: bool = False) -> str:
    """
    Format an event as an indented text block.

    List endpoints may return events without ``data``; in that case only the
    identifiers and timestamps are shown. Stacktraces are included only when
    asked for and are shown most recent frame first.
    """
    lines = [
        f"Event {event.id}",
        f"  Event ID: {event.event_id}",
        f"  Timestamp: {event.timestamp}",
        f"  Ingested: {event.ingested_at}",
    ]

    data = event.data
    if not data:
        return "\n".join(lines)

    if data.level:
        lines.append(f"  Level: {data.level}")
    if data.platform:
        lines.append(f"  Platform: {data.platform}")
    if data.message_text:
        lines.append(f"  Message: {data.message_text}")

    if data.exception and data.exception.values:
        lines.append("  Exception:")
        for exc in data.exception.values:
            lines.append(f"    {exc.type}: {exc.value}")
            if include_stacktrace and exc.stacktrace and exc.stacktrace.frames:
                lines.append("    Stacktrace (most recent first):")
                for frame in most_recent_frames(
                    exc.stacktrace.frames, DETAIL_MAX_FRAMES
                ):
                    lines.extend(format_frame(frame))

    if data.request and data.request.url:
        lines.append(f"  Request: {data.request.method or 'GET'} {data.request.url}")

    if data.browser and data.browser.name:
        lines.append(f"  Browser: {data.browser.name} {data.browser.version or ''}")

    if data.os and data.os.name:
        lines.append(f"  OS: {data.os.name} {data.os.version or ''}")

    return "\n".join(lines)


def format_event_detail(event: Event) -> str:
    """Format an event with stacktrace, tags and contexts"""
    lines = [format_event(event, include_stacktrace=True)]

    if event.data and event.data.tags:
        lines.extend(["", "Tags:", _pretty_json(event.data.tags)])

    if event.data and event.data.contexts:
        lines.extend(["", "Contexts:", _pretty_json(event.data.contexts)])

    return "\n".join(lines)


def format_release_summary(release: Release) -> str:
    return (
        f"- {release.version or '(empty)'} (ID: {release.id})\n"
        f"  Released: {release.date_released}"
    )


def format_release(release: Release) -> str:
    lines = [
        f"Release: {release.version or '(empty)'}",
        f"  ID: {release.id}",
        f"  Project: {release.project}",
        f"  Released: {release.date_released}",
    ]
    if release.semver:
        lines.append(f"  Semver: {release.semver}")
    if release.is_semver is not None:
        lines.append(f"  Is Semver: {_bool(release.is_semver)}")
    return "\n".join(lines)
