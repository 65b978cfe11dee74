"""Human-readable formatters for CLI output."""

from __future__ import annotations

from typing import Any


def _severity_tag(level: Any) -> str:
    return f"[{str(level).upper()}]" if level else "[?]"


def format_issue_line(issue: dict[str, Any]) -> list[str]:
    """Format one list-result issue as a header line plus detail lines."""
    lines = [f"{_severity_tag(issue.get('effective_severity_level'))} {issue.get('title') or '(untitled)'}"]
    lines.append(f"    Repository: {issue.get('repository') or '-'}")
    for dep in issue.get("dependencies") or []:
        lines.append(f"    Package: {dep.get('package_name')}@{dep.get('package_version')}")
    for loc in issue.get("locations") or []:
        lines.append(f"    Location: {loc.get('filepath')}:{loc.get('line')}")
    lines.append(f"    Link: {issue.get('url')}")
    return lines


def format_issues_result(result: dict[str, Any]) -> str:
    """Format a get_issues / get_repo_issues envelope."""
    lines: list[str] = []

    if "repositoryName" in result:
        lines.append(f"Repository query: {result['repositoryName']}")
        lines.append(f"Matching projects: {result.get('matching_projects', 0)}")
        for project in result.get("projects") or []:
            lines.append(f"  - {project.get('projectName')} ({project.get('projectId')})")
        lines.append("")

    issues = result.get("issues") or []
    if not issues:
        lines.append("No issues found.")
        return "\n".join(lines)

    lines.append(f"Found {result.get('count', len(issues))} issues:")
    lines.append("")
    for issue in issues:
        lines.extend(format_issue_line(issue))
    if result.get("has_more"):
        lines.append("")
        lines.append("More issues exist beyond this page.")
    return "\n".join(lines)


def format_issue_detail(issue: dict[str, Any]) -> str:
    """Format a get_issue result."""
    lines = [
        "=" * 60,
        f"{_severity_tag(issue.get('effective_severity_level'))} {issue.get('title') or '(untitled)'}",
        "=" * 60,
        f"ID:      {issue.get('id')}",
        f"Key:     {issue.get('key')}",
        f"Status:  {issue.get('status')}",
        f"Created: {issue.get('created_at')}",
        f"Updated: {issue.get('updated_at')}",
    ]
    if issue.get("description"):
        lines.append(f"Info:    {issue['description']}")
    if issue.get("url"):
        lines.append(f"Link:    {issue['url']}")

    upgrades = issue.get("upgrades") or []
    if upgrades:
        lines.append("")
        lines.append("Upgrades:")
        for up in upgrades:
            target = up.get("recommended_version") or "no fix available"
            lines.append(f"  - {up.get('package_name')}: {up.get('current_version')} -> {target}")

    remedies = issue.get("remedies") or []
    if remedies:
        lines.append("")
        lines.append("Remedies:")
        for remedy in remedies:
            lines.append(f"  - [{remedy.get('type')}] {remedy.get('description')}")
    return "\n".join(lines)


def format_projects_result(result: dict[str, Any]) -> str:
    """Format a find_projects result."""
    projects = result.get("projects") or []
    if not projects:
        return f"No projects match '{result.get('query')}'."
    lines = [f"Found {len(projects)} projects matching '{result.get('query')}':"]
    for project in projects:
        lines.append(f"  {project.get('projectId')}  {project.get('projectName')}")
    return "\n".join(lines)
