"""
Raw repository signals and their normalization.

Signals are the immutable inputs of every calculator. Timestamps are parsed once
here; anything that cannot be read as a timestamp becomes ``None`` and is left
out of date-based computations downstream.
"""

from datetime import datetime, timezone
from typing import Any, NamedTuple

# Sample sizes requested from the data source
SAMPLE_LIMITS = {
    "commits": 100,
    "pull_requests": 30,
    "issues": 30,
    "contributors": 10,
    "releases": 10,
    "languages": 10,
    "topics": 8,
}


class CommitSignal(NamedTuple):
    """A sampled commit from the default branch."""

    message: str = ""
    committed_at: datetime | None = None
    author_login: str | None = None


class PullRequestSignal(NamedTuple):
    """A sampled pull request."""

    state: str = "open"  # "open", "closed", "merged"
    created_at: datetime | None = None
    merged_at: datetime | None = None
    comment_count: int = 0


class IssueSignal(NamedTuple):
    """A sampled issue (pull requests excluded)."""

    state: str = "open"  # "open", "closed"
    created_at: datetime | None = None
    comment_count: int = 0


class ContributorSignal(NamedTuple):
    """A contributor with their contribution count."""

    login: str
    contribution_count: int = 0


class ReleaseSignal(NamedTuple):
    """A published release."""

    published_at: datetime | None = None
    tag_name: str = ""
    name: str = ""


class LanguageSignal(NamedTuple):
    """A language and the bytes of code written in it."""

    name: str
    size: int = 0


class RawSignals(NamedTuple):
    """Everything the calculators know about one repository."""

    commits: tuple[CommitSignal, ...] = ()
    pull_requests: tuple[PullRequestSignal, ...] = ()
    issues: tuple[IssueSignal, ...] = ()
    contributors: tuple[ContributorSignal, ...] = ()
    releases: tuple[ReleaseSignal, ...] = ()
    total_pull_requests: int = 0
    total_issues: int = 0
    merged_pull_request_count: int = 0
    closed_issue_count: int = 0
    star_count: int = 0
    fork_count: int = 0
    watcher_count: int = 0
    repo_created_at: datetime | None = None
    repo_pushed_at: datetime | None = None
    # Repository profile
    primary_language: str | None = None
    languages: tuple[LanguageSignal, ...] = ()  # largest first
    license_spdx_id: str | None = None
    topics: tuple[str, ...] = ()
    disk_usage_kb: int = 0


def ensure_utc(moment: datetime) -> datetime:
    """Return ``moment`` as an aware UTC datetime; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects and ISO-8601 strings (a trailing ``Z`` is
    allowed). Naive values are taken as UTC.

    Returns:
        The parsed datetime, or None when the value is missing or malformed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    return ensure_utc(parsed)


def _as_count(value: Any) -> int:
    """Coerce a count-like value to a non-negative int, 0 when unusable."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, dict):
        value = value.get("totalCount")
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _items(value: Any) -> list[dict[str, Any]]:
    """Keep the dictionaries of a list, ignoring anything else."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


def _texts(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str) and item]


def _get(container: Any, key: str) -> Any:
    return container.get(key) if isinstance(container, dict) else None


def _nodes(container: Any) -> list[dict[str, Any]]:
    """Return the node list of a GraphQL connection, tolerating gaps."""
    nodes = _get(container, "nodes")
    if nodes is None:
        nodes = [_get(edge, "node") for edge in _items(_get(container, "edges"))]
    return _items(nodes)


def _language_edges(container: Any) -> list[LanguageSignal]:
    """Languages from a ``languages`` connection; sizes live on the edges."""
    languages = []
    for edge in _items(_get(container, "edges")):
        name = _as_text(_get(edge.get("node"), "name"))
        if name:
            size = _as_count(edge.get("size"))
            languages.append(LanguageSignal(name=name, size=size))
    languages.sort(key=lambda language: language.size, reverse=True)
    return languages[: SAMPLE_LIMITS["languages"]]


def signals_from_github(
    repository: dict[str, Any] | None,
    contributors: list[dict[str, Any]] | None = None,
) -> RawSignals:
    """
    Normalize a GitHub GraphQL repository node and REST contributor list.

    Args:
        repository: The ``repository`` object returned by the GraphQL query.
        contributors: Items from ``/repos/{owner}/{repo}/contributors``.

    Returns:
        RawSignals built from the payloads. Missing or malformed parts are
        treated as empty.
    """
    repo = repository if isinstance(repository, dict) else {}

    commits = []
    history = _get(_get(repo.get("defaultBranchRef"), "target"), "history")
    for node in _nodes(history)[: SAMPLE_LIMITS["commits"]]:
        user = _get(node.get("author"), "user")
        commits.append(
            CommitSignal(
                message=_as_text(node.get("message")) or "",
                committed_at=parse_timestamp(node.get("committedDate")),
                author_login=_as_text(_get(user, "login")),
            )
        )

    pull_requests = [
        PullRequestSignal(
            state=str(node.get("state") or "open").lower(),
            created_at=parse_timestamp(node.get("createdAt")),
            merged_at=parse_timestamp(node.get("mergedAt")),
            comment_count=_as_count(node.get("comments")),
        )
        for node in _nodes(repo.get("recentPRs"))[: SAMPLE_LIMITS["pull_requests"]]
    ]

    issues = [
        IssueSignal(
            state=str(node.get("state") or "open").lower(),
            created_at=parse_timestamp(node.get("createdAt")),
            comment_count=_as_count(node.get("comments")),
        )
        for node in _nodes(repo.get("allIssues"))[: SAMPLE_LIMITS["issues"]]
    ]

    releases = [
        ReleaseSignal(
            published_at=parse_timestamp(node.get("publishedAt")),
            tag_name=_as_text(node.get("tagName")) or "",
            name=_as_text(node.get("name")) or "",
        )
        for node in _nodes(repo.get("releases"))[: SAMPLE_LIMITS["releases"]]
    ]

    contributor_signals = [
        ContributorSignal(
            login=item["login"],
            contribution_count=_as_count(item.get("contributions")),
        )
        for item in _items(contributors)[: SAMPLE_LIMITS["contributors"]]
        if _as_text(item.get("login"))
    ]

    topics = [
        name
        for name in (
            _as_text(_get(node.get("topic"), "name"))
            for node in _nodes(repo.get("repositoryTopics"))
        )
        if name
    ]

    open_prs = _as_count(repo.get("pullRequests"))
    closed_prs = _as_count(repo.get("closedPullRequests"))
    open_issues = _as_count(repo.get("issues"))
    closed_issues = _as_count(repo.get("closedIssues"))

    return RawSignals(
        commits=tuple(commits),
        pull_requests=tuple(pull_requests),
        issues=tuple(issues),
        contributors=tuple(contributor_signals),
        releases=tuple(releases),
        total_pull_requests=open_prs + closed_prs,
        total_issues=open_issues + closed_issues,
        merged_pull_request_count=_as_count(repo.get("mergedPullRequests")),
        closed_issue_count=closed_issues,
        star_count=_as_count(repo.get("stargazerCount")),
        fork_count=_as_count(repo.get("forkCount")),
        watcher_count=_as_count(repo.get("watchers")),
        repo_created_at=parse_timestamp(repo.get("createdAt")),
        repo_pushed_at=parse_timestamp(repo.get("pushedAt")),
        primary_language=_as_text(_get(repo.get("primaryLanguage"), "name")),
        languages=tuple(_language_edges(repo.get("languages"))),
        license_spdx_id=_as_text(_get(repo.get("licenseInfo"), "spdxId")),
        topics=tuple(topics[: SAMPLE_LIMITS["topics"]]),
        disk_usage_kb=_as_count(repo.get("diskUsage")),
    )


def format_timestamp(value: Any) -> str | None:
    """ISO-8601 text with a ``Z`` suffix, or None for a missing timestamp."""
    moment = parse_timestamp(value)
    if moment is None:
        return None
    return moment.isoformat().replace("+00:00", "Z")


def signals_to_dict(signals: RawSignals) -> dict[str, Any]:
    """Serialize RawSignals into a JSON-friendly dictionary."""
    return {
        "commits": [
            {
                "message": c.message,
                "committed_at": format_timestamp(c.committed_at),
                "author_login": c.author_login,
            }
            for c in signals.commits
        ],
        "pull_requests": [
            {
                "state": pr.state,
                "created_at": format_timestamp(pr.created_at),
                "merged_at": format_timestamp(pr.merged_at),
                "comment_count": pr.comment_count,
            }
            for pr in signals.pull_requests
        ],
        "issues": [
            {
                "state": issue.state,
                "created_at": format_timestamp(issue.created_at),
                "comment_count": issue.comment_count,
            }
            for issue in signals.issues
        ],
        "contributors": [
            {"login": c.login, "contribution_count": c.contribution_count}
            for c in signals.contributors
        ],
        "releases": [
            {
                "published_at": format_timestamp(r.published_at),
                "tag_name": r.tag_name,
                "name": r.name,
            }
            for r in signals.releases
        ],
        "total_pull_requests": signals.total_pull_requests,
        "total_issues": signals.total_issues,
        "merged_pull_request_count": signals.merged_pull_request_count,
        "closed_issue_count": signals.closed_issue_count,
        "star_count": signals.star_count,
        "fork_count": signals.fork_count,
        "watcher_count": signals.watcher_count,
        "repo_created_at": format_timestamp(signals.repo_created_at),
        "repo_pushed_at": format_timestamp(signals.repo_pushed_at),
        "primary_language": signals.primary_language,
        "languages": [
            {"name": language.name, "size": language.size}
            for language in signals.languages
        ],
        "license_spdx_id": signals.license_spdx_id,
        "topics": list(signals.topics),
        "disk_usage_kb": signals.disk_usage_kb,
    }


def signals_from_dict(data: dict[str, Any]) -> RawSignals:
    """
    Build RawSignals from the dictionary produced by ``signals_to_dict``.

    Unknown keys are ignored, missing keys fall back to empty defaults and
    list entries that are not objects are skipped.
    """
    return RawSignals(
        commits=tuple(
            CommitSignal(
                message=_as_text(item.get("message")) or "",
                committed_at=parse_timestamp(item.get("committed_at")),
                author_login=_as_text(item.get("author_login")),
            )
            for item in _items(data.get("commits"))
        ),
        pull_requests=tuple(
            PullRequestSignal(
                state=str(item.get("state") or "open").lower(),
                created_at=parse_timestamp(item.get("created_at")),
                merged_at=parse_timestamp(item.get("merged_at")),
                comment_count=_as_count(item.get("comment_count")),
            )
            for item in _items(data.get("pull_requests"))
        ),
        issues=tuple(
            IssueSignal(
                state=str(item.get("state") or "open").lower(),
                created_at=parse_timestamp(item.get("created_at")),
                comment_count=_as_count(item.get("comment_count")),
            )
            for item in _items(data.get("issues"))
        ),
        contributors=tuple(
            ContributorSignal(
                login=item["login"],
                contribution_count=_as_count(item.get("contribution_count")),
            )
            for item in _items(data.get("contributors"))
            if _as_text(item.get("login"))
        ),
        releases=tuple(
            ReleaseSignal(
                published_at=parse_timestamp(item.get("published_at")),
                tag_name=_as_text(item.get("tag_name")) or "",
                name=_as_text(item.get("name")) or "",
            )
            for item in _items(data.get("releases"))
        ),
        total_pull_requests=_as_count(data.get("total_pull_requests")),
        total_issues=_as_count(data.get("total_issues")),
        merged_pull_request_count=_as_count(data.get("merged_pull_request_count")),
        closed_issue_count=_as_count(data.get("closed_issue_count")),
        star_count=_as_count(data.get("star_count")),
        fork_count=_as_count(data.get("fork_count")),
        watcher_count=_as_count(data.get("watcher_count")),
        repo_created_at=parse_timestamp(data.get("repo_created_at")),
        repo_pushed_at=parse_timestamp(data.get("repo_pushed_at")),
        primary_language=_as_text(data.get("primary_language")),
        languages=tuple(
            LanguageSignal(name=item["name"], size=_as_count(item.get("size")))
            for item in _items(data.get("languages"))
            if _as_text(item.get("name"))
        ),
        license_spdx_id=_as_text(data.get("license_spdx_id")),
        topics=tuple(_texts(data.get("topics"))[: SAMPLE_LIMITS["topics"]]),
        disk_usage_kb=_as_count(data.get("disk_usage_kb")),
    )


def normalize_timestamps(signals: RawSignals) -> RawSignals:
    """
    Return a copy of ``signals`` with every timestamp as an aware UTC datetime.

    Timestamps given as strings are parsed; unreadable ones become None.
    """
    return signals._replace(
        commits=tuple(
            c._replace(committed_at=parse_timestamp(c.committed_at))
            for c in signals.commits
        ),
        pull_requests=tuple(
            pr._replace(
                created_at=parse_timestamp(pr.created_at),
                merged_at=parse_timestamp(pr.merged_at),
            )
            for pr in signals.pull_requests
        ),
        issues=tuple(
            issue._replace(created_at=parse_timestamp(issue.created_at))
            for issue in signals.issues
        ),
        releases=tuple(
            r._replace(published_at=parse_timestamp(r.published_at))
            for r in signals.releases
        ),
        repo_created_at=parse_timestamp(signals.repo_created_at),
        repo_pushed_at=parse_timestamp(signals.repo_pushed_at),
    )
