"""
Tests for the GitHub VCS provider.
"""

import asyncio
import json
import os
from unittest.mock import patch

import httpx
import pytest

from repo_pulse.vcs import get_vcs_provider, list_supported_platforms
from repo_pulse.vcs.github import GitHubProvider

REPOSITORY = {
    "createdAt": "2021-03-01T00:00:00Z",
    "pushedAt": "2025-06-14T10:00:00Z",
    "stargazerCount": 320,
    "forkCount": 21,
    "watchers": {"totalCount": 9},
    "issues": {"totalCount": 4},
    "closedIssues": {"totalCount": 16},
    "pullRequests": {"totalCount": 2},
    "closedPullRequests": {"totalCount": 18},
    "mergedPullRequests": {"totalCount": 15},
    "allIssues": {"nodes": []},
    "recentPRs": {"nodes": []},
    "releases": {"nodes": [{"tagName": "v0.9.0", "name": None, "publishedAt": None}]},
    "diskUsage": 900,
    "primaryLanguage": {"name": "Rust"},
    "licenseInfo": {"name": "MIT License", "spdxId": "MIT"},
    "repositoryTopics": {"nodes": [{"topic": {"name": "cli"}}]},
    "languages": {"edges": [{"size": 1200, "node": {"name": "Rust"}}]},
    "defaultBranchRef": {
        "target": {
            "history": {
                "nodes": [
                    {
                        "message": "Tighten rank rounding",
                        "committedDate": "2025-06-14T09:00:00Z",
                        "author": {"user": {"login": "alice"}},
                    }
                ]
            }
        }
    },
}

CONTRIBUTORS = [{"login": "alice", "contributions": 40}]


def _client_factory(handler):
    """Build a replacement for the shared client getter."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    async def get_client():
        return client

    return get_client


def _fetch(handler, owner="octo", repo="pulse"):
    provider = GitHubProvider(token="test-token")
    with patch(
        "repo_pulse.vcs.github._get_async_http_client", _client_factory(handler)
    ):
        return asyncio.run(provider.get_repository_signals(owner, repo))


class TestGitHubProviderInit:
    """Test token handling."""

    def test_explicit_token(self):
        provider = GitHubProvider(token="abc")
        assert provider.validate_credentials() is True
        assert provider.get_platform_name() == "github"

    def test_token_from_environment(self):
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}, clear=True):
            assert GitHubProvider().token == "env-token"

    def test_missing_token(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="GITHUB_TOKEN is required"):
                GitHubProvider()

    def test_query_requests_profile_fields(self):
        query = GitHubProvider(token="abc")._get_graphql_query()
        for field in ("licenseInfo", "repositoryTopics", "languages", "diskUsage"):
            assert field in query

    def test_repository_url(self):
        provider = GitHubProvider(token="abc")
        assert (
            provider.get_repository_url("octo", "pulse")
            == "https://github.com/octo/pulse"
        )


class TestGetRepositorySignals:
    """Test fetching signals over mocked HTTP."""

    def test_success(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path == "/graphql":
                body = json.loads(request.content)
                assert body["variables"] == {"owner": "octo", "name": "pulse"}
                return httpx.Response(200, json={"data": {"repository": REPOSITORY}})
            assert request.url.path == "/repos/octo/pulse/contributors"
            assert request.url.params["per_page"] == "10"
            return httpx.Response(200, json=CONTRIBUTORS)

        signals = _fetch(handler)

        assert signals.star_count == 320
        assert signals.total_pull_requests == 20
        assert signals.total_issues == 20
        assert signals.commits[0].author_login == "alice"
        assert signals.contributors[0].contribution_count == 40
        assert signals.license_spdx_id == "MIT"
        assert signals.primary_language == "Rust"
        assert signals.topics == ("cli",)
        assert signals.languages[0].size == 1200
        assert signals.disk_usage_kb == 900
        assert signals.releases[0].tag_name == "v0.9.0"
        assert seen[0].headers["Authorization"] == "Bearer test-token"
        assert seen[0].headers["User-Agent"] == "repo-pulse"

    def test_contributor_failure_degrades_to_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/graphql":
                return httpx.Response(200, json={"data": {"repository": REPOSITORY}})
            return httpx.Response(500, json={"message": "boom"})

        signals = _fetch(handler)
        assert signals.contributors == ()
        assert signals.star_count == 320

    def test_invalid_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Bad credentials"})

        with pytest.raises(ValueError, match="Invalid GitHub token"):
            _fetch(handler)

    def test_rate_limited(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "rate limited"})

        with pytest.raises(ValueError, match="API rate limit exceeded"):
            _fetch(handler)

    def test_repository_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": {"repository": None},
                    "errors": [
                        {"message": "Could not resolve to a Repository with the name"}
                    ],
                },
            )

        with pytest.raises(ValueError, match="Repository octo/gone not found"):
            _fetch(handler, repo="gone")

    def test_null_repository(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {"repository": None}})

        with pytest.raises(ValueError, match="not found"):
            _fetch(handler)

    def test_other_graphql_errors(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"errors": [{"message": "Something broke"}]}
            )

        with pytest.raises(httpx.HTTPStatusError, match="GitHub API Errors"):
            _fetch(handler)

    def test_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        with pytest.raises(httpx.HTTPStatusError):
            _fetch(handler)


class TestProviderRegistry:
    def test_github_is_registered(self):
        assert "github" in list_supported_platforms()

    def test_get_provider(self):
        provider = get_vcs_provider("GitHub", token="abc")
        assert isinstance(provider, GitHubProvider)

    def test_unknown_platform(self):
        with pytest.raises(ValueError, match="Unsupported"):
            get_vcs_provider("svn")

    def test_register_requires_base_class(self):
        from repo_pulse.vcs import register_vcs_provider

        with pytest.raises(TypeError):
            register_vcs_provider("custom", dict)
