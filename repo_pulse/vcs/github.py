"""
GitHub VCS provider implementation for Repo Pulse.

Fetches repository records with a single GitHub GraphQL query plus the REST
contributors endpoint, and normalizes them into ``RawSignals``.
"""

import os
from typing import Any

import httpx
from dotenv import load_dotenv

from repo_pulse.http_client import _get_async_http_client
from repo_pulse.signals import SAMPLE_LIMITS, RawSignals, signals_from_github
from repo_pulse.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()

# GitHub API endpoints
GITHUB_GRAPHQL_API = "https://api.github.com/graphql"
GITHUB_REST_API = "https://api.github.com"

USER_AGENT = "repo-pulse"


class GitHubProvider(BaseVCSProvider):
    """GitHub VCS provider using GraphQL and REST APIs."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable.

        Raises:
            ValueError: If token is not provided and GITHUB_TOKEN env var is not set
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GITHUB_TOKEN is required for GitHub provider.\n"
                "\n"
                "To get started:\n"
                "1. Create a GitHub Personal Access Token (classic):\n"
                "   -> https://github.com/settings/tokens/new\n"
                "2. Select scope: 'public_repo'\n"
                "3. Set the token:\n"
                "   export GITHUB_TOKEN='your_token_here'  # Linux/macOS\n"
                "   or add to your .env file: GITHUB_TOKEN=your_token_here\n"
            )

    def get_platform_name(self) -> str:
        """Return 'github' as the platform identifier."""
        return "github"

    def validate_credentials(self) -> bool:
        """Check if GitHub token is configured."""
        return bool(self.token)

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    async def get_repository_signals(self, owner: str, repo: str) -> RawSignals:
        """
        Fetch repository signals from GitHub.

        Args:
            owner: GitHub repository owner (username or organization)
            repo: GitHub repository name

        Returns:
            Normalized RawSignals

        Raises:
            ValueError: If the token is rejected, the rate limit is exhausted,
                or the repository is not found
            httpx.HTTPStatusError: If GitHub API returns another error
        """
        variables = {"owner": owner, "name": repo}
        raw_data = await self._query_graphql(self._get_graphql_query(), variables)

        repository = raw_data.get("repository")
        if repository is None:
            raise ValueError(f"Repository {owner}/{repo} not found")

        contributors = await self._fetch_contributors(owner, repo)
        return signals_from_github(repository, contributors)

    def _headers(self, accept: str | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": USER_AGENT,
        }
        if accept:
            headers["Accept"] = accept
        return headers

    @staticmethod
    def _raise_for_auth(response: httpx.Response) -> None:
        if response.status_code == 401:
            raise ValueError("Invalid GitHub token")
        if response.status_code == 403:
            raise ValueError("API rate limit exceeded")

    async def _query_graphql(
        self, query: str, variables: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Execute GraphQL query against GitHub API.

        Returns:
            Response data dictionary

        Raises:
            ValueError: For authentication, rate limit and not-found failures
            httpx.HTTPStatusError: If API returns another error
        """
        client = await _get_async_http_client()
        response = await client.post(
            GITHUB_GRAPHQL_API,
            json={"query": query, "variables": variables},
            headers=self._headers(),
            timeout=30,
        )
        self._raise_for_auth(response)
        response.raise_for_status()
        data = response.json()

        if data.get("errors"):
            message = data["errors"][0].get("message") or "GraphQL error"
            if "Could not resolve" in message:
                owner, name = variables["owner"], variables["name"]
                raise ValueError(f"Repository {owner}/{name} not found")
            raise httpx.HTTPStatusError(
                f"GitHub API Errors: {data['errors']}",
                request=response.request,
                response=response,
            )

        return data.get("data") or {}

    async def _fetch_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """
        Fetch the top contributors from the REST API.

        GraphQL does not expose contribution counts. A failed request yields an
        empty list; the contributor metrics then report their sentinels.
        """
        client = await _get_async_http_client()
        response = await client.get(
            f"{GITHUB_REST_API}/repos/{owner}/{repo}/contributors",
            params={"per_page": SAMPLE_LIMITS["contributors"]},
            headers=self._headers(accept="application/vnd.github.v3+json"),
        )
        if not response.is_success:
            return []
        payload = response.json()
        return payload if isinstance(payload, list) else []

    def _get_graphql_query(self) -> str:
        """Return the GraphQL query to fetch repository signals."""
        return """
        query RepoSignals($owner: String!, $name: String!) {
          repository(owner: $owner, name: $name) {
            createdAt
            pushedAt
            stargazerCount
            forkCount
            diskUsage
            primaryLanguage {
              name
            }
            licenseInfo {
              name
              spdxId
            }
            repositoryTopics(first: 8) {
              nodes {
                topic {
                  name
                }
              }
            }
            languages(first: 10, orderBy: {field: SIZE, direction: DESC}) {
              edges {
                size
                node {
                  name
                }
              }
            }
            watchers {
              totalCount
            }
            issues(states: [OPEN]) {
              totalCount
            }
            closedIssues: issues(states: [CLOSED]) {
              totalCount
            }
            allIssues: issues(first: 30, orderBy: {field: CREATED_AT, direction: DESC}) {
              nodes {
                state
                createdAt
                comments {
                  totalCount
                }
              }
            }
            pullRequests(states: [OPEN]) {
              totalCount
            }
            closedPullRequests: pullRequests(states: [CLOSED, MERGED]) {
              totalCount
            }
            mergedPullRequests: pullRequests(states: [MERGED]) {
              totalCount
            }
            recentPRs: pullRequests(first: 30, orderBy: {field: CREATED_AT, direction: DESC}) {
              nodes {
                state
                createdAt
                mergedAt
                comments {
                  totalCount
                }
              }
            }
            releases(first: 10, orderBy: {field: CREATED_AT, direction: DESC}) {
              nodes {
                tagName
                name
                publishedAt
              }
            }
            defaultBranchRef {
              target {
                ... on Commit {
                  history(first: 100) {
                    nodes {
                      message
                      committedDate
                      author {
                        user {
                          login
                        }
                      }
                    }
                  }
                }
              }
            }
          }
        }
        """
