"""GitHub Actions integration."""

from .client import GitHubActionsClient, create_github_client


__all__ = ["GitHubActionsClient", "create_github_client"]
