"""
Zipball download for a single repository.
"""

from urllib.parse import quote

from .github_api import API_VERSION, GitHubAPIClient
from .models import ArchivePayload, RepositoryDescriptor


def archive_path(repo: RepositoryDescriptor) -> str:
    """Build the zipball endpoint for the repository's default branch."""
    owner = quote(repo.owner.login, safe="")
    name = quote(repo.name, safe="")
    # Branch names may contain slashes, which GitHub expects unescaped
    branch = quote(repo.default_branch, safe="/")
    return f"/repos/{owner}/{name}/zipball/{branch}"


class ArchiveFetcher:
    """Downloads repository archives. No retries."""

    def __init__(self, client: GitHubAPIClient) -> None:
        self.client = client

    def fetch_archive(self, repo: RepositoryDescriptor) -> ArchivePayload:
        """
        Download the default-branch zipball of ``repo``.

        GitHub answers with a redirect to codeload, which requests follows.

        Raises:
            TransportError, HttpStatusError: Propagated from the client
        """
        response = self.client.get(
            archive_path(repo),
            headers={"X-GitHub-Api-Version": API_VERSION},
        )
        return ArchivePayload(repository_name=repo.name, content=response.content)
