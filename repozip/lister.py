"""
Repository discovery for the authenticated user.

"Pagination is just recursion with extra steps." — schema.cx
"""

from typing import Any

from .errors import DecodeError
from .github_api import GitHubAPIClient
from .models import DEFAULT_MAX_PAGES, Owner, RepositoryDescriptor
from .rich_utils import console, print_warning


def parse_repository(item: Any) -> RepositoryDescriptor:
    """
    Decode one element of the list-repositories response.

    Raises:
        DecodeError: If a required field is missing or has the wrong type
    """
    if not isinstance(item, dict):
        raise DecodeError(f"Expected a repository object, got {type(item).__name__}")

    owner = item.get("owner")
    login = owner.get("login") if isinstance(owner, dict) else None
    name = item.get("name")
    default_branch = item.get("default_branch")

    for field_name, value in (("owner.login", login), ("name", name), ("default_branch", default_branch)):
        if not isinstance(value, str) or not value:
            raise DecodeError(f"Repository entry has no valid '{field_name}': {item.get('full_name', item)!r}")

    return RepositoryDescriptor(owner=Owner(login=login), name=name, default_branch=default_branch)


def parse_repositories(data: Any) -> list[RepositoryDescriptor]:
    """Decode a whole page. Any bad element fails the page."""
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array of repositories, got {type(data).__name__}")
    return [parse_repository(item) for item in data]


def filter_by_owner(
    repos: list[RepositoryDescriptor],
    owner: Owner,
    allow_other_owners: bool,
) -> list[RepositoryDescriptor]:
    """
    Apply the ownership filter.

    Keeps only repositories owned by ``owner`` unless ``allow_other_owners``
    is set. Order is preserved.
    """
    if allow_other_owners:
        return list(repos)
    return [r for r in repos if r.owner.login == owner.login]


class RepositoryLister:
    """Lists repositories visible to the authenticated user."""

    ENDPOINT = "/user/repos"

    def __init__(self, client: GitHubAPIClient, max_pages: int = DEFAULT_MAX_PAGES) -> None:
        self.client = client
        self.max_pages = max_pages

    def fetch_all(self) -> list[RepositoryDescriptor]:
        """
        Fetch every page of /user/repos, up to ``max_pages`` pages.

        Raises:
            TransportError, HttpStatusError: If any page request fails
            DecodeError: If any page is malformed
        """
        repos: list[RepositoryDescriptor] = []
        url: str | None = self.ENDPOINT
        params: dict[str, Any] | None = {"per_page": self.client.PER_PAGE}
        pages = 0

        while url:
            if pages >= self.max_pages:
                print_warning(
                    f"Stopped after {self.max_pages} pages ({len(repos)} repositories); "
                    "raise --max-pages to list more"
                )
                break

            response = self.client.get(url, params=params)
            page_repos = parse_repositories(self.client.decode_json(response))
            pages += 1
            console.print(f"   [dim]📦 Page {pages}: {len(page_repos)} repos[/dim]")
            repos.extend(page_repos)

            # The next link already carries per_page
            url = self.client.next_page_url(response)
            params = None

        return repos

    def list_repositories(self, owner: Owner, allow_other_owners: bool) -> list[RepositoryDescriptor]:
        """List repositories and apply the ownership filter."""
        repos = self.fetch_all()
        filtered = filter_by_owner(repos, owner, allow_other_owners)

        if len(filtered) < len(repos):
            console.print(
                f"   [dim]🔍 Filtered out {len(repos) - len(filtered)} repos not owned by {owner.login} "
                "(use --allow-others-repos to include them)[/dim]"
            )

        return filtered
