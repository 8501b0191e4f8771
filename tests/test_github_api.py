"""
Tests for GitHub API client.

"Mock the API. Trust nothing. Test everything." — schema.cx
"""

import pytest
import requests
import responses

from repozip import __version__
from repozip.errors import DecodeError, HttpStatusError, TransportError
from repozip.github_api import ACCEPT, GitHubAPIClient
from repozip.models import Owner

TOKEN = "ghp_test_token_123"


@pytest.fixture
def client() -> GitHubAPIClient:
    """Create a test client."""
    with GitHubAPIClient(TOKEN) as api_client:
        yield api_client


@responses.activate
def test_request_sends_fixed_headers(client: GitHubAPIClient) -> None:
    """Every call carries auth, accept and user agent."""
    responses.add(responses.GET, "https://api.github.com/user", json={"login": "me"}, status=200)

    client.get("/user")

    headers = responses.calls[0].request.headers
    assert headers["Authorization"] == f"Bearer {TOKEN}"
    assert headers["Accept"] == ACCEPT
    assert headers["User-Agent"] == f"repozip/{__version__}"


@responses.activate
def test_request_merges_extra_headers(client: GitHubAPIClient) -> None:
    responses.add(responses.GET, "https://api.github.com/rate_limit", json={}, status=200)

    client.get("/rate_limit", headers={"X-GitHub-Api-Version": "2022-11-28"})

    headers = responses.calls[0].request.headers
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert headers["Authorization"] == f"Bearer {TOKEN}"


def test_url_for_joins_paths() -> None:
    client = GitHubAPIClient(TOKEN, api_url="https://github.example.com/api/v3/")

    assert client.url_for("/user/repos") == "https://github.example.com/api/v3/user/repos"
    assert client.url_for("user") == "https://github.example.com/api/v3/user"
    assert client.url_for("https://codeload.github.com/x") == "https://codeload.github.com/x"


@responses.activate
def test_http_error_raises_status_error(client: GitHubAPIClient) -> None:
    """Test handling of 404 error."""
    responses.add(
        responses.GET,
        "https://api.github.com/repos/me/missing",
        json={"message": "Not Found"},
        status=404,
    )

    with pytest.raises(HttpStatusError, match="Not Found") as exc_info:
        client.get("/repos/me/missing")

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == "https://api.github.com/repos/me/missing"


@responses.activate
def test_server_error_without_json_body(client: GitHubAPIClient) -> None:
    responses.add(responses.GET, "https://api.github.com/user", body="<html>oops</html>", status=502)

    with pytest.raises(HttpStatusError) as exc_info:
        client.get("/user")

    assert exc_info.value.status_code == 502


@responses.activate
def test_unauthorized_mentions_token(client: GitHubAPIClient) -> None:
    responses.add(
        responses.GET,
        "https://api.github.com/user",
        json={"message": "Bad credentials"},
        status=401,
    )

    with pytest.raises(HttpStatusError, match="GITHUB_AUTH_KEY"):
        client.get("/user")


@responses.activate
def test_rate_limit_is_reported_as_status_error(client: GitHubAPIClient) -> None:
    """Test handling of rate limit error."""
    responses.add(
        responses.GET,
        "https://api.github.com/user/repos",
        json={"message": "API rate limit exceeded"},
        status=403,
        headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1234567890"},
    )

    with pytest.raises(HttpStatusError, match="rate limit") as exc_info:
        client.get("/user/repos")

    assert exc_info.value.status_code == 403
    assert "1234567890" in str(exc_info.value)


@responses.activate
def test_connection_error_raises_transport_error(client: GitHubAPIClient) -> None:
    responses.add(
        responses.GET,
        "https://api.github.com/user",
        body=requests.exceptions.ConnectionError("Name or service not known"),
    )

    with pytest.raises(TransportError, match="Network error"):
        client.get("/user")


@responses.activate
def test_timeout_raises_transport_error(client: GitHubAPIClient) -> None:
    responses.add(
        responses.GET,
        "https://api.github.com/user",
        body=requests.exceptions.ReadTimeout("read timed out"),
    )

    with pytest.raises(TransportError, match="timed out"):
        client.get("/user")


@responses.activate
def test_get_authenticated_user(client: GitHubAPIClient) -> None:
    responses.add(responses.GET, "https://api.github.com/user", json={"login": "octocat", "id": 1}, status=200)

    assert client.get_authenticated_user() == Owner(login="octocat")


@responses.activate
def test_get_authenticated_user_without_login(client: GitHubAPIClient) -> None:
    responses.add(responses.GET, "https://api.github.com/user", json={"id": 1}, status=200)

    with pytest.raises(DecodeError, match="no login"):
        client.get_authenticated_user()


@responses.activate
def test_decode_json_rejects_invalid_body(client: GitHubAPIClient) -> None:
    responses.add(responses.GET, "https://api.github.com/user", body="not json", status=200)

    response = client.get("/user")

    with pytest.raises(DecodeError, match="Invalid JSON"):
        client.decode_json(response)


@responses.activate
def test_next_page_url(client: GitHubAPIClient) -> None:
    """Test Link header parsing."""
    responses.add(
        responses.GET,
        "https://api.github.com/user/repos",
        json=[],
        headers={
            "Link": '<https://api.github.com/user/repos?per_page=100&page=2>; rel="next", '
            '<https://api.github.com/user/repos?per_page=100&page=5>; rel="last"'
        },
    )
    responses.add(responses.GET, "https://api.github.com/user", json={})

    with_next = client.get("/user/repos")
    without_link = client.get("/user")

    assert client.next_page_url(with_next) == "https://api.github.com/user/repos?per_page=100&page=2"
    assert client.next_page_url(without_link) is None
