"""GitHub lookup: public proxy, upstream status mapping.

Invariants:
    - 200 upstream → body passed through
    - non-200 upstream → 404
    - transport failure → 503
"""

import httpx

from devconnect.api.dependencies import get_github_client
from devconnect.infrastructure.github_client import GithubClient
from devconnect.main import app


def _use_transport(handler):
    client = GithubClient(
        base_url="https://github.test", transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_github_client] = lambda: client


async def test_repos_are_proxied(client):
    seen = {}

    def handler(request: httpx.Request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"name": "repo-1"}, {"name": "repo-2"}])

    _use_transport(handler)
    res = await client.get("/api/profile/github/octocat")
    assert res.status_code == 200
    assert [r["name"] for r in res.json()] == ["repo-1", "repo-2"]
    assert seen["path"] == "/users/octocat/repos"
    assert seen["params"] == {"per_page": "5", "sort": "created", "direction": "asc"}


async def test_unknown_github_user_is_404(client):
    _use_transport(lambda request: httpx.Response(404, json={"message": "Not Found"}))
    res = await client.get("/api/profile/github/nobody")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_github_unreachable_is_503(client):
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    _use_transport(handler)
    res = await client.get("/api/profile/github/octocat")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "UPSTREAM_ERROR"
