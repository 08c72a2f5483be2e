"""Tests for the synchronous Hangar client."""

from __future__ import annotations

import httpx
import pytest

from pyhangar import __version__
from pyhangar.client import HangarClient
from pyhangar.exceptions import (
    DecodeError,
    DownloadUnavailableError,
    HTTPStatusError,
    InvalidArgumentError,
    NotFoundError,
    RequestTimeoutError,
    TransportError,
    VersionNotFoundError,
)
from pyhangar.models import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig, Project


@pytest.fixture
def client(hangar, make_client) -> HangarClient:
    return make_client(hangar.handler)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_defaults(self) -> None:
        with HangarClient() as client:
            assert client.config.base_url == DEFAULT_BASE_URL
            assert client.config.timeout == DEFAULT_TIMEOUT
            assert client.config.token is None

    def test_blank_base_url_and_zero_timeout_use_defaults(self) -> None:
        config = ClientConfig(base_url="", timeout=0)
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT

    def test_no_request_on_construction(self, hangar) -> None:
        with HangarClient(ClientConfig(transport=hangar.transport())):
            pass
        assert hangar.requests == []


# ---------------------------------------------------------------------------
# Request contract
# ---------------------------------------------------------------------------


class TestRequests:
    def test_headers_without_token(self, hangar, client) -> None:
        hangar.json("/projects/fancyglow", {"id": 1, "name": "FancyGlow"})
        client.get_project("fancyglow")
        request = hangar.requests[0]
        assert request.method == "GET"
        assert request.headers["accept"] == "application/json"
        assert request.headers["user-agent"] == f"pyhangar/{__version__}"
        assert "authorization" not in request.headers

    def test_bearer_token_attached(self, hangar, make_client) -> None:
        hangar.json("/projects/fancyglow", {"id": 1, "name": "FancyGlow"})
        make_client(hangar.handler, token="secret").get_project("fancyglow")
        assert hangar.requests[0].headers["authorization"] == "Bearer secret"

    def test_path_escaped_once(self, hangar, client) -> None:
        hangar.json("/projects/a%2Fb%20c", {"id": 1, "name": "Odd"})
        assert client.get_project("a/b c").name == "Odd"
        assert hangar.paths == ["/projects/a%2Fb%20c"]

    def test_dot_segments_do_not_change_endpoint(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow/stats", {"2024-01-01": {"downloads": 99, "views": 1}})
        hangar.json("/projects/fancyglow/versions/%2E%2E/stats", fixture_data("stats"))
        hangar.text("/projects/fancyglow/pages/%2E", "# Dot")
        stats = client.get_version_stats("fancyglow", "..")
        page = client.get_project_page("fancyglow", ".")
        assert hangar.paths == [
            "/projects/fancyglow/versions/%2E%2E/stats",
            "/projects/fancyglow/pages/%2E",
        ]
        assert stats["2024-01-01"].downloads == 5
        assert page.contents == "# Dot"

    def test_list_defaults_sent(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects", fixture_data("projects_list"))
        client.list_projects()
        params = hangar.requests[0].url.params
        assert params["limit"] == "25"
        assert params["offset"] == "0"
        assert "category" not in params

    def test_invalid_argument_makes_no_request(self, hangar, client) -> None:
        with pytest.raises(InvalidArgumentError):
            client.get_project("")
        assert hangar.requests == []


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_not_found(self, hangar, client) -> None:
        hangar.text("/projects/missing", "project not found", status_code=404)
        with pytest.raises(NotFoundError) as exc_info:
            client.get_project("missing")
        err = exc_info.value
        assert err.status_code == 404
        assert err.body == "project not found"
        assert "404" in str(err)
        assert str(err) == (
            "failed to get project: API request failed with status 404: project not found"
        )

    def test_server_error(self, hangar, client) -> None:
        hangar.text("/projects/broken", "boom", status_code=500)
        with pytest.raises(HTTPStatusError) as exc_info:
            client.get_project("broken")
        assert not isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 500

    def test_invalid_json(self, hangar, client) -> None:
        hangar.text("/projects/fancyglow", "<html>oops</html>")
        with pytest.raises(DecodeError):
            client.get_project("fancyglow")

    def test_wrong_shape(self, hangar, client) -> None:
        hangar.json("/projects/fancyglow", [1, 2, 3])
        with pytest.raises(DecodeError, match="get project"):
            client.get_project("fancyglow")

    def test_timeout_not_retried(self, make_client) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(RequestTimeoutError) as exc_info:
            make_client(handler, timeout=0.01).get_project("slow")
        assert len(calls) == 1
        assert isinstance(exc_info.value, TransportError)
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_connection_error(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_client(handler).list_staff()
        assert not isinstance(exc_info.value, RequestTimeoutError)
        assert str(exc_info.value).startswith("failed to list staff: HTTP request failed")


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class TestProjects:
    def test_get_project(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow", fixture_data("project"))
        project = client.get_project("fancyglow")
        assert isinstance(project, Project)
        assert project.id == 1950
        assert project.namespace.owner == "Crystal"
        assert project.stats.views == 3618
        assert project.settings.license.name == "MIT"

    def test_list_projects_preserves_pagination(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects", fixture_data("projects_list"))
        projects = client.list_projects(limit=25, category="gameplay")
        assert projects.pagination.count == 2426
        assert projects.pagination.limit == 25
        assert projects.pagination.offset == 0
        assert [p.name for p in projects.result] == ["FancyGlow", "ViaVersion"]
        assert hangar.requests[0].url.params["category"] == "gameplay"

    def test_members(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow/members", fixture_data("members"))
        members = client.get_project_members("fancyglow")
        assert [m.user for m in members.result] == ["Crystal", "helper"]
        assert members.result[0].accepted is True
        assert members.result[1].accepted is False
        assert members.result[0].role_names == "Owner"

    def test_stats(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow/stats", fixture_data("stats"))
        stats = client.get_project_stats("fancyglow", "2024-01-01", "2024-01-03")
        assert stats["2024-01-01"].downloads == 5
        assert hangar.requests[0].url.params["fromDate"] == "2024-01-01"

    def test_page_json(self, hangar, client) -> None:
        hangar.json(
            "/projects/fancyglow/pages/home",
            {"id": 9, "name": "Resource Page", "slug": "home", "contents": "# Hi"},
        )
        page = client.get_project_main_page("fancyglow")
        assert page.name == "Resource Page"
        assert page.contents == "# Hi"

    def test_page_raw_markdown(self, hangar, client) -> None:
        hangar.text("/projects/fancyglow/pages/docs%2Fconfig", "[![badge](x)](y)\nText")
        page = client.get_project_page("fancyglow", "docs/config")
        assert page.contents == "[![badge](x)](y)\nText"
        assert page.slug == "docs/config"


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


class TestVersions:
    def test_download_url_prefers_hosted(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/Crystal/fancyglow/versions", fixture_data("versions_list"))
        url = client.get_download_url("Crystal", "fancyglow", "2.0.0")
        assert url.startswith("https://hangarcdn.papermc.io/")
        assert hangar.requests[0].url.params["limit"] == "100"

    def test_download_url_external_fallback(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/Crystal/fancyglow/versions", fixture_data("versions_list"))
        url = client.get_download_url("Crystal", "fancyglow", "2.0.0", "velocity")
        assert url == "https://github.com/example/FancyGlow/releases/2.0.0-velocity"

    def test_download_url_unavailable(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/Crystal/fancyglow/versions", fixture_data("versions_list"))
        with pytest.raises(DownloadUnavailableError):
            client.get_download_url("Crystal", "fancyglow", "1.9.0", "PAPER")

    def test_download_url_version_missing(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/Crystal/fancyglow/versions", fixture_data("versions_list"))
        with pytest.raises(VersionNotFoundError, match="version 3.0.0 not found"):
            client.get_download_url("Crystal", "fancyglow", "3.0.0")

    def test_list_versions(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/Crystal/fancyglow/versions", fixture_data("versions_list"))
        versions = client.list_versions("Crystal", "fancyglow", limit=10, offset=20)
        assert len(versions.result) == 3
        assert versions.result[0].platform_dependencies["PAPER"] == ["1.20", "1.20.1"]
        params = hangar.requests[0].url.params
        assert (params["limit"], params["offset"]) == ("10", "20")

    def test_get_by_id_and_hash(self, hangar, client, fixture_data) -> None:
        hangar.json("/versions/301", fixture_data("version"))
        hangar.json("/versions/find/abc123", fixture_data("version"))
        assert client.get_version_by_id(301).name == "2.0.0"
        found = client.get_version_by_hash("abc123")
        assert found.downloads["PAPER"].file_info.sha256_hash == "abc123"

    def test_latest_plain_text_then_version(self, hangar, client, fixture_data) -> None:
        hangar.text("/projects/fancyglow/latest", "2.0.0")
        hangar.json("/projects/fancyglow/versions/2.0.0", fixture_data("version"))
        version = client.get_latest_version("fancyglow", channel="Release")
        assert version.id == 301
        assert hangar.paths == ["/projects/fancyglow/latest", "/projects/fancyglow/versions/2.0.0"]
        assert hangar.requests[0].url.params["channel"] == "Release"

    def test_latest_object_single_request(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow/latest", fixture_data("version"))
        assert client.get_latest_version("fancyglow").name == "2.0.0"
        assert len(hangar.requests) == 1

    def test_latest_name_json_string(self, hangar, client) -> None:
        hangar.json("/projects/fancyglow/latest", "2.0.0")
        assert client.get_latest_version_name("fancyglow") == "2.0.0"

    def test_latest_empty_body(self, hangar, client) -> None:
        hangar.text("/projects/fancyglow/latest", "")
        with pytest.raises(DecodeError):
            client.get_latest_version_name("fancyglow")

    def test_latest_release_uses_release_channel(self, hangar, client, fixture_data) -> None:
        hangar.json("/projects/fancyglow/latest", fixture_data("version"))
        client.get_latest_release_version("fancyglow")
        assert hangar.requests[0].url.params["channel"] == "Release"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class TestUsers:
    def test_get_user_tolerates_bare_roles(self, hangar, client, fixture_data) -> None:
        hangar.json("/users/kennytv", fixture_data("user"))
        user = client.get_user("kennytv")
        assert user.project_count == 4
        assert [role.id for role in user.roles] == [1, 3]
        assert user.join_date is not None and user.join_date.year == 2022

    def test_list_users_query(self, hangar, client, fixture_data) -> None:
        hangar.json("/users", fixture_data("users_list"))
        users = client.list_users("kenny")
        assert users.pagination.count == 2
        assert users.result[0].role_names == "Hangar Admin"
        assert hangar.requests[0].url.params["query"] == "kenny"

    def test_staff_bare_array(self, hangar, client, fixture_data) -> None:
        hangar.json("/staff", fixture_data("staff"))
        staff = client.list_staff()
        assert [member.name for member in staff] == ["kennytv", "Machine_Maker"]
        assert staff[0].role_names == "Hangar Admin"

    def test_staff_envelope_flattened(self, hangar, client, fixture_data) -> None:
        hangar.json("/staff", {"pagination": {"count": 2}, "result": fixture_data("staff")})
        assert len(client.list_staff()) == 2

    def test_pinned_bare_array(self, hangar, client, fixture_data) -> None:
        projects = fixture_data("projects_list")["result"]
        hangar.json("/users/kennytv/pinned", projects)
        pinned = client.get_user_pinned("kennytv")
        assert pinned.pagination.count == 2
        assert [p.id for p in pinned.result] == [1950, 7]

    def test_starred_envelope(self, hangar, client, fixture_data) -> None:
        hangar.json("/users/kennytv/starred", fixture_data("projects_list"))
        starred = client.get_user_starred("kennytv", limit=5)
        assert starred.pagination.count == 2426
        assert hangar.requests[0].url.params["limit"] == "5"

    def test_authors(self, hangar, client, fixture_data) -> None:
        hangar.json("/authors", fixture_data("users_list"))
        authors = client.list_authors()
        assert [a.name for a in authors.result] == ["kennytv", "Crystal"]


class TestScenarios:
    def test_project_not_found_json_body(self, hangar, client) -> None:
        hangar.json("/projects/missing", {"error": "project not found"}, status_code=404)
        with pytest.raises(NotFoundError) as exc_info:
            client.get_project("missing")
        assert "404" in str(exc_info.value)
        assert "project not found" in exc_info.value.body

    def test_external_only_download(self, hangar, client) -> None:
        hangar.json(
            "/projects/TestOwner/testplugin/versions",
            {
                "pagination": {"count": 1, "limit": 100, "offset": 0},
                "result": [
                    {
                        "id": 2,
                        "name": "2.0.1",
                        "downloads": {
                            "PAPER": {
                                "externalUrl": "https://cdn.test.com/testplugin-2.0.1.jar",
                                "downloadUrl": "",
                            }
                        },
                    }
                ],
            },
        )
        url = client.get_download_url("TestOwner", "testplugin", "2.0.1", "PAPER")
        assert url == "https://cdn.test.com/testplugin-2.0.1.jar"
