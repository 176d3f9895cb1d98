"""Cache and serializer tests."""

import json
import os

import pytest
from jsroutes_core.cache.routes_cache import RoutesCache
from jsroutes_core.extractor.extractor import ExposedRoutesExtractor
from jsroutes_core.extractor.serializer import (
    filter_payload,
    serialize_exposed_routes,
    serialize_route,
    serialize_routes,
    to_json,
)
from jsroutes_core.routing.router import RequestContext, Route, Router
from jsroutes_core.security.acl import AccessMap
from jsroutes_core.security.auth import Token, TokenStorage, User
from jsroutes_core.utils.config import Config


@pytest.fixture
def router():
    router = Router(RequestContext(host="example.com", http_port=8080, base_url="/app"))
    router.add(
        "blog_show",
        "/blog/{slug}",
        defaults={"_controller": "blog:show", "slug": "index", "page": 1},
        options={"expose": True},
        methods=["GET"],
    )
    router.add("admin_panel", "/admin/panel")
    router.add("private", "/private")
    return router


def make_extractor(router, cache_dir, *roles, **kwargs):
    return ExposedRoutesExtractor(
        router,
        routes_to_expose=["^admin_"],
        cache_dir=str(cache_dir),
        access_map=AccessMap().add("^/admin", roles=["ROLE_ADMIN"]),
        token_storage=TokenStorage(Token(User("someone", roles=list(roles)))),
        **kwargs,
    )


class TestSerializer:
    """Test payload serialization."""

    def test_payload(self, router):
        """Test context and routes in payload."""
        extractor = ExposedRoutesExtractor(router)
        payload = serialize_routes(extractor, "en")

        assert payload["base_url"] == "/app"
        assert payload["host"] == "example.com:8080"
        assert payload["port"] == "8080"
        assert payload["scheme"] == "http"
        assert payload["prefix"] == ""
        assert payload["locale"] == "en"
        assert list(payload["routes"]) == ["blog_show"]

        route = payload["routes"]["blog_show"]
        assert route["defaults"] == {"slug": "index"}
        assert route["methods"] == ["GET"]
        assert route["tokens"] == [
            ["variable", "/", "[^/]++", "slug"],
            ["text", "/blog"],
        ]

    def test_defaults_limited_to_variables(self):
        """Test defaults keep underscore variables and drop the rest."""
        route = Route(
            "/{_locale}/blog/{page}.{_format}",
            defaults={"_format": "html", "_locale": "en", "page": 1, "_controller": "x", "extra": "y"},
        )
        data = serialize_route(route)
        assert data["defaults"] == {"_format": "html", "_locale": "en", "page": 1}
        assert data["tokens"][0] == ["variable", ".", "[^/]++", "_format"]
        assert ["text", "."] not in data["tokens"]

    def test_exposed_payload_carries_roles(self, router):
        """Test the user-independent payload lists required roles."""
        payload = serialize_exposed_routes(make_extractor(router, "", "ROLE_USER"))
        assert payload["routes"]["blog_show"]["roles"] is None
        assert payload["routes"]["admin_panel"]["roles"] == ["ROLE_ADMIN"]

    def test_filter_payload(self, router):
        """Test role filtering strips role data."""
        payload = serialize_exposed_routes(make_extractor(router, "", "ROLE_USER"))

        user = filter_payload(payload, ["ROLE_USER"])
        assert list(user["routes"]) == ["blog_show"]
        assert "roles" not in user["routes"]["blog_show"]

        admin = filter_payload(payload, ["ROLE_ADMIN"])
        assert list(admin["routes"]) == ["blog_show", "admin_panel"]
        assert "roles" in payload["routes"]["admin_panel"]

    def test_to_json(self, router):
        """Test compact JSON output."""
        payload = serialize_routes(ExposedRoutesExtractor(router))
        text = to_json(payload)
        assert ", " not in text
        assert json.loads(text) == payload


class TestRoutesCache:
    """Test cache file handling."""

    def test_write_and_read(self, router, tmp_path):
        """Test writing then reading the cache."""
        cache = RoutesCache(make_extractor(router, tmp_path, "ROLE_USER"))
        assert cache.read("en") is None

        path = cache.write("en")
        assert path == os.path.join(str(tmp_path), "fosJsRouting", "data.json")
        assert cache.read("en")["routes"]["blog_show"]["defaults"] == {"slug": "index"}
        assert os.listdir(os.path.dirname(path)) == ["data.json"]

    def test_users_sharing_cache(self, router, tmp_path):
        """Test each user sees only their routes from a shared cache."""
        router.add_resource(str(tmp_path / "routes.yaml"))

        admin = RoutesCache(make_extractor(router, tmp_path, "ROLE_ADMIN")).get("en")
        user = RoutesCache(make_extractor(router, tmp_path, "ROLE_USER")).get("en")
        admin_again = RoutesCache(make_extractor(router, tmp_path, "ROLE_ADMIN")).get("en")

        assert "admin_panel" in admin["routes"]
        assert "admin_panel" not in user["routes"]
        assert "blog_show" in user["routes"]
        assert "admin_panel" in admin_again["routes"]

    def test_less_privileged_build_first(self, router, tmp_path):
        """Test a cache built by a plain user still serves admins."""
        router.add_resource(str(tmp_path / "routes.yaml"))

        RoutesCache(make_extractor(router, tmp_path, "ROLE_USER")).get("en")
        admin = RoutesCache(make_extractor(router, tmp_path, "ROLE_ADMIN")).get("en")
        assert "admin_panel" in admin["routes"]

    def test_freshness(self, router, tmp_path):
        """Test cache goes stale when a resource changes."""
        resource = tmp_path / "routes.yaml"
        resource.write_text("blog_show: ...")
        router.add_resource(str(resource))

        cache = RoutesCache(make_extractor(router, tmp_path))
        assert not cache.is_fresh("en")

        path = cache.write("en")
        os.utime(str(resource), (1000, 1000))
        os.utime(path, (2000, 2000))
        assert cache.is_fresh("en")

        os.utime(str(resource), (3000, 3000))
        assert not cache.is_fresh("en")

    def test_missing_resource_ignored(self, router, tmp_path):
        """Test deleted resources do not invalidate the cache."""
        router.add_resource(str(tmp_path / "gone.yaml"))
        cache = RoutesCache(make_extractor(router, tmp_path))
        cache.write("en")
        assert cache.is_fresh("en")

    def test_no_resources_never_fresh(self, router, tmp_path):
        """Test in-memory route tables are rebuilt on every get."""
        cache = RoutesCache(make_extractor(router, tmp_path, "ROLE_USER"))
        cache.write("en")
        assert not cache.is_fresh("en")

        router.add("late", "/late", options={"expose": True})
        assert "late" in cache.get("en")["routes"]

    def test_failed_write_leaves_no_temp_file(self, router, tmp_path):
        """Test the temporary file is removed when the write fails."""
        cache = RoutesCache(make_extractor(router, tmp_path, "ROLE_USER"))
        router.add("bad", "/bad/{bad}", defaults={"bad": object()}, options={"expose": True})

        with pytest.raises(TypeError):
            cache.write("en")
        assert os.listdir(str(tmp_path / "fosJsRouting")) == []

    def test_get_rebuilds(self, router, tmp_path):
        """Test get writes the cache when absent."""
        extractor = make_extractor(router, tmp_path, bundles=["JMSI18nRoutingBundle"])
        payload = RoutesCache(extractor).get("fr")
        assert payload["prefix"] == "fr__RG__"
        assert os.path.isfile(extractor.get_cache_path("fr"))
        assert not os.path.exists(extractor.get_cache_path("en"))

    def test_warm_locales(self, router, tmp_path):
        """Test warming writes one file per configured locale."""
        extractor = make_extractor(router, tmp_path, bundles=["JMSI18nRoutingBundle"])
        paths = RoutesCache(extractor).warm(Config(locales=["en", "fr"]))
        assert [os.path.basename(p) for p in paths] == ["data.en.json", "data.fr.json"]

    def test_warm_default_locale(self, router, tmp_path):
        """Test warming falls back to the default locale."""
        extractor = make_extractor(router, tmp_path, bundles=["JMSI18nRoutingBundle"])
        paths = RoutesCache(extractor).warm(Config(default_locale="de"))
        assert [os.path.basename(p) for p in paths] == ["data.de.json"]
