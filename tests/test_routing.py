"""Routing tests."""

import pytest
from jsroutes_core.routing.matcher import NamePatternMatcher, RegexMatcher
from jsroutes_core.routing.router import (
    RequestContext,
    Route,
    RouteCollection,
    RouteNotFoundError,
    Router,
)


class TestRouter:
    """Test Router class."""

    def test_add_route(self):
        """Test adding routes."""
        router = Router()
        router.add("home", "/", options={"expose": True})
        router.get("users", "/users")
        collection = router.get_route_collection()
        assert list(collection) == ["home", "users"]
        assert collection.get("users").methods == ["GET"]

    def test_route_lookup(self):
        """Test lookup by name."""
        router = Router().add("home", "/")
        assert router.route("home").path == "/"
        with pytest.raises(RouteNotFoundError):
            router.route("missing")

    def test_resources(self):
        """Test resource tracking."""
        router = Router().add_resource("routes.yaml").add_resource("routes.yaml")
        assert router.get_route_collection().resources == ["routes.yaml"]


class TestRouteCollection:
    """Test RouteCollection class."""

    def test_replace_moves_to_end(self):
        """Test re-adding a name replaces and reorders."""
        collection = RouteCollection()
        collection.add("a", Route("/a")).add("b", Route("/b")).add("a", Route("/a2"))
        assert list(collection) == ["b", "a"]
        assert collection.get("a").path == "/a2"

    def test_remove(self):
        """Test removal."""
        collection = RouteCollection().add("a", Route("/a"))
        assert collection.remove("a") is True
        assert collection.remove("a") is False
        assert len(collection) == 0


class TestRoute:
    """Test Route class."""

    def test_leading_slash(self):
        """Test path normalization."""
        assert Route("blog").path == "/blog"

    def test_tokens(self):
        """Test path compilation."""
        route = Route("/users/{id}/edit", requirements={"id": r"\d+"})
        assert route.compile_tokens() == [
            ["text", "/edit"],
            ["variable", "/", r"\d+", "id"],
            ["text", "/users"],
        ]

    def test_static_tokens(self):
        """Test path without variables."""
        assert Route("/").compile_tokens() == [["text", "/"]]

    def test_host_tokens(self):
        """Test host compilation."""
        route = Route("/", host="{sub}.example.com")
        assert route.compile_host_tokens() == [
            ["text", ".example.com"],
            ["variable", "", "[^.]++", "sub"],
        ]
        assert Route("/").compile_host_tokens() == []

    def test_dot_separator_tokens(self):
        """Test a separator other than slash belongs to the variable."""
        route = Route("/blog/{page}.{_format}")
        assert route.compile_tokens() == [
            ["variable", ".", "[^/]++", "_format"],
            ["variable", "/", "[^/.]++", "page"],
            ["text", "/blog"],
        ]

    def test_dash_separator_tokens(self):
        """Test text before a dash separator is kept."""
        route = Route("/archive/{year}-{month}")
        assert route.compile_tokens() == [
            ["variable", "-", "[^/]++", "month"],
            ["variable", "/", "[^/-]++", "year"],
            ["text", "/archive"],
        ]

    def test_variables(self):
        """Test path and host variable names."""
        route = Route("/{_locale}/blog/{slug}", host="{sub}.example.com")
        assert route.variables == ["_locale", "slug", "sub"]


class TestRequestContext:
    """Test RequestContext class."""

    def test_port_for_scheme(self):
        """Test scheme port lookup."""
        context = RequestContext(http_port=8080, https_port=8443)
        assert context.get_port_for_scheme("http") == 8080
        assert context.get_port_for_scheme("HTTPS") == 8443
        with pytest.raises(ValueError):
            context.get_port_for_scheme("ftp")

    def test_default_ports(self):
        """Test default ports."""
        context = RequestContext()
        assert context.get_port_for_scheme() == 80
        assert context.get_port_for_scheme("https") == 443


class TestMatchers:
    """Test pattern matchers."""

    def test_regex_search(self):
        """Test unanchored regex search."""
        matcher = RegexMatcher()
        assert matcher.matches("blog", "my_blog_post")
        assert not matcher.matches("^blog", "my_blog_post")

    def test_name_pattern_matcher(self):
        """Test alternation of fragments."""
        matcher = NamePatternMatcher(["^api_", "_public$"])
        assert matcher.pattern == "(^api_)|(_public$)"
        assert matcher.matches("api_users")
        assert matcher.matches("news_public")
        assert not matcher.matches("admin")

    def test_empty_never_matches(self):
        """Test empty pattern list."""
        matcher = NamePatternMatcher()
        assert matcher.pattern == ""
        assert not matcher.matches("anything")
