"""Tests for structural and cross-reference validation"""
import pytest

from ccode.errors import InvalidConfigError
from ccode.profiles import DirectProfile, RouterProfile
from ccode.providers import (
    ProviderKind,
    ProxyConfig,
    RouteSet,
    find_dangling_references,
    route_provider,
    validate_cross_references,
    validate_direct_profile,
    validate_provider,
    validate_provider_names_unique,
    validate_proxy_config,
    validate_route,
    validate_route_set,
    validate_router_profile,
)


class TestValidateProvider:
    """Test provider field rules"""

    def test_valid(self, make_provider):
        validate_provider(make_provider())

    def test_blank_name(self, make_provider):
        with pytest.raises(InvalidConfigError) as exc:
            validate_provider(make_provider(name="  "))
        assert exc.value.field == "name"

    @pytest.mark.parametrize("url", ["", "ftp://x.test/chat/completions", "api.x.test"])
    def test_bad_url(self, make_provider, url):
        with pytest.raises(InvalidConfigError) as exc:
            validate_provider(make_provider(api_base_url=url))
        assert exc.value.field == "api_base_url"

    def test_empty_models(self, make_provider):
        with pytest.raises(InvalidConfigError) as exc:
            validate_provider(make_provider(models=()))
        assert exc.value.field == "models"

    def test_kind_rule_applied(self, make_provider):
        p = make_provider(provider_type=ProviderKind.GEMINI)
        with pytest.raises(InvalidConfigError, match="v1beta/models"):
            validate_provider(p)

    def test_openai_kind_requires_chat_completions(self, make_provider):
        p = make_provider(
            api_base_url="https://api.acme.test/v1",
            provider_type=ProviderKind.OPENAI,
        )
        with pytest.raises(InvalidConfigError, match="/chat/completions"):
            validate_provider(p)

    def test_no_kind_skips_shape_rule(self, make_provider):
        validate_provider(make_provider(api_base_url="http://localhost:8080/anything"))

    def test_custom_kind_any_path(self, make_provider):
        validate_provider(
            make_provider(
                api_base_url="http://localhost:11434/api",
                provider_type=ProviderKind.CUSTOM,
            )
        )

    def test_duplicate_names(self, make_provider):
        with pytest.raises(InvalidConfigError, match="acme"):
            validate_provider_names_unique([make_provider(), make_provider()])


class TestValidateRoutes:
    """Test route string shape"""

    @pytest.mark.parametrize(
        "route",
        ["acme,m1", "openrouter,anthropic/claude-sonnet-4:online", "local,qwen3:32b"],
    )
    def test_valid(self, route):
        validate_route(route, "default")

    @pytest.mark.parametrize("route", ["", "acme", ",m1", "acme,", "a,b,c", "acme,:online"])
    def test_invalid(self, route):
        with pytest.raises(InvalidConfigError) as exc:
            validate_route(route, "think")
        assert exc.value.field == "think"

    def test_route_provider(self):
        assert route_provider("acme,m1") == "acme"
        assert route_provider("or,a/b:online") == "or"
        assert route_provider(" acme,m1") == " acme"

    @pytest.mark.parametrize("route", [" acme,m1", "acme ,m1", "acme, m1", "acme,m1 "])
    def test_padded_segments_rejected(self, route):
        with pytest.raises(InvalidConfigError, match="whitespace"):
            validate_route(route, "default")

    def test_route_set_blank_optional_allowed(self):
        validate_route_set(RouteSet(default="acme,m1", think="  ", background=None))

    def test_route_set_bad_optional(self):
        with pytest.raises(InvalidConfigError) as exc:
            validate_route_set(RouteSet(default="acme,m1", long_context="oops"))
        assert exc.value.field == "longContext"

    def test_route_set_bad_default(self):
        with pytest.raises(InvalidConfigError) as exc:
            validate_route_set(RouteSet(default="acme"))
        assert exc.value.field == "default"

    def test_threshold_must_be_positive(self):
        with pytest.raises(InvalidConfigError):
            validate_route_set(RouteSet(default="a,b", long_context_threshold=0))


class TestCrossReferences:
    """Test route → provider resolution"""

    def test_all_resolve(self, make_provider):
        rs = RouteSet(default="acme,m1", web_search="acme,m2:online")
        assert validate_cross_references([make_provider()], rs) == []

    def test_strict_raises_first(self, make_provider):
        rs = RouteSet(default="ghost,m1", think="phantom,x")
        with pytest.raises(InvalidConfigError, match="ghost") as exc:
            validate_cross_references([make_provider()], rs)
        assert exc.value.field == "default"

    def test_collect_returns_all(self, make_provider):
        rs = RouteSet(default="ghost,m1", think="phantom,x", background="acme,m1")
        problems = validate_cross_references([make_provider()], rs, collect=True)
        assert len(problems) == 2
        assert "ghost" in problems[0]
        assert "phantom" in problems[1]

    def test_dangling_reference_details(self):
        dangling = find_dangling_references([], RouteSet(default="ghost,m1"))
        assert [(d.route_name, d.provider) for d in dangling] == [("default", "ghost")]

    def test_blank_optional_not_checked(self, make_provider):
        rs = RouteSet(default="acme,m1", think="")
        assert validate_cross_references([make_provider()], rs, collect=True) == []

    def test_padded_provider_does_not_resolve(self, make_provider):
        rs = RouteSet(default=" acme,m1")
        problems = validate_cross_references([make_provider()], rs, collect=True)
        assert problems == ["Route 'default' references unknown provider ' acme'"]


class TestProxyConfigValidation:
    """Test whole-document validation used by save"""

    def test_empty_providers_reports_route(self):
        doc = ProxyConfig(route_set=RouteSet(default="ghost,m1"))
        with pytest.raises(InvalidConfigError, match="ghost"):
            validate_proxy_config(doc)

    def test_new_document_is_not_saveable(self):
        with pytest.raises(InvalidConfigError):
            validate_proxy_config(ProxyConfig.new())

    def test_valid(self, make_provider):
        doc = ProxyConfig(
            providers=[make_provider(), make_provider("b")],
            route_set=RouteSet(default="acme,m1", think="b,m2"),
        )
        validate_proxy_config(doc)


class TestProfileValidation:
    """Test local profile rules"""

    def test_direct_ok(self, direct_profile):
        validate_direct_profile(direct_profile)

    def test_direct_blank_token(self):
        p = DirectProfile(auth_token=" ", base_url="https://x.test")
        with pytest.raises(InvalidConfigError):
            validate_direct_profile(p)

    def test_direct_bad_url(self):
        p = DirectProfile(auth_token="t", base_url="x.test")
        with pytest.raises(InvalidConfigError, match="http"):
            validate_direct_profile(p)

    def test_router_profile_blank_name(self):
        p = RouterProfile(name="", route_set=RouteSet(default="a,b"))
        with pytest.raises(InvalidConfigError):
            validate_router_profile(p)

    def test_router_profile_bad_route(self):
        p = RouterProfile(name="x", route_set=RouteSet(default="a"))
        with pytest.raises(InvalidConfigError):
            validate_router_profile(p)
