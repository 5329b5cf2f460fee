from swagger_doc.engine.paths import effective_version, nickname, resolve_paths, resource_key
from swagger_doc.tree.builder import ApiBuilder


def _endpoints(root: ApiBuilder):
    return root.build().endpoints


class TestResolvePaths:
    def test_root_endpoint_without_mounts(self):
        [ep] = _endpoints(ApiBuilder().get("/something"))
        assert resolve_paths(ep) == ["/something.{format}"]
        assert resolve_paths(ep, hide_format=True) == ["/something"]

    def test_placeholders_are_brace_wrapped(self):
        [ep] = _endpoints(ApiBuilder().get("/users/:id/posts/{post_id}"))
        assert resolve_paths(ep) == ["/users/{id}/posts/{post_id}.{format}"]

    def test_mount_prefixes_are_concatenated(self):
        leaf = ApiBuilder("leaf").get("/items")
        middle = ApiBuilder("middle").mount(leaf, "/b")
        [ep] = _endpoints(ApiBuilder().mount(middle, "/a"))
        assert resolve_paths(ep, hide_format=True) == ["/a/b/items"]

    def test_empty_prefix_adds_no_slash(self):
        [ep] = _endpoints(ApiBuilder().mount(ApiBuilder("child").get("/items"), ""))
        assert resolve_paths(ep) == ["/items.{format}"]

    def test_sibling_mounts_stay_distinct(self):
        root = ApiBuilder()
        root.mount(ApiBuilder("a").get("/items"), "/a")
        root.mount(ApiBuilder("b").get("/items"), "/b")
        paths = [resolve_paths(ep, hide_format=True)[0] for ep in _endpoints(root)]
        assert paths == ["/a/items", "/b/items"]

    def test_root_path(self):
        [ep] = _endpoints(ApiBuilder().get("/"))
        assert resolve_paths(ep) == ["/.{format}"]
        assert resolve_paths(ep, hide_format=True) == ["/"]


class TestVersionInPath:
    def test_root_version_comes_first(self):
        [ep] = _endpoints(ApiBuilder(version="v1").mount(ApiBuilder("child").get("/something")))
        assert resolve_paths(ep) == ["/v1/something.{format}"]

    def test_version_after_route_prefix(self):
        child = ApiBuilder("child", route_prefix="api", version="v1").get("/something")
        [ep] = _endpoints(ApiBuilder().mount(child))
        assert resolve_paths(ep, hide_format=True) == ["/api/v1/something"]

    def test_version_inserted_where_declared(self):
        child = ApiBuilder("child", version="v2").get("/things")
        [ep] = _endpoints(ApiBuilder().mount(child, "/admin"))
        assert resolve_paths(ep, hide_format=True) == ["/admin/v2/things"]

    def test_repeated_version_appears_once(self):
        child = ApiBuilder("child", version="v1").get("/something", version="v1")
        [ep] = _endpoints(ApiBuilder(version="v1").mount(child, "/child"))
        assert resolve_paths(ep, hide_format=True) == ["/v1/child/something"]

    def test_innermost_conflicting_version_wins(self):
        child = ApiBuilder("child", version="v2").get("/something")
        [ep] = _endpoints(ApiBuilder(version="v1").mount(child, "/child"))
        assert effective_version(ep) == [("v2", 1)]
        assert resolve_paths(ep, hide_format=True) == ["/child/v2/something"]

    def test_endpoint_version_uses_declaring_mount_slot(self):
        child = ApiBuilder("child").get("/something", version="v3")
        [ep] = _endpoints(ApiBuilder().mount(child, "/child"))
        assert resolve_paths(ep, hide_format=True) == ["/child/v3/something"]

    def test_header_versioning_leaves_path_alone(self):
        [ep] = _endpoints(ApiBuilder(version="v1", versioning="header").get("/something"))
        assert effective_version(ep) == []
        assert resolve_paths(ep) == ["/something.{format}"]

    def test_one_path_per_version(self):
        [ep] = _endpoints(ApiBuilder(version=["v1", "v2"]).get("/something"))
        assert resolve_paths(ep, hide_format=True) == ["/v1/something", "/v2/something"]

    def test_shared_version_stays_where_introduced(self):
        child = ApiBuilder("child", version="v1").get("/x")
        [ep] = _endpoints(ApiBuilder(version=["v1", "v2"]).mount(child, "/c"))
        assert effective_version(ep) == [("v1", 0)]
        assert resolve_paths(ep, hide_format=True) == ["/v1/c/x"]

    def test_each_version_finds_its_own_slot(self):
        leaf = ApiBuilder("leaf", version=["v1", "v2"]).get("/x")
        middle = ApiBuilder("middle", version="v2").mount(leaf, "/leaf")
        [ep] = _endpoints(ApiBuilder(version="v1").mount(middle, "/m"))
        assert resolve_paths(ep, hide_format=True) == ["/v1/m/leaf/x", "/m/v2/leaf/x"]


class TestResourceKey:
    def test_first_local_segment(self):
        [ep] = _endpoints(ApiBuilder().get("/something/:id"))
        assert resource_key(ep) == "something"

    def test_skips_route_prefix_and_version(self):
        child = ApiBuilder("child", route_prefix="api", version="v1").get("/something")
        [ep] = _endpoints(ApiBuilder().mount(child))
        assert resource_key(ep) == "something"

    def test_mount_prefix_is_the_resource(self):
        [ep] = _endpoints(ApiBuilder().mount(ApiBuilder("child").get("/items"), "/admin"))
        assert resource_key(ep) == "admin"

    def test_no_segment(self):
        [ep] = _endpoints(ApiBuilder(version="v1").get("/"))
        assert resource_key(ep) is None


class TestNickname:
    def test_matches_documented_form(self):
        assert nickname("GET", "/something.{format}") == "GET-something---format-"

    def test_format_suffix_gives_three_separators(self):
        assert nickname("GET", "/v1/something.{format}") == "GET-v1-something---format-"
        assert nickname("GET", "/users/{id}.{format}") == "GET-users--id----format-"

    def test_hidden_format(self):
        assert nickname("GET", "/something") == "GET-something"

    def test_method_is_uppercased(self):
        assert nickname("post", "/users/{id}") == "POST-users--id-"

    def test_separator_runs_are_kept(self):
        assert nickname("GET", "/a/{b}") == "GET-a--b-"
        assert nickname("GET", "/a/{b}") != nickname("GET", "/a/b")

    def test_is_deterministic(self):
        assert nickname("GET", "/x/{y}.{format}") == nickname("GET", "/x/{y}.{format}")
