import pytest

from swagger_doc.engine.base_path import (
    DynamicBasePath,
    LiteralBasePath,
    RequestContext,
    resolve_base_path,
)
from swagger_doc.errors import BasePathError


class TestRequestContext:
    def test_default_port_omitted(self):
        assert RequestContext(scheme="http", host="example.org", port=80).base_url == "http://example.org"
        assert RequestContext(scheme="https", host="example.org", port=443).base_url == "https://example.org"

    def test_non_default_port_kept(self):
        assert RequestContext(scheme="https", host="example.org", port=80).base_url == "https://example.org:80"
        assert RequestContext(scheme="http", host="localhost", port=8080).base_url == "http://localhost:8080"

    def test_from_url(self):
        ctx = RequestContext.from_url("https://api.example.com:8443/ignored")
        assert (ctx.scheme, ctx.host, ctx.port) == ("https", "api.example.com", 8443)


class TestResolveBasePath:
    def test_literal_ignores_request(self):
        base_path = LiteralBasePath(value="http://www.breakcoregivesmewood.com")
        for ctx in (RequestContext(), RequestContext(scheme="https", host="other", port=9000)):
            assert resolve_base_path(base_path, ctx) == "http://www.breakcoregivesmewood.com"

    def test_dynamic_called_per_request(self):
        base_path = DynamicBasePath(func=lambda request: f"{request.base_url}/some_value")
        assert resolve_base_path(base_path, RequestContext(host="example.org")) == "http://example.org/some_value"
        assert (
            resolve_base_path(base_path, RequestContext(scheme="https", host="example.com"))
            == "https://example.com/some_value"
        )

    def test_dynamic_sees_raw_request(self):
        raw = object()
        seen = []
        base_path = DynamicBasePath(func=lambda ctx: seen.append(ctx.request) or "http://x")
        resolve_base_path(base_path, RequestContext(request=raw))
        assert seen == [raw]

    def test_dynamic_must_return_string(self):
        with pytest.raises(BasePathError):
            resolve_base_path(DynamicBasePath(func=lambda ctx: None), RequestContext())

    def test_dynamic_errors_propagate(self):
        def broken(ctx):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            resolve_base_path(DynamicBasePath(func=broken), RequestContext())

    def test_absent_derives_from_request(self):
        ctx = RequestContext(scheme="https", host="example.org", port=80)
        assert resolve_base_path(None, ctx) == "https://example.org:80"
