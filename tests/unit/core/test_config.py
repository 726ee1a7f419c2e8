import re

import pytest

from app.core.config import Settings, build_cors_origin_regex, split_exact_origins


class TestCorsOrigins:
    def test_json_list_string(self):
        s = Settings(jwt_secret_key="x", cors_origins='["https://a.example", "localhost:*"]')

        assert s.get_cors_origins_list() == ["https://a.example", "localhost:*"]

    def test_comma_separated_string(self):
        s = Settings(jwt_secret_key="x", cors_origins="https://a.example, https://b.example")

        assert s.get_cors_origins_list() == ["https://a.example", "https://b.example"]

    def test_list_passes_through(self):
        s = Settings(jwt_secret_key="x", cors_origins=["https://a.example"])

        assert s.get_cors_origins_list() == ["https://a.example"]

    def test_exact_origins_drop_wildcards(self):
        assert split_exact_origins(["https://a.example", "localhost:*", "*"]) == ["https://a.example", "*"]

    def test_no_wildcards_means_no_regex(self):
        assert build_cors_origin_regex(["https://a.example"]) is None

    @pytest.mark.parametrize("origin,allowed", [
        ("http://localhost:3000", True),
        ("https://localhost", True),
        ("http://127.0.0.1:8080", True),
        ("https://shop.example.com", True),
        ("https://evil.com", False),
        ("http://localhost.evil.com", False),
    ])
    def test_wildcard_regex(self, origin, allowed):
        pattern = build_cors_origin_regex(["localhost:*", "127.0.0.1:*", "https://*.example.com"])

        assert bool(re.fullmatch(pattern, origin)) is allowed


class TestDefaults:
    def test_defaults(self):
        s = Settings(jwt_secret_key="x")

        assert s.auth_header_name == "x-auth-token"
        assert s.api_prefix == "/Api"
        assert s.jwt_algorithm == "HS256"
        assert s.default_page_limit == 10
        assert s.max_page_limit == 100
