from pathlib import Path

import pytest

from mcp_new.errors import SpecParseError
from mcp_new.parser.postman import parse_postman, parse_postman_document

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def endpoints():
    return parse_postman((FIXTURES / "collection.postman.json").read_text(encoding="utf-8"))


def _params(endpoint):
    return {p.name: p for p in endpoint.parameters}


class TestParsePostman:
    def test_nested_folders_flattened_in_order(self, endpoints):
        assert [e.summary for e in endpoints] == ["Get User (by id)", "Create User", "Login", "Health"]

    def test_object_url(self, endpoints):
        get_user = endpoints[0]
        assert get_user.method == "GET"
        assert get_user.path == "/users/:id"
        assert get_user.operation_id == "get_user_by_id"
        assert get_user.description == "Fetch one user"

    def test_query_and_variables(self, endpoints):
        params = _params(endpoints[0])
        assert "debug" not in params
        assert params["verbose"].location == "query"
        assert params["verbose"].required is False
        assert params["verbose"].description == "Verbose output"
        assert params["id"].location == "path"
        assert params["id"].required is True

    def test_raw_json_body(self, endpoints):
        create = endpoints[1]
        assert create.method == "POST"
        assert create.path == "/users"
        types = {p.name: p.type for p in create.parameters}
        assert types == {
            "name": "string",
            "age": "number",
            "active": "boolean",
            "roles": "array",
            "meta": "object",
            "nickname": "string",
        }
        assert not any(p.required for p in create.parameters)

    def test_string_url_and_urlencoded_body(self, endpoints):
        login = endpoints[2]
        assert login.path == "/auth/login"
        params = _params(login)
        assert params["username"].type == "string"
        assert params["password"].location == "body"
        assert params["password"].required is False

    def test_string_request(self, endpoints):
        health = endpoints[3]
        assert health.method == "GET"
        assert health.path == "/health"
        assert health.operation_id == "health"

    def test_raw_non_json_body_ignored(self):
        collection = {
            "info": {"schema": "https://schema.getpostman.com/json/collection/v2.0.0/collection.json"},
            "item": [{"name": "Echo", "request": {"method": "POST", "url": "/echo", "body": {"mode": "raw", "raw": "<xml/>"}}}],
        }
        (endpoint,) = parse_postman_document(collection)
        assert endpoint.parameters == ()
        assert endpoint.path == "/echo"

    def test_raw_array_body_ignored(self):
        collection = {
            "info": {"schema": "postman v2.1"},
            "item": [{"name": "Bulk", "request": {"method": "POST", "url": "/bulk", "body": {"mode": "raw", "raw": "[1, 2]"}}}],
        }
        (endpoint,) = parse_postman_document(collection)
        assert endpoint.parameters == ()

    def test_deeply_nested_single_request(self):
        collection = {
            "info": {"schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"},
            "item": [{
                "name": "Level 1",
                "item": [{
                    "name": "Level 2",
                    "item": [{
                        "name": "Level 3",
                        "item": [{"name": "Ping", "request": {"method": "GET", "url": "/ping"}}],
                    }],
                }],
            }],
        }
        (endpoint,) = parse_postman_document(collection)
        assert endpoint.method == "GET"
        assert endpoint.path == "/ping"
        assert endpoint.operation_id == "ping"

    def test_missing_url(self):
        collection = {"info": {"schema": "postman"}, "item": [{"name": "Root", "request": {"method": "GET"}}]}
        (endpoint,) = parse_postman_document(collection)
        assert endpoint.path == "/"


class TestParsePostmanErrors:
    def test_invalid_json(self):
        with pytest.raises(SpecParseError, match="valid JSON"):
            parse_postman("{not json")

    def test_missing_schema(self):
        with pytest.raises(SpecParseError, match="Invalid Postman collection"):
            parse_postman('{"info": {"name": "x"}, "item": []}')

    def test_non_object(self):
        with pytest.raises(SpecParseError):
            parse_postman("[]")
