from pathlib import Path

import pytest

from mcp_new.errors import SpecParseError
from mcp_new.parser.detect import detect_format, parse_spec, parse_spec_file

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_openapi(self):
        assert detect_format({"openapi": "3.0.0"}) == "openapi"

    def test_swagger(self):
        assert detect_format({"swagger": "2.0"}) == "swagger"

    def test_postman(self):
        doc = {"info": {"schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"}}
        assert detect_format(doc) == "postman"

    def test_unknown(self):
        with pytest.raises(SpecParseError, match="Unrecognized specification format"):
            detect_format({"info": {"title": "x"}})


class TestParseSpecFile:
    @pytest.mark.parametrize(
        "fixture, count",
        [("petstore.yaml", 5), ("petstore-swagger.json", 3), ("collection.postman.json", 4)],
    )
    def test_each_format(self, fixture, count):
        assert len(parse_spec_file(FIXTURES / fixture)) == count

    def test_scalar_document(self):
        with pytest.raises(SpecParseError, match="Expected a YAML or JSON object"):
            parse_spec("just a string")

    def test_empty_document(self):
        with pytest.raises(SpecParseError):
            parse_spec("")
