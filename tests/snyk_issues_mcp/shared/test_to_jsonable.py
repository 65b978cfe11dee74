from dataclasses import dataclass

from pydantic import BaseModel

from snyk_issues_mcp.core.domain.models import Project
from snyk_issues_mcp.shared.to_jsonable import to_jsonable


def test_to_jsonable_basic_types():
    assert to_jsonable(None) is None
    assert to_jsonable("test") == "test"
    assert to_jsonable(123) == 123
    assert to_jsonable(True) is True


def test_to_jsonable_collections():
    assert to_jsonable((1, 2)) == [1, 2]
    assert to_jsonable({1: "a"}) == {"1": "a"}
    assert sorted(to_jsonable({"b", "a"})) == ["a", "b"]


def test_to_jsonable_bytes():
    assert to_jsonable(b"\x01\x02") == "0102"


def test_to_jsonable_dataclass():
    assert to_jsonable(Project(id="p1", name="acme/app")) == {"id": "p1", "name": "acme/app"}


def test_to_jsonable_pydantic_model():
    class CallToolParams(BaseModel):
        name: str
        arguments: dict

    params = CallToolParams(name="get_issues", arguments={"status": "open", "repo": None})
    assert to_jsonable(params) == {"name": "get_issues", "arguments": {"status": "open", "repo": None}}


def test_to_jsonable_plain_object_and_fallback():
    @dataclass
    class Inner:
        x: int

    class Holder:
        def __init__(self):
            self.inner = Inner(1)

    assert to_jsonable(Holder()) == {"inner": {"x": 1}}
    assert to_jsonable(object()).startswith("<object object")
