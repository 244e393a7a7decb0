from dataclasses import dataclass, field
from types import SimpleNamespace

from pydantic import BaseModel

from api_doc_generator.generator.sample import build_instance, empty_value, example_for, sample_for_annotation


class Person(BaseModel):
    name: str
    age: int
    nickname: str | None = None
    country: str = "NL"


@dataclass
class Point:
    x: int
    y: float
    tags: list = field(default_factory=list)


class Plain:
    def __init__(self):
        self.ready = True


class TestExampleFor:
    def test_types(self):
        assert isinstance(example_for("integer", "id"), int)
        assert isinstance(example_for("number", "price"), float)
        assert isinstance(example_for("boolean", "flag"), bool)
        assert isinstance(example_for("string", "name"), str)
        assert example_for("object", "meta") == {}
        assert example_for("array", "items") == []

    def test_same_seed_same_value(self):
        assert example_for("integer", "user_id") == example_for("integer", "user_id")
        assert example_for("string", "title") == example_for("string", "title")


class TestAnnotations:
    def test_sample_for_annotation(self):
        assert isinstance(sample_for_annotation(int, "n"), int)
        assert isinstance(sample_for_annotation(int | None, "n"), int)
        assert sample_for_annotation(list[int], "n") == []
        assert sample_for_annotation(Plain, "n") is None

    def test_empty_value(self):
        assert empty_value(int) == 0
        assert empty_value(str) == ""
        assert empty_value(bool) is False
        assert empty_value(dict[str, int]) == {}
        assert empty_value(Plain) is None
        assert empty_value(None) is None


class TestBuildInstance:
    def test_without_class_gives_stand_in(self):
        assert isinstance(build_instance(None), SimpleNamespace)

    def test_factory_wins(self):
        person = Person(name="Ada", age=36)
        assert build_instance(Person, {Person: lambda: person}) is person

    def test_pydantic_model(self):
        person = build_instance(Person)
        assert isinstance(person.name, str)
        assert isinstance(person.age, int)
        assert person.nickname is None
        assert person.country == "NL"
        assert build_instance(Person) == person

    def test_dataclass(self):
        point = build_instance(Point)
        assert isinstance(point.x, int)
        assert isinstance(point.y, float)
        assert point.tags == []

    def test_plain_class(self):
        assert build_instance(Plain).ready is True
