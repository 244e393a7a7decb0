import threading
from abc import ABC, abstractmethod

import pytest

from api_doc_generator.errors import AnnotationError
from api_doc_generator.parser.base import AnnotationScopes, HandlerReference
from api_doc_generator.parser.tags import parse_annotations
from api_doc_generator.resolver.auth import resolve_authenticated
from api_doc_generator.resolver.container import NOT_RESOLVABLE, Container, parameters_of
from api_doc_generator.resolver.group import resolve_group
from api_doc_generator.resolver.introspect import DocstringIntrospector, read_scopes, resolve_class
from fixtures.controllers import DummyController, DummyModel, DummyTransformer, plain_handler


def _scopes(class_text: str = "", method_text: str = "") -> AnnotationScopes:
    return AnnotationScopes(
        class_scope=parse_annotations(class_text),
        method_scope=parse_annotations(method_text),
    )


class TestResolveGroup:
    def test_method_group_wins(self):
        assert resolve_group(_scopes("@group Group A", "@group Group B")) == "Group B"

    def test_falls_back_to_class_group(self):
        assert resolve_group(_scopes("@group Group A", "Title.")) == "Group A"

    def test_empty_method_group_falls_back(self):
        assert resolve_group(_scopes("@group Group A", "@group")) == "Group A"

    def test_default_group(self):
        assert resolve_group(_scopes()) == "general"
        assert resolve_group(_scopes(), default="misc") == "misc"


class TestResolveAuthenticated:
    def test_method_tag(self):
        assert resolve_authenticated(_scopes(method_text="@authenticated")) is True

    def test_class_tag(self):
        assert resolve_authenticated(_scopes(class_text="@authenticated")) is True

    def test_body_is_ignored(self):
        assert resolve_authenticated(_scopes(method_text="@authenticated false")) is True

    def test_absent(self):
        assert resolve_authenticated(_scopes("@group A", "Title.")) is False


class Engine:
    pass


class Car:
    def __init__(self, engine: Engine, color: str = "red"):
        self.engine = engine
        self.color = color


class NeedsName:
    def __init__(self, name: str):
        self.name = name


class Shape(ABC):
    @abstractmethod
    def area(self) -> float:
        ...


class SlowDep:
    started = threading.Event()
    release = threading.Event()
    calls = 0

    def __init__(self):
        SlowDep.calls += 1
        if SlowDep.calls == 1:
            SlowDep.started.set()
            SlowDep.release.wait(timeout=5)


class Service:
    def __init__(self, dep: SlowDep):
        self.dep = dep


class Chicken:
    def __init__(self, egg: "Egg"):
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken):
        self.chicken = chicken


class TestContainer:
    def test_concurrent_autowiring_of_same_class(self):
        container = Container()
        results = {}
        worker = threading.Thread(target=lambda: results.setdefault("worker", container.resolve(Service)))
        worker.start()
        try:
            assert SlowDep.started.wait(timeout=5)
            assert isinstance(container.resolve(Service), Service)
        finally:
            SlowDep.release.set()
            worker.join(timeout=5)
        assert isinstance(results["worker"], Service)

    def test_constructor_cycle_is_not_resolvable(self):
        assert Container().resolve(Chicken) is NOT_RESOLVABLE

    def test_resolves_instances_and_bindings(self):
        container = Container()
        engine = Engine()
        container.instance(Engine, engine)
        container.bind("answer", lambda: 42)
        assert container.resolve(Engine) is engine
        assert container.resolve("answer") == 42

    def test_autowires_constructor_dependencies(self):
        car = Container().resolve(Car)
        assert isinstance(car.engine, Engine)
        assert car.color == "red"

    def test_cannot_autowire_required_builtin(self):
        assert Container().resolve(NeedsName) is NOT_RESOLVABLE

    def test_builtins_and_abstract_classes_are_not_resolvable(self):
        container = Container()
        assert container.resolve(int) is NOT_RESOLVABLE
        assert container.resolve(Shape) is NOT_RESOLVABLE
        assert container.resolve(None) is NOT_RESOLVABLE

    def test_autowire_can_be_disabled(self):
        assert Container(autowire=False).resolve(Engine) is NOT_RESOLVABLE


class TestParametersOf:
    def test_lists_annotated_parameters(self):
        params = parameters_of(Car)
        assert [(name, annotation) for name, _, annotation in params] == [("engine", Engine), ("color", str)]

    def test_bound_method_skips_self(self):
        params = parameters_of(DummyController().with_fruit)
        assert [name for name, _, _ in params] == ["fruit_id", "repository"]

    def test_skips_var_arguments(self):
        def handler(a, *args, **kwargs):
            pass

        assert [(name, annotation) for name, _, annotation in parameters_of(handler)] == [("a", None)]


class TestIntrospection:
    def test_docstring_is_cleaned(self):
        text = DocstringIntrospector().comment_of(DummyController.with_group_override)
        assert text == "@group Group B"

    def test_missing_docstring(self):
        assert DocstringIntrospector().comment_of(DummyController.dummy) == ""

    def test_read_scopes_for_controller(self):
        scopes = read_scopes(HandlerReference(controller=DummyController, method="dummy"), DocstringIntrospector())
        assert scopes.class_scope.get("group") == "Group A"
        assert scopes.method_scope.tags == {}

    def test_read_scopes_for_function(self):
        scopes = read_scopes(HandlerReference(func=plain_handler), DocstringIntrospector())
        assert scopes.class_scope.tags == {}
        assert scopes.method_scope.get("group") == "Status"


class TestResolveClass:
    def test_bare_name_from_handler_module(self):
        assert resolve_class("DummyTransformer", "fixtures.controllers") is DummyTransformer

    def test_dotted_and_colon_paths(self):
        assert resolve_class("fixtures.controllers.DummyModel", "elsewhere") is DummyModel
        assert resolve_class("fixtures.controllers:DummyModel", "elsewhere") is DummyModel

    def test_unknown_names(self):
        with pytest.raises(AnnotationError):
            resolve_class("Nope", "fixtures.controllers")
        with pytest.raises(AnnotationError):
            resolve_class("no_such_module.Thing", "fixtures.controllers")
        with pytest.raises(AnnotationError):
            resolve_class("", "fixtures.controllers")

    def test_non_class_rejected(self):
        with pytest.raises(AnnotationError, match="does not name a class"):
            resolve_class("plain_handler", "fixtures.controllers")
