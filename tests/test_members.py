from __future__ import annotations

import dataclasses
from typing import ClassVar, Optional, overload

import pytest

from mirror import ArgErr, FConst, Members, Modifier, Param, Type


class Animal:
    name: str
    legs: int = 4
    registry: ClassVar[dict] = {}
    KINGDOM = "animalia"

    def speak(self) -> str:
        return "..."

    def walk(self, steps: int, fast: bool = False) -> int:
        return steps

    @staticmethod
    def create(name: str) -> "Animal":
        a = Animal()
        a.name = name
        return a

    @classmethod
    def kind(cls) -> str:
        return cls.__name__


class Dog(Animal):
    name: str
    tag: Optional[int] = None

    def speak(self) -> str:
        return "woof"


class Vault:
    __slots__ = ("__code", "owner")

    def __init__(self):
        self.__code = 1234
        self.owner = "bank"


class Account:
    __balance: int

    def __init__(self):
        self.__balance = 10

    @property
    def balance(self) -> int:
        return self.__balance


class Calc:
    @overload
    def add(self, a: int) -> int: ...

    @overload
    def add(self, a: int, b: int) -> int: ...

    def add(self, a, b=0):
        return a + b


def _names(slots):
    return sorted(s.name() for s in slots)


def test_declared_fields_of_one_level():
    fields = Members(dunders=False).declaredFields(Animal)
    by_name = {f.name(): f for f in fields}
    assert set(by_name) == {"name", "legs", "registry", "KINGDOM"}
    assert by_name["name"].type() == "sys::Str"
    assert by_name["legs"].type() == "sys::Int"
    assert not by_name["legs"].isStatic()
    assert by_name["registry"].isStatic()
    assert by_name["KINGDOM"].isStatic()
    assert by_name["KINGDOM"].type() == "sys::Str"


def test_declared_fields_excludes_inherited_without_backtrack():
    fields = Members(dunders=False).declaredFields(Dog)
    assert _names(fields) == ["name", "tag"]
    tag = next(f for f in fields if f.name() == "tag")
    assert tag.type() == "sys::Int?"


def test_backtrack_walks_child_first():
    fields = Members(dunders=False).declaredFields(Dog, Modifier.NON_STATIC, True)
    names = [f.name() for f in fields]
    assert names.index("tag") < names.index("legs")
    # both Dog.name and Animal.name are reported, child first
    owners = [f.parent().cls() for f in fields if f.name() == "name"]
    assert owners[0] is Dog
    assert owners[1] is Animal


def test_modifier_filters_static():
    static = Members(dunders=False).declaredFields(Animal, Modifier.STATIC)
    assert _names(static) == ["KINGDOM", "registry"]


def test_declared_methods():
    methods = {m.name(): m for m in Members(dunders=False).declaredMethods(Animal)}
    assert set(methods) == {"speak", "walk", "create", "kind"}
    walk = methods["walk"]
    assert not walk.isStatic()
    assert walk.signature() == "(sys::Int,sys::Bool)"
    assert [p.hasDefault() for p in walk.params()] == [False, True]
    assert walk.returns() == "sys::Int"
    assert methods["create"].isStatic()
    assert methods["create"].signature() == "(sys::Str)"
    assert methods["kind"].isStatic()
    assert methods["kind"].isClassMethod()
    assert methods["kind"].signature() == "()"


def test_dunders_are_skipped_by_default():
    names = _names(Members(dunders=False).declaredMethods(Account))
    assert "__init__" not in names
    assert names == []


def test_slots_and_mangled_names():
    fields = {f.name(): f for f in Members(dunders=False).declaredFields(Vault)}
    assert set(fields) == {"__code", "owner"}
    assert fields["__code"].attr() == "_Vault__code"
    assert fields["__code"].isPrivate()
    assert fields["__code"].get(Vault()) == 1234


def test_private_annotation_and_property():
    fields = {f.name(): f for f in Members(dunders=False).declaredFields(Account)}
    assert set(fields) == {"__balance", "balance"}
    assert fields["__balance"].attr() == "_Account__balance"
    assert fields["balance"].isReadonly()
    assert fields["balance"].type() == "sys::Int"
    assert fields["balance"].get(Account()) == 10


def test_overload_stubs_become_separate_methods():
    methods = Members(dunders=False).declaredMethods(Calc)
    assert sorted(m.signature() for m in methods) == ["(sys::Int)", "(sys::Int,sys::Int)"]
    assert all(m.func() is Calc.add for m in methods)


def test_dataclass_fields():
    @dataclasses.dataclass
    class Point:
        x: int
        y: int = 0
        label: dataclasses.InitVar[str] = ""

    fields = Members(dunders=False).declaredFields(Point)
    assert _names(fields) == ["x", "y"]


def test_registered_slots_replace_introspection():
    class Sensor:
        reading = 0.0

        def reset(self):
            self.reading = 0.0

    t = Type.find(Sensor)
    t.af_("reading", FConst.Public, "sys::Double")
    t.am_("reset", 0, "sys::Void", [], Sensor.reset)
    t.am_("reset", 0, "sys::Void", [Param("to", "sys::Double")],
          lambda self, to: setattr(self, "reading", to))

    members = Members(dunders=False)
    fields = members.declaredFields(Sensor)
    methods = members.declaredMethods(Sensor)
    assert [(f.name(), f.type()) for f in fields] == [("reading", "sys::Double")]
    assert sorted(m.signature() for m in methods) == ["()", "(sys::Double)"]

    # enumeration publishes the registered metadata
    with pytest.raises(ArgErr):
        t.af_("late", 0, "sys::Int")


class Entity:
    id: int

    def save(self) -> bool:
        return True


class Audited:
    created_by: str
    _revision: int = 0

    def audit(self) -> str:
        return f"by {self.created_by}"


class Order(Entity, Audited):
    number: int


class Shout:
    def __get__(self, obj, owner=None):
        return "HEY"


def test_backtrack_includes_secondary_bases():
    members = Members(dunders=False)
    assert [t.cls() for t in members.levels(Order)] == [Order, Entity, Audited, object]

    fields = members.declaredFields(Order, Modifier.NON_STATIC, True)
    assert [f.name() for f in fields] == ["number", "id", "created_by", "_revision"]
    assert fields[-1].isProtected()
    assert not fields[-1].isPrivate()
    assert _names(members.declaredMethods(Order, backtrack=True)) == ["audit", "save"]


def test_descriptors_are_not_static_values():
    class Greeting:
        shout = Shout()
        plain = 3

    fields = Members(dunders=False).declaredFields(Greeting)
    assert [(f.name(), f.isStatic()) for f in fields] == [("plain", True)]
