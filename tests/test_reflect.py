from __future__ import annotations

import dataclasses
import functools
from typing import ClassVar, Optional, overload

import pytest

import mirror
from mirror import (ArgErr, NoSuchFieldErr, NoSuchMethodErr, Param, ReflectErr, Type)


class Counter:
    total: ClassVar[int] = 0
    step: int = 1
    label: Optional[str]

    def __init__(self):
        self.value = 0

    def bump(self, by: int = 1) -> int:
        self.value += by
        return self.value

    @staticmethod
    def zero() -> int:
        return 0

    @classmethod
    def name(cls) -> str:
        return cls.__name__

    def fail(self) -> None:
        raise ValueError("boom")


class SubCounter(Counter):
    pass


@dataclasses.dataclass(frozen=True)
class Frozen:
    x: int
    y: int = 0


class Guarded:
    secret: str

    def __setattr__(self, name, value):
        raise AttributeError("guarded")


class Temperature:
    def __init__(self):
        self._c = 0.0

    @property
    def celsius(self) -> float:
        return self._c

    @celsius.setter
    def celsius(self, v: float) -> None:
        self._c = v


class Shapes:
    @overload
    def area(self, side: int) -> int: ...

    @overload
    def area(self, w: int, h: int) -> int: ...

    def area(self, w, h=None):
        return w * (w if h is None else h)

    def only(self) -> str:
        return "only"


class Base:
    def m(self, a: int) -> str:
        return f"base {a}"


class Child(Base):
    def m(self) -> str:
        return "child"


def test_get_and_set_instance_field(reflect):
    c = Counter()
    assert reflect.getField(c, "step") == 1
    reflect.setField(c, "step", 5)
    assert c.step == 5
    assert reflect.getField(c, "step") == 5


def test_unassigned_field_reads_none(reflect):
    assert reflect.getField(Counter(), "label") is None


def test_static_field_through_class_and_instance(reflect):
    try:
        reflect.setField(Counter, "total", 7)
        assert Counter.total == 7
        assert reflect.getField(Counter, "total") == 7
        assert reflect.getField(Counter(), "total") == 7
        assert reflect.getField(Type.find(SubCounter), "total") == 7
    finally:
        Counter.total = 0


def test_instance_field_on_class_is_rejected(reflect):
    with pytest.raises(ArgErr):
        reflect.getField(Counter, "step")


def test_missing_field(reflect):
    with pytest.raises(NoSuchFieldErr) as e:
        reflect.getField(Counter(), "nope")
    assert e.value.name() == "nope"
    assert e.value.type() == Type.find(Counter)
    assert "No such field nope" in e.value.msg()
    with pytest.raises(NoSuchFieldErr):
        reflect.setField(Counter(), "nope", 1)
    with pytest.raises(NoSuchFieldErr):
        reflect.getFieldType(Counter, "nope")


def test_get_field_type(reflect):
    assert reflect.getFieldType(Counter, "step") == "sys::Int"
    assert reflect.getFieldType(Counter, "label") == "sys::Str"
    assert reflect.getFieldType(Type.find(Counter), "total") == "sys::Int"


def test_set_bypasses_frozen_dataclass(reflect):
    f = Frozen(1)
    reflect.setField(f, "x", 42)
    assert f.x == 42


def test_set_bypasses_custom_setattr(reflect):
    g = Guarded()
    reflect.setField(g, "secret", "s3cr3t")
    assert reflect.getField(g, "secret") == "s3cr3t"


def test_property_field(reflect):
    t = Temperature()
    reflect.setField(t, "celsius", 21.5)
    assert t.celsius == 21.5
    assert reflect.getFieldType(Temperature, "celsius") == "sys::Float"


def test_write_failure_is_wrapped(reflect):
    class Locked:
        __slots__ = ("a",)

    t = Type.find(Locked)
    t.af_("b", 0, "sys::Int")
    with pytest.raises(ReflectErr) as e:
        reflect.setField(Locked(), "b", 1)
    assert isinstance(e.value.cause(), AttributeError)


def test_invoke_single_method_without_types(reflect):
    c = Counter()
    assert reflect.invoke(c, "bump") == 1
    assert reflect.invoke(c, "bump", [4]) == 5
    # argTypes are ignored when the name is not overloaded
    assert reflect.invoke(c, "bump", [1], ["sys::Str"]) == 6


def test_invoke_static_and_class_methods(reflect):
    assert reflect.invoke(Counter, "zero") == 0
    assert reflect.invoke(Counter(), "zero") == 0
    assert reflect.invoke(Counter, "name") == "Counter"
    assert reflect.invoke(SubCounter(), "name") == "SubCounter"


def test_invoke_instance_method_on_class_fails(reflect):
    with pytest.raises(ArgErr):
        reflect.invoke(Counter, "bump")


def test_invoke_wrong_arity(reflect):
    with pytest.raises(ArgErr):
        reflect.invoke(Counter(), "bump", [1, 2])


def test_invoke_missing_method(reflect):
    with pytest.raises(NoSuchMethodErr) as e:
        reflect.invoke(Counter(), "nope")
    assert e.value.name() == "nope"
    assert e.value.signature() is None


def test_method_errors_propagate_unchanged(reflect):
    with pytest.raises(ValueError, match="boom"):
        reflect.invoke(Counter(), "fail")


def test_overloads_require_types(reflect):
    s = Shapes()
    with pytest.raises(NoSuchMethodErr):
        reflect.invoke(s, "area", [3])
    assert reflect.invoke(s, "area", [3], [int]) == 9
    assert reflect.invoke(s, "area", [3, 4], ["sys::Int", "sys::Int"]) == 12
    assert reflect.invoke(s, "only") == "only"


def test_overload_exact_match_only(reflect):
    with pytest.raises(NoSuchMethodErr) as e:
        reflect.invoke(Shapes(), "area", [3.0], [float])
    assert e.value.signature() == "(sys::Float)"
    assert "No such method area(sys::Float)" in e.value.msg()


def test_overloads_across_inheritance(reflect):
    c = Child()
    with pytest.raises(NoSuchMethodErr):
        reflect.invoke(c, "m")
    assert reflect.invoke(c, "m", [], []) == "child"
    assert reflect.invoke(c, "m", [2], [int]) == "base 2"


def test_registered_arity_zero_and_two():
    class One:
        pass

    class Two:
        pass

    Type.find(One).am_("m", 0, "sys::Int", [], lambda self: 0)
    t = Type.find(Two)
    t.am_("m", 0, "sys::Int", [], lambda self: 0)
    t.am_("m", 0, "sys::Int", [Param("a", "sys::Int"), Param("b", "sys::Int")], lambda self, a, b: a + b)

    assert mirror.invoke(One(), "m") == 0
    with pytest.raises(NoSuchMethodErr):
        mirror.invoke(Two(), "m", [1, 2])
    assert mirror.invoke(Two(), "m", [1, 2], ["sys::Int", "sys::Int"]) == 3


def test_type_lookup_helpers():
    t = Type.find(Counter)
    assert t.field("step").type() == "sys::Int"
    assert t.field("nope", False) is None
    assert t.method("bump").name() == "bump"
    assert t.method("nope", checked=False) is None
    assert {m.name() for m in t.methods()} >= {"bump", "zero", "name", "fail"}
    assert Type.find("test_reflect::Counter") is t


class Signed:
    signed_by: str

    def sign(self) -> str:
        return f"signed by {self.signed_by}"


class Contract(Counter, Signed):
    def __init__(self):
        super().__init__()
        self.signed_by = "ann"


def test_members_of_secondary_bases(reflect):
    c = Contract()
    assert reflect.getField(c, "signed_by") == "ann"
    reflect.setField(c, "signed_by", "bob")
    assert reflect.invoke(c, "sign") == "signed by bob"
    assert reflect.getFieldType(Contract, "signed_by") == "sys::Str"
    assert reflect.invoke(c, "bump", [2]) == 2


class Invoice:
    def __init__(self):
        self.lines = [2, 3]
        self.computed = 0

    @functools.cached_property
    def total(self) -> int:
        self.computed += 1
        return sum(self.lines)


def test_cached_property_field(reflect):
    inv = Invoice()
    assert reflect.getFieldType(Invoice, "total") == "sys::Int"
    assert reflect.getField(inv, "total") == 5
    assert reflect.getField(inv, "total") == 5
    assert inv.computed == 1
    with pytest.raises(ReflectErr):
        reflect.setField(inv, "total", 1)
