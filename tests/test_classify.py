"""Tests for value classification order."""

import dataclasses
import datetime
import enum
import math
from collections import OrderedDict
from types import MappingProxyType, SimpleNamespace

import pytest

from stringview import MISSING, ValueKind, classify
from stringview.kernel.classify import _MissingType, mapping_view


class Mode(enum.Enum):
    FAST = "fast"


class Weight(enum.IntEnum):
    HEAVY = 2**60


class CallableMapping(dict):
    def __call__(self):
        return None


class Account:
    def __init__(self, owner):
        self.owner = owner


@dataclasses.dataclass(slots=True)
class Pair:
    left: int
    right: int


def test_missing_is_singleton():
    assert _MissingType() is MISSING


def test_missing_is_falsy_with_readable_repr():
    assert not MISSING
    assert repr(MISSING) == "MISSING"


@pytest.mark.parametrize(
    "value, kind",
    [
        (MISSING, ValueKind.MISSING),
        (None, ValueKind.NULL),
        (datetime.datetime(2024, 1, 1), ValueKind.DATE_LIKE),
        (datetime.date(2024, 1, 1), ValueKind.DATE_LIKE),
        (datetime.time(12, 0), ValueKind.DATE_LIKE),
        (len, ValueKind.CALLABLE),
        (lambda: None, ValueKind.CALLABLE),
        (int, ValueKind.CALLABLE),
        (Mode.FAST, ValueKind.SYMBOL_LIKE),
        (2**53, ValueKind.BIG_INTEGER),
        (-(2**53), ValueKind.BIG_INTEGER),
        ([1, 2], ValueKind.SEQUENCE),
        ((1, 2), ValueKind.SEQUENCE),
        (range(3), ValueKind.SEQUENCE),
        ({"a": 1}, ValueKind.MAPPING),
        (OrderedDict(a=1), ValueKind.MAPPING),
        (MappingProxyType({}), ValueKind.MAPPING),
        (0, ValueKind.NUMBER),
        (2**53 - 1, ValueKind.NUMBER),
        (-1.5, ValueKind.NUMBER),
        (math.inf, ValueKind.NON_FINITE_NUMBER),
        (math.nan, ValueKind.NON_FINITE_NUMBER),
        ("text", ValueKind.TEXT),
        ("", ValueKind.TEXT),
        (True, ValueKind.BOOLEAN),
        (False, ValueKind.BOOLEAN),
        (b"bytes", ValueKind.UNKNOWN),
        ({1, 2}, ValueKind.UNKNOWN),
        (object(), ValueKind.UNKNOWN),
        (math, ValueKind.UNKNOWN),
        (frozenset(), ValueKind.UNKNOWN),
        (Account("ann"), ValueKind.MAPPING),
        (Pair(1, 2), ValueKind.MAPPING),
        (SimpleNamespace(a=1), ValueKind.MAPPING),
        (1 + 2j, ValueKind.UNKNOWN),
    ],
)
def test_classify(value, kind):
    assert classify(value) is kind


def test_enum_member_beats_big_integer():
    assert classify(Weight.HEAVY) is ValueKind.SYMBOL_LIKE


def test_callable_beats_mapping():
    assert classify(CallableMapping()) is ValueKind.CALLABLE


def test_datetime_is_not_unknown():
    aware = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    assert classify(aware) is ValueKind.DATE_LIKE


def test_only_sequences_and_mappings_are_containers():
    containers = {kind for kind in ValueKind if kind.is_container}
    assert containers == {ValueKind.SEQUENCE, ValueKind.MAPPING}


def test_value_kinds_are_strings():
    assert ValueKind.MAPPING == "object"
    assert ValueKind.SEQUENCE == "array"


def test_mapping_view_of_instance_is_live_attribute_dict():
    account = Account("ann")
    view = mapping_view(account)
    assert dict(view) == {"owner": "ann"}
    view["owner"] = "bob"
    assert account.owner == "bob"


def test_mapping_view_of_slotted_dataclass():
    view = mapping_view(Pair(1, 2))
    assert list(view) == ["left", "right"]
    assert view["right"] == 2
    with pytest.raises(KeyError):
        view["missing"]


def test_mapping_view_returns_mappings_unchanged():
    value = {"a": 1}
    assert mapping_view(value) is value
