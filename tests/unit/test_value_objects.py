from dataclasses import FrozenInstanceError
from typing import List

import pytest
from pydantic import BaseModel

from pure_domain import ConstructionError, ValueObject, create_value_object_class


class Money(BaseModel):
    amount: int
    currency: str


class Tags(BaseModel):
    labels: List[str]


MoneyValue = create_value_object_class(Money)


def test_create_value_object():
    result = MoneyValue.create({"amount": 10, "currency": "EUR"})
    assert result.is_success
    assert dict(result.value.properties) == {"amount": 10, "currency": "EUR"}


def test_create_returns_validation_errors():
    result = MoneyValue.create({"amount": "ten", "currency": "EUR"})
    assert result.is_failure
    assert [issue.field_path for issue in result.errors] == ["amount"]


def test_structural_equality():
    a = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    b = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    assert a is not b
    assert a.equals(b)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_equality_ignores_key_order():
    a = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    b = MoneyValue.create({"currency": "EUR", "amount": 10}).value
    assert a.equals(b)


@pytest.mark.parametrize("other", [{"amount": 11, "currency": "EUR"}, {"amount": 10, "currency": "USD"}])
def test_differing_field_breaks_equality(other):
    a = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    b = MoneyValue.create(other).value
    assert not a.equals(b)
    assert a != b


def test_equality_depends_only_on_properties():
    OtherMoney = create_value_object_class(Money, name="OtherMoney")
    a = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    b = OtherMoney.create({"amount": 10, "currency": "EUR"}).value
    assert a.equals(b)
    assert a == b
    assert hash(a) == hash(b)
    assert not a.equals("not a value object")


def test_nested_values_are_hashable():
    TagsValue = create_value_object_class(Tags)
    a = TagsValue.create({"labels": ["x", "y"]}).value
    b = TagsValue.create({"labels": ["x", "y"]}).value
    assert hash(a) == hash(b)
    assert a == b


def test_properties_are_a_defensive_copy():
    data = {"amount": 10, "currency": "EUR"}
    money = MoneyValue.create(data).value
    data["amount"] = 99
    assert money.properties["amount"] == 10
    with pytest.raises(TypeError):
        money.properties["amount"] = 5
    with pytest.raises(FrozenInstanceError):
        money.properties = {}


def test_value_objects_have_no_patch():
    money = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    assert not hasattr(money, "patch")


def test_direct_instantiation_is_refused():
    with pytest.raises(ConstructionError):
        ValueObject(properties={"amount": 1, "currency": "EUR"}, value_object_class=MoneyValue)


def test_repr_uses_class_name():
    money = MoneyValue.create({"amount": 10, "currency": "EUR"}).value
    assert repr(money) == "Money(amount=10, currency='EUR')"
