"""Tests for DataMember declarations and the Record base type."""

from datetime import datetime

import pytest

from datacontracts import DataContract, DataMember, Direction, MISSING, Record
from datacontracts.schema.kinds import TypeSpec, ValueKind
from datacontracts.schema.members import read_field
from datacontracts.schema.registry import registry
from datacontracts.schema.resolver import effective_descriptors


class Line(DataContract):
    sku: str = DataMember()
    qty: int = DataMember(name="quantity", required=True)


class Order(DataContract):
    id = DataMember(type=str)
    placed: datetime = DataMember()
    lines: list = DataMember(item_type=Line)
    totals: dict[str, float] = DataMember(key_type=int)
    notes = DataMember()
    parent: "Order" = DataMember()
    tags: list[str] = DataMember(validate=[bool, lambda v: len(v) < 5])
    secret: str = DataMember(serialize_option=Direction.DESERIALIZE_ONLY)


class PlainAttributes(Record):
    unmanaged = "class default"


def _spec(name, record_type=Order):
    return effective_descriptors(record_type)[name].spec


class TestDataMemberSpecs:
    """The member type comes from type=, the annotation, or element options."""

    def test_annotation(self):
        assert _spec("placed") == TypeSpec(ValueKind.TIMESTAMP)
        assert _spec("qty", Line) == TypeSpec(ValueKind.NUMBER)

    def test_explicit_type(self):
        assert _spec("id") == TypeSpec(ValueKind.STRING)

    def test_no_type_is_unspecified(self):
        assert _spec("notes").kind is ValueKind.UNSPECIFIED

    def test_item_type_implies_sequence(self):
        assert _spec("lines") == TypeSpec.sequence(Line)

    def test_key_type_keeps_annotated_value(self):
        spec = _spec("totals")
        assert spec.key == TypeSpec(ValueKind.NUMBER)
        assert spec.value == TypeSpec(ValueKind.NUMBER)

    def test_string_annotation_self_reference(self):
        assert _spec("parent") == TypeSpec.record(Order)

    def test_generic_annotation(self):
        assert _spec("tags").label == "sequence[string]"


class TestDataMemberOptions:
    def test_exposed_name(self):
        assert effective_descriptors(Line)["qty"].exposed_name == "quantity"

    def test_required(self):
        assert effective_descriptors(Line)["qty"].required is True
        assert effective_descriptors(Line)["sku"].required is False

    def test_validators_list(self):
        assert len(effective_descriptors(Order)["tags"].validators) == 2

    def test_direction(self):
        assert effective_descriptors(Order)["secret"].direction is Direction.DESERIALIZE_ONLY

    def test_registered_in_declaration_order(self):
        assert list(registry.by_internal_name(Order)) == [
            "id", "placed", "lines", "totals", "notes", "parent", "tags", "secret",
        ]

    def test_conflicting_item_type_rejected(self):
        with pytest.raises(TypeError):
            DataMember(type=int, item_type=str)

    def test_conflicting_key_type_rejected(self):
        with pytest.raises(TypeError):
            DataMember(type=list, key_type=str)

    def test_item_and_key_type_rejected(self):
        with pytest.raises(TypeError):
            DataMember(item_type=int, value_type=str)


class TestDataMemberAccess:
    """Values live in the instance __dict__; unassigned members are absent."""

    def test_class_access_returns_member(self):
        assert isinstance(Order.notes, DataMember)
        assert repr(Order.notes) == "DataMember(Order.notes)"

    def test_unassigned_reads_none(self):
        order = Order()
        assert order.notes is None
        assert read_field(order, "notes") is MISSING

    def test_assigned_none_is_present(self):
        order = Order()
        order.notes = None
        assert read_field(order, "notes") is None

    def test_delete(self):
        order = Order(notes="x")
        del order.notes
        assert read_field(order, "notes") is MISSING
        with pytest.raises(AttributeError):
            del order.notes

    def test_read_field_plain_attribute(self):
        instance = PlainAttributes()
        assert read_field(instance, "unmanaged") == "class default"
        assert read_field(instance, "nothing") is MISSING

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"


class TestRecord:
    def test_keyword_construction(self):
        line = Line(sku="A1", qty=2)
        assert line.sku == "A1"
        assert line.qty == 2

    def test_unknown_keyword_rejected(self):
        with pytest.raises(TypeError, match="no member 'price'"):
            Line(price=3)

    def test_equality_uses_present_members(self):
        assert Line(sku="A1") == Line(sku="A1")
        assert Line(sku="A1") != Line(sku="A1", qty=None)
        assert Line(sku="A1") != Order()

    def test_repr(self):
        assert repr(Line(sku="A1", qty=2)) == "Line(sku='A1', qty=2)"

    def test_resolve_type_default(self):
        assert Line.resolve_type({"anything": 1}) is Line
        assert Line.resolve_type(None) is Line
