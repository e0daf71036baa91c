"""
tests/test_schema_registry.py

Pytest unit tests for the static schema definitions and their storage
mapping.
"""

from __future__ import annotations

import pytest

from app.domain.schema_registry import DEFAULT_REGISTRY, FieldType, to_column_name
from app.domain.supply_records import SchemaType
from app.repositories.supply_record_repository import MODEL_BY_SCHEMA


def test_registry_covers_every_schema_type() -> None:
    assert {definition.schema_type for definition in DEFAULT_REGISTRY} == set(SchemaType)


@pytest.mark.parametrize(
    "field_name, column",
    [
        ("unitCost", "unit_cost"),
        ("minOrderQuantity", "min_order_quantity"),
        ("Factory_ID", "factory_id"),
        ("Quality_Rating", "quality_rating"),
        ("name", "name"),
    ],
)
def test_to_column_name(field_name: str, column: str) -> None:
    assert to_column_name(field_name) == column


@pytest.mark.parametrize("schema_type", list(SchemaType))
def test_every_field_has_a_storage_column(schema_type: SchemaType) -> None:
    definition = DEFAULT_REGISTRY.get(schema_type)
    model = MODEL_BY_SCHEMA[schema_type]

    assert model.__tablename__ == definition.table_name
    for spec in definition.fields:
        assert spec.column in model.__table__.columns, spec.name



@pytest.mark.parametrize("schema_type", list(SchemaType))
def test_string_limits_match_column_widths(schema_type: SchemaType) -> None:
    definition = DEFAULT_REGISTRY.get(schema_type)
    columns = MODEL_BY_SCHEMA[schema_type].__table__.columns

    for spec in definition.fields:
        if spec.field_type is not FieldType.STRING:
            continue
        width = getattr(columns[spec.column].type, "length", None)
        assert spec.max_length == width, spec.name


@pytest.mark.parametrize("schema_type", list(SchemaType))
def test_required_fields_have_a_missing_value_policy(schema_type: SchemaType) -> None:
    for spec in DEFAULT_REGISTRY.get(schema_type).fields:
        if spec.required:
            assert spec.has_default, spec.name
        else:
            assert spec.omit_if_absent or spec.field_type is FieldType.STRING_ARRAY, spec.name


def test_schema_type_from_label() -> None:
    assert SchemaType.from_label(" Products ") is SchemaType.PRODUCTS

    with pytest.raises(ValueError, match="Unknown data type 'invoices'"):
        SchemaType.from_label("invoices")


# ---------------------------------------------------------------------------
# Default overrides
# ---------------------------------------------------------------------------


def test_overrides_replace_constant_and_template_defaults() -> None:
    registry = DEFAULT_REGISTRY.with_default_overrides(
        {"products": {"leadTime": 45, "name": "Unnamed product"}},
    )

    products = registry.get(SchemaType.PRODUCTS)
    assert products.field("leadTime").default == 45
    assert products.field("name").default == "Unnamed product"
    assert products.field("name").default_template is None
    assert DEFAULT_REGISTRY.get(SchemaType.PRODUCTS).field("leadTime").default == 30.0


def test_date_override_is_a_day_offset() -> None:
    registry = DEFAULT_REGISTRY.with_default_overrides({"shipments": {"expectedDelivery": "3"}})

    assert registry.get(SchemaType.SHIPMENTS).field("expectedDelivery").default_days_from_now == 3


def test_override_of_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError, match="no field 'colour'"):
        DEFAULT_REGISTRY.with_default_overrides({"products": {"colour": "red"}})


def test_describe_mentions_policy() -> None:
    products = DEFAULT_REGISTRY.get(SchemaType.PRODUCTS)

    assert "omit if absent" in products.field("origin").describe()
    assert "Product {n}" in products.field("name").describe()
    assert "one of: low, medium, high" in products.field("riskLevel").describe()
