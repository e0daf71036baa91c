"""
app/domain/schema_registry.py

Static definitions of the six target record shapes.

Each field carries its semantic type, required flag, ordered header synonyms
for heuristic matching, validation bounds, and the policy applied when the
source sheet has no value for it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import lru_cache
from typing import Any, Iterator, Mapping

from app.domain.supply_records import SchemaType


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    ENUM = "enum"
    STRING_ARRAY = "string_array"


def to_column_name(field_name: str) -> str:
    """
    Convert a canonical field name (``unitCost``, ``Factory_ID``) to its
    snake_case storage column.
    """

    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", field_name).lower()


@dataclass(frozen=True)
class FieldSpec:
    """
    One canonical field of a target schema.

    Missing-value policy, checked in this order:
    ``omit_if_absent`` leaves the field unset, ``default_days_from_now``
    builds a future date, ``default_template`` formats a synthetic value from
    the row counter ``{n}`` and already-mapped fields, ``default`` is a
    constant. A required field with none of these stays missing.
    """

    name: str
    field_type: FieldType
    required: bool = True
    synonyms: tuple[str, ...] = ()
    enum_values: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    max_length: int | None = None
    email: bool = False
    default: Any = None
    default_template: str | None = None
    default_days_from_now: int | None = None
    omit_if_absent: bool = False

    @property
    def column(self) -> str:
        return to_column_name(self.name)

    @property
    def has_default(self) -> bool:
        return (
            self.default is not None
            or self.default_template is not None
            or self.default_days_from_now is not None
        )

    def describe(self) -> str:
        """
        Human-readable description used in the mapping prompt.
        """

        parts = [self.field_type.value, "required" if self.required else "optional"]
        if self.enum_values:
            parts.append("one of: " + ", ".join(self.enum_values))
        if self.minimum is not None:
            parts.append(f"min {self.minimum:g}")
        if self.maximum is not None:
            parts.append(f"max {self.maximum:g}")
        if self.max_length is not None:
            parts.append(f"max {self.max_length} chars")
        if self.email:
            parts.append("valid email")
        text = f"{self.name}: " + ", ".join(parts)
        if self.synonyms:
            text += " - map from " + ", ".join(self.synonyms) + ", or similar"
        if self.omit_if_absent:
            text += "; omit if absent"
        elif self.default_days_from_now is not None:
            text += f"; default to today + {self.default_days_from_now} days (ISO date)"
        elif self.default_template is not None:
            text += f"; default to '{self.default_template}' when missing"
        elif self.default is not None:
            text += f"; default to {self.default!r}"
        return text


@dataclass(frozen=True)
class SchemaDefinition:
    schema_type: SchemaType
    fields: tuple[FieldSpec, ...]
    table_name: str = ""

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.schema_type.value} has no field '{name}'")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)


_RISK_LEVELS = ("low", "medium", "high")


def _string(name: str, *synonyms: str, **options: Any) -> FieldSpec:
    return FieldSpec(name=name, field_type=FieldType.STRING, synonyms=synonyms, **options)


def _number(name: str, *synonyms: str, **options: Any) -> FieldSpec:
    return FieldSpec(name=name, field_type=FieldType.NUMBER, synonyms=synonyms, **options)


def _date(name: str, *synonyms: str, **options: Any) -> FieldSpec:
    return FieldSpec(name=name, field_type=FieldType.DATE, synonyms=synonyms, **options)


def _enum(name: str, values: tuple[str, ...], *synonyms: str, **options: Any) -> FieldSpec:
    return FieldSpec(
        name=name,
        field_type=FieldType.ENUM,
        enum_values=values,
        synonyms=synonyms,
        **options,
    )


def _string_array(name: str, *synonyms: str) -> FieldSpec:
    return FieldSpec(
        name=name,
        field_type=FieldType.STRING_ARRAY,
        required=False,
        synonyms=synonyms,
        default=(),
    )


PRODUCTS = SchemaDefinition(
    schema_type=SchemaType.PRODUCTS,
    table_name="products",
    fields=(
        _string("name", "Product Name", "Name", "Product", max_length=100, default_template="Product {n}"),
        _string("category", "Category", "Type", "Product Category", max_length=50, default="General"),
        _string("supplier", "Supplier", "Vendor", "Manufacturer", max_length=100, default="Default Supplier"),
        _string("origin", "Origin", "Country", "Source", required=False, max_length=100, omit_if_absent=True),
        _string(
            "description",
            "Description",
            "Details",
            max_length=500,
            default_template="Description for {name}",
        ),
        _number("unitCost", "Unit Cost", "Price", "Cost", "Unit Price", minimum=0, default=100.0),
        _number("leadTime", "Lead Time", "Delivery Time", minimum=1, default=30.0),
        _number("minOrderQuantity", "Min Order", "Minimum Order", "MOQ", minimum=1, default=1.0),
        _number("maxOrderQuantity", "Max Order", "Maximum Order", minimum=1, default=1000.0),
        _enum("riskLevel", _RISK_LEVELS, "Risk Level", "Risk", default="medium"),
        _string_array("certifications", "Certifications", "Cert"),
    ),
)

SUPPLIERS = SchemaDefinition(
    schema_type=SchemaType.SUPPLIERS,
    table_name="suppliers",
    fields=(
        _string("name", "Supplier Name", "Name", "Company", max_length=100, default_template="Supplier {n}"),
        _string("location", "Location", "Address", "City", max_length=255, default="Unknown"),
        _string("country", "Country", "Nation", max_length=255, default="Unknown"),
        _string(
            "contactPerson",
            "Contact Person",
            "Contact",
            "Representative",
            max_length=255,
            default="Primary Contact",
        ),
        _string(
            "email",
            "Email",
            "Contact Email",
            max_length=255,
            email=True,
            default_template="{name_slug}@example.com",
        ),
        _string("phone", "Phone", "Contact Phone", max_length=64, default="N/A"),
        _number("rating", "Rating", "Score", required=False, minimum=0, maximum=5, omit_if_absent=True),
        _enum("status", ("active", "inactive", "pending"), "Status", default="active"),
        _enum("riskLevel", _RISK_LEVELS, "Risk Level", "Risk", default="medium"),
        _string_array("certifications", "Certifications", "Cert"),
        _number("leadTime", "Lead Time", "Delivery Time", minimum=1, default=30.0),
        _string("paymentTerms", "Payment Terms", "Terms", max_length=120, default="Net 30"),
        _number("minimumOrder", "Min Order", "Minimum Order", minimum=0, default=0.0),
        _number("maximumOrder", "Max Order", "Maximum Order", minimum=1, default=10000.0),
        _string_array("specialties", "Specialties", "Products"),
    ),
)

FACTORIES = SchemaDefinition(
    schema_type=SchemaType.FACTORIES,
    table_name="factories",
    fields=(
        _string("Factory_ID", "Factory ID", "ID", "Factory Code", max_length=50, default_template="FACTORY_{n}"),
        _string(
            "Factory_Name",
            "Factory Name",
            "Name",
            "Plant Name",
            max_length=100,
            default_template="Factory {n}",
        ),
        _string("Location", "Location", "Address", "City", max_length=200, default="Unknown"),
        _number("Capacity", "Capacity", "Production Capacity", minimum=0, default=1000.0),
        _number("Utilization", "Utilization", "Usage", minimum=0, maximum=100, default=75.0),
        _number("Lead_Time", "Lead Time", "Production Time", minimum=1, default=14.0),
        _number("Quality_Rating", "Quality Rating", "Rating", "Score", minimum=0, maximum=5, default=4.0),
        _string_array("Certifications", "Certifications", "Cert"),
    ),
)

WAREHOUSES = SchemaDefinition(
    schema_type=SchemaType.WAREHOUSES,
    table_name="warehouses",
    fields=(
        _string(
            "Warehouse_ID",
            "Warehouse ID",
            "ID",
            "Warehouse Code",
            max_length=50,
            default_template="WAREHOUSE_{n}",
        ),
        _string(
            "Warehouse_Name",
            "Warehouse Name",
            "Name",
            "Facility Name",
            max_length=100,
            default_template="Warehouse {n}",
        ),
        _string("Location", "Location", "Address", "City", max_length=200, default="Unknown"),
        _number("Capacity", "Capacity", "Storage Capacity", minimum=0, default=10000.0),
        _number("Current_Stock", "Current Stock", "Stock", "Inventory", minimum=0, default=0.0),
        _number("Storage_Cost", "Storage Cost", "Cost", "Rate", minimum=0, default=5.0),
    ),
)

RETAILERS = SchemaDefinition(
    schema_type=SchemaType.RETAILERS,
    table_name="retailers",
    fields=(
        _string(
            "Retailer_ID",
            "Retailer ID",
            "ID",
            "Retailer Code",
            max_length=50,
            default_template="RETAILER_{n}",
        ),
        _string(
            "Retailer_Name",
            "Retailer Name",
            "Name",
            "Store Name",
            max_length=100,
            default_template="Retailer {n}",
        ),
        _string("Location", "Location", "Address", "City", max_length=200, default="Unknown"),
        _string("Market_Segment", "Market Segment", "Segment", "Category", max_length=100, default="General"),
        _number("Sales_Volume", "Sales Volume", "Volume", "Sales", "Revenue", minimum=0, default=100000.0),
    ),
)

SHIPMENTS = SchemaDefinition(
    schema_type=SchemaType.SHIPMENTS,
    table_name="shipments",
    fields=(
        _string("shipmentId", "Shipment ID", "ID", "Tracking Number", max_length=50, default_template="SHIP_{n}"),
        _string("origin", "Origin", "From", "Source", max_length=100, default="Unknown"),
        _string("destination", "Destination", "To", "Delivery Address", max_length=100, default="Unknown"),
        _enum(
            "status",
            ("On-Time", "Delayed", "Stuck", "Delivered"),
            "Status",
            "Shipment Status",
            default="On-Time",
        ),
        _date("expectedDelivery", "Expected Delivery", "Estimated Delivery", "ETA", default_days_from_now=7),
        _date("actualDelivery", "Actual Delivery", "Delivered Date", required=False, omit_if_absent=True),
        _string(
            "trackingNumber",
            "Tracking Number",
            "Tracking ID",
            max_length=50,
            default_template="TRK_{n}",
        ),
        _number("quantity", "Quantity", "Qty", "Units", minimum=1, default=1.0),
        _number("totalValue", "Total Value", "Value", "Amount", minimum=0, default=1000.0),
        _number(
            "shippingCost",
            "Shipping Cost",
            "Freight Cost",
            required=False,
            minimum=0,
            omit_if_absent=True,
        ),
        _enum(
            "shippingMethod",
            ("Air", "Sea", "Land", "Express"),
            "Shipping Method",
            "Mode",
            "Transport Mode",
            default="Land",
        ),
        _string("carrier", "Carrier", "Shipping Company", max_length=100, default="Standard Carrier"),
        _string(
            "currentLocation",
            "Current Location",
            required=False,
            max_length=200,
            omit_if_absent=True,
        ),
        _string_array("riskFactors", "Risk Factors", "Risks"),
    ),
)


@dataclass(frozen=True)
class SchemaRegistry:
    """
    Immutable lookup of schema definitions by type.
    """

    definitions: Mapping[SchemaType, SchemaDefinition] = field(default_factory=dict)

    def get(self, schema_type: SchemaType) -> SchemaDefinition:
        return self.definitions[schema_type]

    def __iter__(self) -> Iterator[SchemaDefinition]:
        return iter(self.definitions.values())

    def with_default_overrides(
        self,
        overrides: Mapping[str, Mapping[str, Any]],
    ) -> "SchemaRegistry":
        """
        Return a registry whose field defaults are replaced per schema/field.

        Date fields take the override as a day offset; every other field takes
        it as the constant default.
        """

        definitions = dict(self.definitions)
        for schema_label, field_overrides in overrides.items():
            schema_type = SchemaType.from_label(schema_label)
            definition = definitions[schema_type]
            fields = list(definition.fields)
            for field_name, value in field_overrides.items():
                index = definition.field_names.index(field_name) if field_name in definition.field_names else -1
                if index < 0:
                    raise ValueError(f"{schema_type.value} has no field '{field_name}' to override.")
                spec = fields[index]
                if spec.field_type is FieldType.DATE:
                    fields[index] = replace(spec, default_days_from_now=int(value))
                else:
                    fields[index] = replace(spec, default=value, default_template=None)
            definitions[schema_type] = replace(definition, fields=tuple(fields))
        return SchemaRegistry(definitions=definitions)


DEFAULT_REGISTRY = SchemaRegistry(
    definitions={
        definition.schema_type: definition
        for definition in (PRODUCTS, SUPPLIERS, FACTORIES, WAREHOUSES, RETAILERS, SHIPMENTS)
    }
)


@lru_cache(maxsize=1)
def get_schema_registry() -> SchemaRegistry:
    """
    Return the process-wide registry with configured default overrides applied.
    """

    from app.config import get_data_ingestion_settings

    overrides = get_data_ingestion_settings().field_default_overrides
    if not overrides:
        return DEFAULT_REGISTRY
    return DEFAULT_REGISTRY.with_default_overrides(overrides)
