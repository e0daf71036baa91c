from __future__ import annotations

import unittest
from datetime import date
from typing import Any

from app.domain.schema_registry import DEFAULT_REGISTRY
from app.domain.supply_records import MappedRecord, MappingSource, SchemaType
from app.validators.record_validator import RecordValidator


def _product(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "name": "Widget",
        "category": "Hardware",
        "supplier": "Acme",
        "description": "A widget",
        "unitCost": 12.5,
        "leadTime": 14.0,
        "minOrderQuantity": 1.0,
        "maxOrderQuantity": 500.0,
        "riskLevel": "low",
        "certifications": ["ISO9001"],
    }
    values.update(overrides)
    return values


def _supplier(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "name": "Acme",
        "location": "Austin",
        "country": "USA",
        "contactPerson": "Jo Smith",
        "email": "jo@acme.com",
        "phone": "+1 555 0100",
        "status": "active",
        "riskLevel": "medium",
        "certifications": [],
        "leadTime": 21.0,
        "paymentTerms": "Net 30",
        "minimumOrder": 0.0,
        "maximumOrder": 1000.0,
        "specialties": ["fasteners"],
    }
    values.update(overrides)
    return values


def _shipment(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "shipmentId": "SHIP_1",
        "origin": "Shanghai",
        "destination": "Rotterdam",
        "status": "Delayed",
        "expectedDelivery": date(2026, 2, 1),
        "trackingNumber": "TRK_1",
        "quantity": 10.0,
        "totalValue": 5000.0,
        "shippingMethod": "Sea",
        "carrier": "Maersk",
        "riskFactors": [],
    }
    values.update(overrides)
    return values


def _record(schema_type: SchemaType, values: dict[str, Any]) -> MappedRecord:
    return MappedRecord(schema_type=schema_type, row_number=1, values=values, source=MappingSource.AI)


class TestRecordValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = RecordValidator(registry=DEFAULT_REGISTRY)

    def test_valid_records_are_accepted(self) -> None:
        for schema_type, values in (
            (SchemaType.PRODUCTS, _product()),
            (SchemaType.SUPPLIERS, _supplier()),
            (SchemaType.SHIPMENTS, _shipment()),
        ):
            with self.subTest(schema_type=schema_type):
                verdict = self.validator.validate(_record(schema_type, values))
                self.assertTrue(verdict.accepted)
                self.assertEqual(verdict.reasons, ())

    def test_every_missing_required_field_is_reported(self) -> None:
        values = _product()
        del values["name"]
        del values["unitCost"]

        verdict = self.validator.validate(_record(SchemaType.PRODUCTS, values))

        self.assertFalse(verdict.accepted)
        self.assertIn("name: required, missing", verdict.reasons)
        self.assertIn("unitCost: required, missing", verdict.reasons)
        self.assertEqual(len(set(verdict.reasons)), len(verdict.reasons))
        self.assertGreaterEqual(len(verdict.reasons), 2)

    def test_optional_rating_absent_is_accepted_but_out_of_bounds_is_rejected(self) -> None:
        absent = self.validator.validate(_record(SchemaType.SUPPLIERS, _supplier()))
        in_bounds = self.validator.validate(_record(SchemaType.SUPPLIERS, _supplier(rating=4.5)))
        out_of_bounds = self.validator.validate(_record(SchemaType.SUPPLIERS, _supplier(rating=7)))

        self.assertTrue(absent.accepted)
        self.assertTrue(in_bounds.accepted)
        self.assertFalse(out_of_bounds.accepted)
        self.assertEqual(out_of_bounds.reasons, ("rating: must be <= 5",))

    def test_empty_required_string_is_rejected(self) -> None:
        verdict = self.validator.validate(_record(SchemaType.PRODUCTS, _product(name="   ")))

        self.assertEqual(verdict.reasons, ("name: required, empty",))

    def test_numeric_type_and_bounds(self) -> None:
        verdict = self.validator.validate(
            _record(SchemaType.PRODUCTS, _product(unitCost="12.50", leadTime=0.0, minOrderQuantity=True))
        )

        self.assertEqual(
            verdict.reasons,
            (
                "unitCost: must be a number",
                "leadTime: must be >= 1",
                "minOrderQuantity: must be a number",
            ),
        )

    def test_shipment_quantity_minimum(self) -> None:
        verdict = self.validator.validate(_record(SchemaType.SHIPMENTS, _shipment(quantity=0)))

        self.assertEqual(verdict.reasons, ("quantity: must be >= 1",))

    def test_enum_must_match_exactly(self) -> None:
        verdict = self.validator.validate(_record(SchemaType.SHIPMENTS, _shipment(status="delayed")))

        self.assertEqual(
            verdict.reasons,
            ("status: must be one of On-Time, Delayed, Stuck, Delivered",),
        )

    def test_email_shape(self) -> None:
        for email in ("not-an-email", "jo@acme", "jo @acme.com", "@acme.com"):
            with self.subTest(email=email):
                verdict = self.validator.validate(_record(SchemaType.SUPPLIERS, _supplier(email=email)))
                self.assertEqual(verdict.reasons, ("email: invalid email address",))

    def test_dates_must_be_calendar_dates(self) -> None:
        verdict = self.validator.validate(
            _record(SchemaType.SHIPMENTS, _shipment(expectedDelivery="2026-13-45", actualDelivery="soon"))
        )

        self.assertEqual(
            verdict.reasons,
            ("expectedDelivery: invalid date", "actualDelivery: invalid date"),
        )

    def test_length_and_array_rules(self) -> None:
        verdict = self.validator.validate(
            _record(SchemaType.PRODUCTS, _product(name="x" * 101, certifications=[1, 2]))
        )

        self.assertEqual(
            verdict.reasons,
            ("name: exceeds 100 characters", "certifications: must be a list of strings"),
        )

    def test_supplier_text_limits(self) -> None:
        verdict = self.validator.validate(
            _record(
                SchemaType.SUPPLIERS,
                _supplier(phone="1" * 99, paymentTerms="n" * 200, country="c" * 256),
            )
        )

        self.assertFalse(verdict.accepted)
        self.assertEqual(
            verdict.reasons,
            (
                "country: exceeds 255 characters",
                "phone: exceeds 64 characters",
                "paymentTerms: exceeds 120 characters",
            ),
        )

    def test_supplier_text_at_the_limit_is_accepted(self) -> None:
        verdict = self.validator.validate(
            _record(SchemaType.SUPPLIERS, _supplier(phone="1" * 64, paymentTerms="n" * 120))
        )

        self.assertTrue(verdict.accepted, verdict.reasons)

    def test_malformed_record(self) -> None:
        record = MappedRecord(
            schema_type=SchemaType.PRODUCTS,
            row_number=3,
            values={},
            source=MappingSource.AI,
            malformed=True,
        )

        verdict = self.validator.validate(record)

        self.assertEqual(verdict.reasons, ("record: expected an object",))

    def test_validation_does_not_mutate_the_record(self) -> None:
        values = _product(unitCost=-1.0)
        snapshot = dict(values)
        record = _record(SchemaType.PRODUCTS, values)

        self.validator.validate(record)

        self.assertEqual(record.values, snapshot)


if __name__ == "__main__":
    unittest.main()
