"""
Name: Batch Custody Ledger Use Case Tests

Responsibilities:
  - Validate register_batch (uniqueness, date invariant, event 0)
  - Validate custodian gating, terminal recall and the dispense transition
  - Validate that failures leave batch, events and counter untouched
"""

from __future__ import annotations

import pytest

from pharmatrace.application.usecases import (
    CustodyErrorCode,
    RecallBatchUseCase,
    RegisterBatchUseCase,
)
from pharmatrace.domain.entities import (
    BatchStatus,
    CustodyEventType,
    ManufacturerStatus,
)
from pharmatrace.domain.value_objects import Identity

pytestmark = pytest.mark.unit

T0 = 1625097600
ONE_DAY = 86400
ONE_YEAR = 31536000


def _snapshot(batch_queries, batch_id: str):
    return (
        batch_queries.get_batch(batch_id),
        batch_queries.get_event_count(batch_id),
        batch_queries.list_custody_events(batch_id),
    )


class TestRegisterBatch:
    def test_registers_produced_batch_with_production_event(
        self, register_batch, batch_input, batch_queries, producer
    ):
        result = register_batch.execute(
            batch_input(
                "BATCH-123456",
                production_date=T0 - ONE_DAY,
                expiry_date=T0 + ONE_YEAR,
            ),
            producer,
        )

        assert result.ok
        batch = batch_queries.get_batch("BATCH-123456")
        assert batch.medication_name == "Ibuprofen"
        assert batch.status == BatchStatus.PRODUCED
        assert batch.current_custodian == producer
        assert batch_queries.get_event_count("BATCH-123456") == 1

        event = batch_queries.get_custody_event("BATCH-123456", 0)
        assert event.event_type == CustodyEventType.PRODUCTION
        assert event.from_identity == producer
        assert event.to_identity == producer
        assert event.timestamp == T0
        assert event.location == "Production Facility"
        assert event.notes == "Batch produced"
        assert result.event == event

    def test_duplicate_batch_id_fails_and_keeps_first_record(
        self, register_batch, batch_input, batch_queries, producer, distributor
    ):
        register_batch.execute(batch_input("B1", quantity=1000), producer)
        before = _snapshot(batch_queries, "B1")

        result = register_batch.execute(batch_input("B1", quantity=5), distributor)

        assert result.error.code == CustodyErrorCode.ALREADY_EXISTS
        assert result.batch is None and result.event is None
        assert _snapshot(batch_queries, "B1") == before

    @pytest.mark.parametrize("expiry_offset", [0, -1, -ONE_YEAR])
    def test_expiry_not_after_production_fails_invalid_dates(
        self, register_batch, batch_input, batch_queries, producer, expiry_offset
    ):
        result = register_batch.execute(
            batch_input("B1", production_date=T0, expiry_date=T0 + expiry_offset),
            producer,
        )

        assert result.error.code == CustodyErrorCode.INVALID_DATES
        assert result.error.numeric_code == 1004
        assert batch_queries.get_batch("B1") is None
        assert batch_queries.get_event_count("B1") == 0
        assert batch_queries.get_custody_event("B1", 0) is None

    def test_anonymous_caller_cannot_register(
        self, register_batch, batch_input, batch_queries
    ):
        result = register_batch.execute(batch_input("B1"), None)

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED
        assert batch_queries.get_batch("B1") is None

    def test_negative_quantity_is_rejected_by_input(self, batch_input):
        with pytest.raises(ValueError):
            batch_input("B1", quantity=-1)

    def test_zero_quantity_is_allowed(
        self, register_batch, batch_input, producer
    ):
        assert register_batch.execute(batch_input("B1", quantity=0), producer).ok

    def test_manufacturer_is_not_cross_checked_by_default(
        self, register_batch, batch_input, producer
    ):
        result = register_batch.execute(
            batch_input("B1", manufacturer_id="never-registered"), producer
        )

        assert result.ok

    def test_custom_production_event_defaults(
        self, ledger, clock, locks, batch_input, batch_queries, producer
    ):
        use_case = RegisterBatchUseCase(
            ledger,
            clock,
            locks,
            production_location="Plant 7",
            production_notes="Lot released by QA",
        )

        use_case.execute(batch_input("B1"), producer)

        event = batch_queries.get_custody_event("B1", 0)
        assert event.location == "Plant 7"
        assert event.notes == "Lot released by QA"


class TestApprovedManufacturerCrossCheck:
    @pytest.fixture
    def strict_register(self, ledger, clock, locks, manufacturer_repo):
        return RegisterBatchUseCase(
            ledger,
            clock,
            locks,
            manufacturers=manufacturer_repo,
            require_approved_manufacturer=True,
        )

    def test_requires_manufacturer_repository(self, ledger, clock, locks):
        with pytest.raises(ValueError):
            RegisterBatchUseCase(
                ledger, clock, locks, require_approved_manufacturer=True
            )

    def test_unknown_manufacturer_is_rejected(
        self, strict_register, batch_input, batch_queries, producer
    ):
        result = strict_register.execute(batch_input("B1", manufacturer_id="M1"), producer)

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED
        assert batch_queries.get_event_count("B1") == 0

    def test_pending_manufacturer_is_rejected(
        self,
        strict_register,
        register_manufacturer,
        manufacturer_info,
        batch_input,
        producer,
    ):
        register_manufacturer.execute(manufacturer_info("M1"))

        result = strict_register.execute(batch_input("B1", manufacturer_id="M1"), producer)

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED

    def test_approved_manufacturer_is_accepted(
        self,
        strict_register,
        register_manufacturer,
        approve_manufacturer,
        manufacturer_info,
        manufacturer_queries,
        batch_input,
        admin,
        producer,
    ):
        register_manufacturer.execute(manufacturer_info("M1"))
        approve_manufacturer.execute("M1", admin)
        assert manufacturer_queries.get("M1").status == ManufacturerStatus.APPROVED

        assert strict_register.execute(
            batch_input("B1", manufacturer_id="M1"), producer
        ).ok


class TestCustodyTransitions:
    @pytest.fixture(autouse=True)
    def _registered(self, register_batch, batch_input, producer):
        assert register_batch.execute(batch_input("B1"), producer).ok

    def test_transfer_moves_custody(
        self, transfer_batch, batch_queries, producer, distributor, clock
    ):
        clock.advance(ONE_DAY)

        result = transfer_batch.execute(
            "B1", producer, to=distributor, location="DC", notes="Truck 12"
        )

        assert result.ok
        assert result.batch.status == BatchStatus.TRANSIT
        assert result.batch.current_custodian == distributor
        event = batch_queries.get_custody_event("B1", 1)
        assert event.event_type == CustodyEventType.TRANSFER
        assert event.from_identity == producer
        assert event.to_identity == distributor
        assert event.location == "DC"
        assert event.notes == "Truck 12"
        assert event.timestamp == T0 + ONE_DAY

    def test_previous_custodian_loses_control_after_transfer(
        self, transfer_batch, deliver_batch, producer, distributor
    ):
        transfer_batch.execute("B1", producer, to=distributor, location="DC")

        result = deliver_batch.execute("B1", producer, location="DC")

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED

    def test_transfer_without_receiver_is_rejected(
        self, transfer_batch, batch_queries, producer
    ):
        before = _snapshot(batch_queries, "B1")

        with pytest.raises(ValueError):
            transfer_batch.execute("B1", producer, to=None, location="DC")

        assert _snapshot(batch_queries, "B1") == before
        assert batch_queries.get_batch("B1").status == BatchStatus.PRODUCED

    def test_deliver_keeps_custodian(
        self, deliver_batch, batch_queries, producer
    ):
        result = deliver_batch.execute("B1", producer, location="Pharmacy 3")

        assert result.ok
        assert result.batch.status == BatchStatus.DELIVERED
        assert result.batch.current_custodian == producer
        event = batch_queries.get_custody_event("B1", 1)
        assert event.event_type == CustodyEventType.DELIVERY
        assert event.from_identity == event.to_identity == producer

    def test_dispense_after_delivery(
        self, deliver_batch, dispense_batch, batch_queries, producer
    ):
        deliver_batch.execute("B1", producer, location="Pharmacy 3")

        result = dispense_batch.execute("B1", producer, location="Pharmacy 3", notes="Rx 88")

        assert result.ok
        assert result.batch.status == BatchStatus.DISPENSED
        assert batch_queries.get_event_count("B1") == 3
        assert batch_queries.get_custody_event("B1", 2).event_type == (
            CustodyEventType.DISPENSING
        )

    @pytest.mark.parametrize("prepare", ["produced", "transit"])
    def test_dispense_before_delivery_is_invalid(
        self, prepare, transfer_batch, dispense_batch, batch_queries, producer
    ):
        actor = producer
        if prepare == "transit":
            transfer_batch.execute("B1", producer, to=producer, location="DC")
        before = _snapshot(batch_queries, "B1")

        result = dispense_batch.execute("B1", actor, location="Pharmacy")

        assert result.error.code == CustodyErrorCode.INVALID_TRANSITION
        assert _snapshot(batch_queries, "B1") == before

    def test_dispense_by_non_custodian_is_unauthorized(
        self, deliver_batch, dispense_batch, producer, stranger
    ):
        deliver_batch.execute("B1", producer, location="Pharmacy")

        result = dispense_batch.execute("B1", stranger, location="Pharmacy")

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED

    @pytest.mark.parametrize("operation", ["transfer", "deliver", "dispense", "recall"])
    def test_non_custodian_is_rejected_without_side_effects(
        self,
        operation,
        transfer_batch,
        deliver_batch,
        dispense_batch,
        recall_batch,
        batch_queries,
        stranger,
        distributor,
    ):
        before = _snapshot(batch_queries, "B1")

        if operation == "transfer":
            result = transfer_batch.execute("B1", stranger, to=distributor, location="X")
        elif operation == "deliver":
            result = deliver_batch.execute("B1", stranger, location="X")
        elif operation == "dispense":
            result = dispense_batch.execute("B1", stranger, location="X")
        else:
            result = recall_batch.execute("B1", stranger, notes="contamination")

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED
        assert _snapshot(batch_queries, "B1") == before

    @pytest.mark.parametrize("operation", ["transfer", "deliver", "dispense", "recall"])
    def test_unknown_batch_is_not_found(
        self,
        operation,
        transfer_batch,
        deliver_batch,
        dispense_batch,
        recall_batch,
        producer,
    ):
        if operation == "transfer":
            result = transfer_batch.execute("nope", producer, to=producer, location="X")
        elif operation == "deliver":
            result = deliver_batch.execute("nope", producer, location="X")
        elif operation == "dispense":
            result = dispense_batch.execute("nope", producer, location="X")
        else:
            result = recall_batch.execute("nope", producer, notes="x")

        assert result.error.code == CustodyErrorCode.NOT_FOUND
        assert result.error.numeric_code == 1002


class TestRecall:
    @pytest.fixture(autouse=True)
    def _registered(self, register_batch, batch_input, producer):
        assert register_batch.execute(batch_input("B1"), producer).ok

    def test_custodian_recalls(self, recall_batch, batch_queries, producer):
        result = recall_batch.execute("B1", producer, notes="Contamination found")

        assert result.ok
        assert result.batch.status == BatchStatus.RECALLED
        event = batch_queries.get_custody_event("B1", 1)
        assert event.event_type == CustodyEventType.RECALL
        assert event.notes == "Contamination found"
        assert event.location == "Production Facility"

    def test_recall_uses_given_location(
        self, transfer_batch, recall_batch, batch_queries, producer, distributor
    ):
        transfer_batch.execute("B1", producer, to=distributor, location="DC")

        recall_batch.execute("B1", distributor, notes="Temp excursion", location="Quarantine")

        assert batch_queries.get_custody_event("B1", 2).location == "Quarantine"

    def test_recall_defaults_to_last_recorded_location(
        self, transfer_batch, recall_batch, batch_queries, producer, distributor
    ):
        transfer_batch.execute("B1", producer, to=distributor, location="DC")

        recall_batch.execute("B1", distributor, notes="Temp excursion")

        assert batch_queries.get_custody_event("B1", 2).location == "DC"

    @pytest.mark.parametrize("operation", ["transfer", "deliver", "dispense", "recall"])
    def test_recalled_batch_rejects_everything(
        self,
        operation,
        transfer_batch,
        deliver_batch,
        dispense_batch,
        recall_batch,
        batch_queries,
        producer,
        distributor,
    ):
        recall_batch.execute("B1", producer, notes="Recall")
        before = _snapshot(batch_queries, "B1")

        if operation == "transfer":
            result = transfer_batch.execute("B1", producer, to=distributor, location="X")
        elif operation == "deliver":
            result = deliver_batch.execute("B1", producer, location="X")
        elif operation == "dispense":
            result = dispense_batch.execute("B1", producer, location="X")
        else:
            result = recall_batch.execute("B1", producer, notes="again")

        assert result.error.code == CustodyErrorCode.ALREADY_RECALLED
        assert result.error.numeric_code == 1005
        assert _snapshot(batch_queries, "B1") == before

    def test_admin_cannot_recall_by_default(self, recall_batch, admin):
        result = recall_batch.execute("B1", admin, notes="Regulator order")

        assert result.error.code == CustodyErrorCode.UNAUTHORIZED

    def test_admin_recall_when_enabled(
        self, ledger, clock, locks, batch_queries, admin, producer
    ):
        use_case = RecallBatchUseCase(
            ledger, clock, locks, administrator=admin, allow_admin_recall=True
        )

        result = use_case.execute("B1", admin, notes="Regulator order")

        assert result.ok
        event = batch_queries.get_custody_event("B1", 1)
        assert event.from_identity == admin
        assert event.to_identity == producer
        assert result.batch.current_custodian == producer

    def test_dispensed_batch_can_still_be_recalled(
        self, deliver_batch, dispense_batch, recall_batch, producer
    ):
        deliver_batch.execute("B1", producer, location="Pharmacy")
        dispense_batch.execute("B1", producer, location="Pharmacy")

        assert recall_batch.execute("B1", producer, notes="Post-market").ok


class TestQueries:
    def test_unknown_batch_queries(self, batch_queries):
        assert batch_queries.get_batch("nope") is None
        assert batch_queries.get_event_count("nope") == 0
        assert batch_queries.get_custody_event("nope", 0) is None
        assert batch_queries.list_custody_events("nope") == []

    def test_out_of_range_event_ids(
        self, register_batch, batch_input, batch_queries, producer
    ):
        register_batch.execute(batch_input("B1"), producer)

        assert batch_queries.get_custody_event("B1", 1) is None
        assert batch_queries.get_custody_event("B1", -1) is None

    def test_event_count_matches_successful_operations(
        self,
        register_batch,
        transfer_batch,
        deliver_batch,
        batch_input,
        batch_queries,
        producer,
        distributor,
        stranger,
    ):
        register_batch.execute(batch_input("B1"), producer)
        transfer_batch.execute("B1", producer, to=distributor, location="DC")
        transfer_batch.execute("B1", stranger, to=stranger, location="DC")  # rejected
        deliver_batch.execute("B1", distributor, location="Pharmacy")
        transfer_batch.execute("B1", distributor, to=Identity("pharmacy"), location="P")

        events = batch_queries.list_custody_events("B1")
        assert batch_queries.get_event_count("B1") == 4
        assert [e.event_id for e in events] == [0, 1, 2, 3]
        assert [e.event_type for e in events] == [
            CustodyEventType.PRODUCTION,
            CustodyEventType.TRANSFER,
            CustodyEventType.DELIVERY,
            CustodyEventType.TRANSFER,
        ]
