"""
Name: Custody Lifecycle Scenarios

Responsibilities:
  - Walk full batch lifecycles across both registries
  - Verify the event log stays gapless and ordered after mixed outcomes
"""

from __future__ import annotations

import pytest

from pharmatrace.application.usecases import CustodyErrorCode
from pharmatrace.domain.entities import BatchStatus, CustodyEventType

pytestmark = pytest.mark.unit

T0 = 1625097600
ONE_DAY = 86400
ONE_YEAR = 31536000


def test_manufacturer_onboarding_then_batch_lifecycle(
    register_manufacturer,
    approve_manufacturer,
    manufacturer_info,
    manufacturer_queries,
    register_batch,
    transfer_batch,
    deliver_batch,
    dispense_batch,
    batch_input,
    batch_queries,
    admin,
    producer,
    distributor,
    clock,
):
    assert register_manufacturer.execute(manufacturer_info("M1"), producer).ok
    assert approve_manufacturer.execute("M1", admin).ok
    assert manufacturer_queries.is_approved("M1")

    assert register_batch.execute(batch_input("B1", manufacturer_id="M1"), producer).ok
    clock.advance(ONE_DAY)
    assert transfer_batch.execute(
        "B1", producer, to=distributor, location="Distribution Center"
    ).ok
    clock.advance(ONE_DAY)
    assert deliver_batch.execute("B1", distributor, location="City Pharmacy").ok
    clock.advance(ONE_DAY)
    assert dispense_batch.execute(
        "B1", distributor, location="City Pharmacy", notes="Patient 42"
    ).ok

    batch = batch_queries.get_batch("B1")
    assert batch.status == BatchStatus.DISPENSED
    assert batch.current_custodian == distributor

    events = batch_queries.list_custody_events("B1")
    assert [e.event_type for e in events] == [
        CustodyEventType.PRODUCTION,
        CustodyEventType.TRANSFER,
        CustodyEventType.DELIVERY,
        CustodyEventType.DISPENSING,
    ]
    assert [e.timestamp for e in events] == [
        T0,
        T0 + ONE_DAY,
        T0 + 2 * ONE_DAY,
        T0 + 3 * ONE_DAY,
    ]


def test_transfer_chain_hands_control_forward(
    register_batch,
    transfer_batch,
    batch_input,
    batch_queries,
    producer,
    distributor,
    stranger,
):
    register_batch.execute(batch_input("B1"), producer)
    transfer_batch.execute("B1", producer, to=distributor, location="DC")

    # El custodio anterior ya no puede operar, el nuevo sí.
    stale = transfer_batch.execute("B1", producer, to=stranger, location="DC")
    fresh = transfer_batch.execute("B1", distributor, to=stranger, location="Hub")

    assert stale.error.code == CustodyErrorCode.UNAUTHORIZED
    assert fresh.ok
    assert batch_queries.get_batch("B1").current_custodian == stranger
    assert batch_queries.get_event_count("B1") == 3

    hops = [
        (e.from_identity, e.to_identity)
        for e in batch_queries.list_custody_events("B1")[1:]
    ]
    assert hops == [(producer, distributor), (distributor, stranger)]


def test_recall_mid_chain_freezes_the_record(
    register_batch,
    transfer_batch,
    deliver_batch,
    recall_batch,
    batch_input,
    batch_queries,
    producer,
    distributor,
):
    register_batch.execute(batch_input("B1"), producer)
    transfer_batch.execute("B1", producer, to=distributor, location="DC")

    assert recall_batch.execute("B1", distributor, notes="Contamination").ok

    frozen = batch_queries.list_custody_events("B1")
    assert deliver_batch.execute("B1", distributor, location="Pharmacy").error.code == (
        CustodyErrorCode.ALREADY_RECALLED
    )
    assert batch_queries.list_custody_events("B1") == frozen
    assert frozen[-1].event_type == CustodyEventType.RECALL
    assert frozen[-1].to_identity == distributor


def test_revoked_manufacturer_does_not_affect_existing_batches(
    register_manufacturer,
    approve_manufacturer,
    revoke_manufacturer,
    manufacturer_info,
    register_batch,
    transfer_batch,
    batch_input,
    admin,
    producer,
    distributor,
):
    register_manufacturer.execute(manufacturer_info("M1"))
    approve_manufacturer.execute("M1", admin)
    register_batch.execute(batch_input("B1", manufacturer_id="M1"), producer)

    revoke_manufacturer.execute("M1", admin)

    assert transfer_batch.execute("B1", producer, to=distributor, location="DC").ok


def test_batches_have_independent_event_logs(
    register_batch,
    transfer_batch,
    batch_input,
    batch_queries,
    producer,
    distributor,
):
    register_batch.execute(batch_input("B1"), producer)
    register_batch.execute(batch_input("B10"), producer)
    transfer_batch.execute("B1", producer, to=distributor, location="DC")

    assert batch_queries.get_event_count("B1") == 2
    assert batch_queries.get_event_count("B10") == 1
    assert batch_queries.get_custody_event("B10", 1) is None
    assert batch_queries.get_custody_event("B1", 1).batch_id == "B1"
