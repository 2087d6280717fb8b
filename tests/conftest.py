"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (settings without .env, admin identity)
  - Provide deterministic collaborators (fixed clock, identities)
  - Provide fresh in-memory stores and wired use cases per test

Collaborators:
  - pytest: Test framework
  - pharmatrace.infrastructure: FixedClock, InProcessEntityLocks, in-memory stores
  - pharmatrace.application.usecases: use cases under test

Notes:
  - Every fixture is function-scoped: stores never leak between tests
  - T0 (2021-07-01 UTC) is the fixed clock start for every test
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("ADMIN_IDENTITY", "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7")

from pharmatrace.application.usecases import (  # noqa: E402
    ApproveManufacturerUseCase,
    BatchQueries,
    DeliverBatchUseCase,
    DispenseBatchUseCase,
    ManufacturerInfoInput,
    ManufacturerQueries,
    RecallBatchUseCase,
    RegisterBatchInput,
    RegisterBatchUseCase,
    RegisterManufacturerUseCase,
    RevokeManufacturerUseCase,
    TransferBatchUseCase,
    UpdateManufacturerInfoUseCase,
)
from pharmatrace.crosscutting import config as app_config  # noqa: E402
from pharmatrace.domain.value_objects import Identity  # noqa: E402
from pharmatrace.infrastructure.clock import FixedClock  # noqa: E402
from pharmatrace.infrastructure.locks import InProcessEntityLocks  # noqa: E402
from pharmatrace.infrastructure.repositories import (  # noqa: E402
    InMemoryBatchLedgerRepository,
    InMemoryManufacturerRepository,
)

app_config.Settings.model_config["env_file"] = None

T0 = 1625097600
ONE_DAY = 86400
ONE_YEAR = 31536000


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Identities / clock
# ============================================================================


@pytest.fixture
def admin() -> Identity:
    return Identity("SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7")


@pytest.fixture
def producer() -> Identity:
    """Custodian A: registers batches."""
    return Identity("ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM")


@pytest.fixture
def distributor() -> Identity:
    """Custodian B: receives transfers."""
    return Identity("ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG")


@pytest.fixture
def stranger() -> Identity:
    """Identity C: never holds custody."""
    return Identity("ST2JHG361ZXG51QTKY2NQCVBPPRRE2KZB1HR05NNC")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture
def locks() -> InProcessEntityLocks:
    return InProcessEntityLocks()


# ============================================================================
# Stores
# ============================================================================


@pytest.fixture
def manufacturer_repo() -> InMemoryManufacturerRepository:
    return InMemoryManufacturerRepository()


@pytest.fixture
def ledger() -> InMemoryBatchLedgerRepository:
    return InMemoryBatchLedgerRepository()


# ============================================================================
# Manufacturer registry use cases
# ============================================================================


@pytest.fixture
def register_manufacturer(manufacturer_repo, clock, locks):
    return RegisterManufacturerUseCase(manufacturer_repo, clock, locks)


@pytest.fixture
def update_manufacturer(manufacturer_repo, clock, locks):
    return UpdateManufacturerInfoUseCase(manufacturer_repo, clock, locks)


@pytest.fixture
def approve_manufacturer(manufacturer_repo, clock, locks, admin):
    return ApproveManufacturerUseCase(manufacturer_repo, clock, locks, admin)


@pytest.fixture
def revoke_manufacturer(manufacturer_repo, clock, locks, admin):
    return RevokeManufacturerUseCase(manufacturer_repo, clock, locks, admin)


@pytest.fixture
def manufacturer_queries(manufacturer_repo):
    return ManufacturerQueries(manufacturer_repo)


@pytest.fixture
def manufacturer_info():
    def _make(manufacturer_id: str = "M1", **overrides) -> ManufacturerInfoInput:
        data = {
            "manufacturer_id": manufacturer_id,
            "name": "Acme Pharma",
            "license_number": "LIC-12345",
            "location": "Basel",
            "contact_info": "qa@acme.example",
        }
        data.update(overrides)
        return ManufacturerInfoInput(**data)

    return _make


# ============================================================================
# Batch custody ledger use cases
# ============================================================================


@pytest.fixture
def register_batch(ledger, clock, locks):
    return RegisterBatchUseCase(ledger, clock, locks)


@pytest.fixture
def transfer_batch(ledger, clock, locks):
    return TransferBatchUseCase(ledger, clock, locks)


@pytest.fixture
def deliver_batch(ledger, clock, locks):
    return DeliverBatchUseCase(ledger, clock, locks)


@pytest.fixture
def dispense_batch(ledger, clock, locks):
    return DispenseBatchUseCase(ledger, clock, locks)


@pytest.fixture
def recall_batch(ledger, clock, locks, admin):
    return RecallBatchUseCase(ledger, clock, locks, administrator=admin)


@pytest.fixture
def batch_queries(ledger):
    return BatchQueries(ledger)


@pytest.fixture
def batch_input():
    def _make(batch_id: str = "B1", **overrides) -> RegisterBatchInput:
        data = {
            "batch_id": batch_id,
            "manufacturer_id": "123e4567-e89b-12d3-a456-426614174000",
            "medication_name": "Ibuprofen",
            "dosage": "200mg",
            "form": "Tablet",
            "quantity": 1000,
            "production_date": T0,
            "expiry_date": T0 + ONE_YEAR,
        }
        data.update(overrides)
        return RegisterBatchInput(**data)

    return _make
