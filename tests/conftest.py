"""Shared pytest fixtures for shopbooks tests."""

import tempfile
import os
import pytest

from shopbooks.database.factories import create_sqlite_database
from shopbooks.domain.entities import PartyKind
from shopbooks.domain.expense import ExpenseService
from shopbooks.domain.inventory import InventoryService
from shopbooks.domain.invoice import InvoiceService
from shopbooks.domain.notifications import Notifier, Severity
from shopbooks.domain.report import ReportService


class RecordingNotifier(Notifier):
    """Notifier that keeps every message for assertions."""

    def __init__(self):
        self.messages = []

    def notify(self, title, description, severity=Severity.SUCCESS):
        self.messages.append((severity, title, description))

    @property
    def titles(self):
        return [title for _, title, _ in self.messages]

    @property
    def errors(self):
        return [(title, description) for severity, title, description in self.messages
                if severity is Severity.ERROR]


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def notifier():
    """Create a notifier that records messages."""
    return RecordingNotifier()


@pytest.fixture
def inventory_service(temp_db, notifier):
    """Create an InventoryService with a temporary database."""
    return InventoryService(temp_db, notifier)


@pytest.fixture
def invoice_service(temp_db, notifier, inventory_service):
    """Create an InvoiceService sharing the inventory service."""
    return InvoiceService(temp_db, notifier, inventory_service)


@pytest.fixture
def expense_service(temp_db, notifier):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db, notifier)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_product(inventory_service):
    """Create a product with 10 units in stock."""
    product_id = inventory_service.create_product(
        sku="CAB-01", name="HDMI cable", initial_quantity=10
    )
    return inventory_service.get_product(product_id)


@pytest.fixture
def sample_customer(invoice_service):
    """Create a sample customer."""
    party_id = invoice_service.create_party(PartyKind.CUSTOMER, "Acme Retail", email="ap@acme.test")
    return invoice_service.get_party(party_id)


@pytest.fixture
def sample_supplier(invoice_service):
    """Create a sample supplier."""
    party_id = invoice_service.create_party(PartyKind.SUPPLIER, "Cable Wholesale")
    return invoice_service.get_party(party_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
