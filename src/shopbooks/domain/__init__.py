"""Domain layer for shopbooks application."""

_SERVICES = {
    "InventoryService": "shopbooks.domain.inventory",
    "InvoiceService": "shopbooks.domain.invoice",
    "ExpenseService": "shopbooks.domain.expense",
    "ReportService": "shopbooks.domain.report",
}

__all__ = list(_SERVICES)


# Services are imported lazily: they depend on shopbooks.database, which in
# turn imports shopbooks.domain.entities
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
