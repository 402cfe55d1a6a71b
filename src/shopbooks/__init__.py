"""Small-business bookkeeping: stock, invoices, payments, expenses and reports."""

__version__ = "0.1.0"


# The CLI imports every layer, so it is only loaded on first access
def __getattr__(name):
    if name == "main":
        from shopbooks.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
