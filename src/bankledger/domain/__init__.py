"""Domain layer for bankledger application."""

import importlib

# Services are imported lazily; the storage layer imports domain.entities and
# eager service imports here would import it back
_SERVICES = {
    "BankService": "bankledger.domain.bank",
    "EntryService": "bankledger.domain.entry",
    "SettingsService": "bankledger.domain.settings",
    "ReportService": "bankledger.domain.reports",
    "BackupService": "bankledger.domain.backup",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
