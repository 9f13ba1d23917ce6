"""App subclasses — SessionApp."""

from clinic_scribe.l4_frameworks_and_drivers.apps.session import SessionApp

__all__ = ['SessionApp']
