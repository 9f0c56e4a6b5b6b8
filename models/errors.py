"""Fehlerklassen des Planers.

Alle Fehler sind lokal und behebbar: Die Operation wird nicht ausgeführt,
der Aufrufer zeigt die Meldung an und lässt den Nutzer korrigieren.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Basisklasse für alle fachlichen Fehler des Planers."""


class InvalidInterval(PlannerError):
    """Zeitraum ungültig (Ende ≤ Beginn oder Dauer ≤ 0)."""


class InvalidInput(PlannerError):
    """Pflichtfeld fehlt oder Eingabe nicht lesbar (Name, Datum, Uhrzeit, Größe)."""


class Conflict(PlannerError):
    """Überschneidung mit einer bestehenden Reservierung auf demselben Platz."""

    def __init__(self, message: str, existing: Optional[Any] = None):
        super().__init__(message)
        self.existing = existing


class NotFound(PlannerError):
    """Die referenzierte ID existiert im jeweiligen Speicher nicht."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
