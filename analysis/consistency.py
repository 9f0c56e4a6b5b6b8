"""Konsistenzprüfung eines gespeicherten Anlagenstands.

Die Speicher halten ihre Regeln beim Ändern selbst ein. Eine von Hand
bearbeitete oder alte Arbeitsdatei kann sie trotzdem verletzen; diese
Prüfung findet solche Fälle unabhängig von den Speichern.
"""

from collections import Counter, defaultdict
from typing import Literal

from pydantic import BaseModel

from models.facility import FacilityData
from models.interval import intervals_overlap


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    rule: str            # z.B. "reservation_overlap"
    description: str
    entity: str          # element_id / reservation_id


class ValidationReport(BaseModel):
    """Ergebnis der Konsistenzprüfung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def rules(self) -> set[str]:
        return {v.rule for v in self.violations}

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KONSISTENT[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Konsistenzprüfung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.rule,
                v.entity,
                v.description,
            )
        console.print(table)


class ConsistencyValidator:
    """Prüft FacilityData auf verletzte Layout- und Buchungsregeln."""

    def validate(self, data: FacilityData) -> ValidationReport:
        violations: list[ValidationViolation] = []

        violations.extend(self._check_duplicate_ids(data))
        violations.extend(self._check_zone_sizes(data))
        violations.extend(self._check_court_sizes(data))
        violations.extend(self._check_court_labels(data))
        violations.extend(self._check_canvas_bounds(data))
        violations.extend(self._check_orphan_reservations(data))
        violations.extend(self._check_reservation_overlaps(data))
        violations.extend(self._check_counters(data))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Layout ────────────────────────────────────────────────────────────────

    def _check_duplicate_ids(self, data: FacilityData) -> list[ValidationViolation]:
        """IDs müssen über Elemente und über Reservierungen eindeutig sein."""
        violations = []
        for label, ids in (
            ("Element", [e.id for e in data.elements]),
            ("Reservierung", [r.id for r in data.reservations]),
        ):
            for key, n in Counter(ids).items():
                if n > 1:
                    violations.append(ValidationViolation(
                        severity="error",
                        rule="duplicate_id",
                        entity=key,
                        description=f"{label}-ID kommt {n}× vor.",
                    ))
        return violations

    def _check_zone_sizes(self, data: FacilityData) -> list[ValidationViolation]:
        """Skalierbare Zonen dürfen nicht kleiner als min_size sein."""
        min_size = data.config.zones.min_size
        violations = []
        for z in data.zones:
            if z.width < min_size or z.height < min_size:
                violations.append(ValidationViolation(
                    severity="error",
                    rule="zone_undersized",
                    entity=z.id,
                    description=(
                        f"{z.name}: {z.width:g}×{z.height:g} px unterschreitet "
                        f"die Mindestgröße {min_size:g} px."
                    ),
                ))
        return violations

    def _check_court_sizes(self, data: FacilityData) -> list[ValidationViolation]:
        """Plätze haben die feste Größe aus der Konfiguration."""
        width, height = data.config.court_size_px
        violations = []
        for c in data.courts:
            if abs(c.width - width) > 1e-6 or abs(c.height - height) > 1e-6:
                violations.append(ValidationViolation(
                    severity="warning",
                    rule="court_size",
                    entity=c.id,
                    description=(
                        f"{c.display_name}: {c.width:g}×{c.height:g} px statt "
                        f"{width:g}×{height:g} px."
                    ),
                ))
        return violations

    def _check_court_labels(self, data: FacilityData) -> list[ValidationViolation]:
        violations = []
        for label, n in Counter(c.label for c in data.courts).items():
            if n > 1:
                violations.append(ValidationViolation(
                    severity="warning",
                    rule="court_label_duplicate",
                    entity=f"Platz {label}",
                    description=f"Platznummer {label} ist {n}× vergeben.",
                ))
        return violations

    def _check_canvas_bounds(self, data: FacilityData) -> list[ValidationViolation]:
        """Elemente sollten vollständig auf der Zeichenfläche liegen."""
        cw, ch = data.config.canvas.width, data.config.canvas.height
        violations = []
        for el in data.elements:
            min_x, min_y, max_x, max_y = el.bounding_box
            if min_x < 0 or min_y < 0 or max_x > cw or max_y > ch:
                violations.append(ValidationViolation(
                    severity="warning",
                    rule="outside_canvas",
                    entity=el.id,
                    description=(
                        f"{el.display_name} ragt über die Zeichenfläche "
                        f"({min_x:.0f}, {min_y:.0f})–({max_x:.0f}, {max_y:.0f})."
                    ),
                ))
        return violations

    # ── Reservierungen ────────────────────────────────────────────────────────

    def _check_orphan_reservations(self, data: FacilityData) -> list[ValidationViolation]:
        """Jede Reservierung muss auf einen existierenden Platz zeigen."""
        court_ids = {c.id for c in data.courts}
        zone_ids = {z.id for z in data.zones}
        violations = []
        for r in data.reservations:
            if r.resource_id in court_ids:
                continue
            reason = "ist eine Zone" if r.resource_id in zone_ids else "existiert nicht"
            violations.append(ValidationViolation(
                severity="error",
                rule="orphan_reservation",
                entity=r.id,
                description=f"Platz '{r.resource_id}' {reason} ({r.client_name}, {r.interval}).",
            ))
        return violations

    def _check_reservation_overlaps(self, data: FacilityData) -> list[ValidationViolation]:
        """Pro Platz dürfen sich keine zwei Reservierungen überschneiden."""
        by_resource = defaultdict(list)
        for r in data.reservations:
            by_resource[r.resource_id].append(r)

        violations = []
        for resource_id, items in by_resource.items():
            items.sort(key=lambda r: r.start)
            for i, a in enumerate(items):
                for b in items[i + 1:]:
                    if b.start >= a.end:
                        break
                    if intervals_overlap(a.start, a.end, b.start, b.end):
                        violations.append(ValidationViolation(
                            severity="error",
                            rule="reservation_overlap",
                            entity=resource_id,
                            description=(
                                f"{a.id} ({a.interval}) überschneidet "
                                f"{b.id} ({b.interval})."
                            ),
                        ))
        return violations

    # ── Zähler ────────────────────────────────────────────────────────────────

    def _check_counters(self, data: FacilityData) -> list[ValidationViolation]:
        """Die gespeicherten Zähler müssen hinter allen vergebenen IDs liegen."""
        violations = []
        checks = (
            ("next_element_seq", data.next_element_seq, [e.id for e in data.elements]),
            ("next_reservation_seq", data.next_reservation_seq, [r.id for r in data.reservations]),
        )
        for name, value, ids in checks:
            used = [int(i.rpartition("-")[2]) for i in ids if i.rpartition("-")[2].isdigit()]
            if used and value <= max(used):
                violations.append(ValidationViolation(
                    severity="warning",
                    rule="counter_behind",
                    entity=name,
                    description=f"{name} = {value}, höchste vergebene Nummer ist {max(used)}.",
                ))
        if data.courts and data.next_court_label <= max(c.label for c in data.courts):
            violations.append(ValidationViolation(
                severity="warning",
                rule="counter_behind",
                entity="next_court_label",
                description=(
                    f"next_court_label = {data.next_court_label}, höchste Platznummer ist "
                    f"{max(c.label for c in data.courts)}."
                ),
            ))
        return violations
