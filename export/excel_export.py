"""Excel-Export für Layout und Reservierungen (openpyxl)."""

from collections import defaultdict
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from models.element import Court
from models.facility import FacilityData
from models.reservation import Reservation

from export.helpers import (
    COLORS, excel_color, element_details, element_kind_label, element_size_m,
    format_day, format_time_range, today_str,
)


class ExcelExporter:
    """Exportiert eine Anlage in eine Excel-Datei.

    Blätter: Übersicht, Layout, Reservierungen, je Platz eine Wochenagenda
    und optional die Auslastung.
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_ID_W   = 10
    COL_TEXT_W = 24
    COL_DAY_W  = 28

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_AGENDA_H = 48

    def __init__(self, data: FacilityData):
        self.data     = data
        self.config   = data.config
        self.currency = data.config.booking.currency

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(
        self,
        output_path: Path,
        start_day: Optional[date] = None,
        occupancy_report=None,
    ) -> None:
        """Erstellt die Excel-Datei mit allen Sheets.

        start_day: erster Tag der Wochenagenda (Standard: heute).
        occupancy_report: optionaler OccupancyReport – wenn angegeben,
        wird ein zusätzliches Auslastungsblatt eingefügt.
        """
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        start_day = start_day or date.today()
        days = [start_day + timedelta(days=i) for i in range(self.config.booking.agenda_days)]

        self._sheet_uebersicht(wb)
        self._sheet_layout(wb)
        self._sheet_reservierungen(wb)
        for court in sorted(self.data.courts, key=lambda c: c.label):
            self._sheet_agenda(wb, court, days)
        if occupancy_report is not None:
            self._sheet_auslastung(wb, occupancy_report)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], row: int = 1) -> None:
        """Schreibt eine farbige Kopfzeile."""
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    def _write_rows(self, ws, rows: list[list], start_row: int = 2) -> int:
        """Schreibt Datenzeilen mit Rahmen; gibt die letzte Zeile zurück."""
        from openpyxl.styles import Font
        border = self._thin_border()
        row = start_row
        for values in rows:
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                c.font = Font(size=9)
            row += 1
        return row - 1

    def _set_widths(self, ws, widths: list[int]) -> None:
        from openpyxl.utils import get_column_letter
        for i, w in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(i)].width = w

    # ─── Sheets ───────────────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet("Übersicht")
        ws["A1"] = self.config.facility_name
        ws["A1"].font = Font(bold=True, size=14)
        ws["A2"] = f"Stand: {today_str()}"

        total_deposit = sum((r.deposit for r in self.data.reservations), start=0)
        w, h = self.config.court_size_px
        facts = [
            ("Plätze", len(self.data.courts)),
            ("Zonen", len(self.data.zones)),
            ("Reservierungen", len(self.data.reservations)),
            ("Anzahlungen", f"{self.currency}{total_deposit}"),
            ("Maßstab", f"{self.config.canvas.pixels_per_meter:g} px/m"),
            ("Platzgröße", f"{w:g} × {h:g} px"),
        ]
        for i, (label, value) in enumerate(facts, start=4):
            ws.cell(row=i, column=1, value=label).font = Font(bold=True)
            ws.cell(row=i, column=2, value=value)
        self._set_widths(ws, [self.COL_TEXT_W, self.COL_TEXT_W])

    def _sheet_layout(self, wb) -> None:
        ws = wb.create_sheet("Layout")
        headers = ["ID", "Art", "Name", "X", "Y", "Breite", "Höhe", "Drehung", "Größe", "Details"]
        self._write_header_row(ws, headers)
        rows = [
            [
                el.id, element_kind_label(el), el.display_name,
                round(el.x, 1), round(el.y, 1), el.width, el.height, el.rotation,
                element_size_m(el, self.config), element_details(el, self.config),
            ]
            for el in self.data.elements
        ]
        self._write_rows(ws, rows)

        # Plätze in ihrer Belagsfarbe markieren
        for i, el in enumerate(self.data.elements, start=2):
            fill = self._fill(
                excel_color(el.color) if isinstance(el, Court) else COLORS["zone"]
            )
            ws.cell(row=i, column=1).fill = fill
        self._set_widths(ws, [self.COL_ID_W, 8, 14, 8, 8, 8, 8, 8, 12, self.COL_TEXT_W])
        ws.freeze_panes = "A2"

    def _sheet_reservierungen(self, wb) -> None:
        ws = wb.create_sheet("Reservierungen")
        headers = ["ID", "Platz", "Datum", "Beginn", "Ende", "Dauer (min)", "Kunde", "Anzahlung"]
        self._write_header_row(ws, headers)

        labels = {c.id: c.display_name for c in self.data.courts}
        ordered = sorted(self.data.reservations, key=lambda r: (r.start, r.resource_id))
        rows = [
            [
                r.id,
                labels.get(r.resource_id, f"{r.resource_id} (fehlt)"),
                r.start.strftime("%d.%m.%Y"),
                r.start.strftime("%H:%M"),
                r.end.strftime("%H:%M"),
                r.duration_minutes,
                r.client_name,
                float(r.deposit),
            ]
            for r in ordered
        ]
        last = self._write_rows(ws, rows)
        for row in range(2, last + 1):
            ws.cell(row=row, column=8).number_format = "#,##0.00"
        self._set_widths(ws, [self.COL_ID_W, 10, 12, 8, 8, 12, self.COL_TEXT_W, 12])
        ws.freeze_panes = "A2"

    def _sheet_agenda(self, wb, court: Court, days: list[date]) -> None:
        """Wochenagenda eines Platzes: eine Spalte pro Tag, Buchungen untereinander."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(f"Agenda {court.display_name}"[:31])
        self._write_header_row(ws, [format_day(d) for d in days])

        by_day: dict[date, list[Reservation]] = defaultdict(list)
        for r in self.data.reservations:
            if r.resource_id == court.id:
                by_day[r.start.date()].append(r)

        border = self._thin_border()
        max_rows = max((len(v) for v in by_day.values()), default=0)
        for col, d in enumerate(days, 1):
            items = sorted(by_day.get(d, []), key=lambda r: r.start)
            for i in range(max(max_rows, 1)):
                row = i + 2
                if i < len(items):
                    r = items[i]
                    text = f"{format_time_range(r)}\n{r.client_name}"
                    if r.deposit > 0:
                        text += f"\nAnzahlung {self.currency}{r.deposit}"
                    color = COLORS["occupied"]
                elif i == 0:
                    text, color = "Keine Reservierungen", COLORS["empty"]
                else:
                    text, color = "", COLORS["empty"]
                c = ws.cell(row=row, column=col, value=text)
                c.fill = self._fill(color)
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=9)
                ws.row_dimensions[row].height = self.ROW_AGENDA_H
        self._set_widths(ws, [self.COL_DAY_W] * len(days))

    def _sheet_auslastung(self, wb, report) -> None:
        ws = wb.create_sheet("Auslastung")
        headers = ["Platz", "Belag", "Buchungen", "Stunden", "Auslastung", "Anzahlungen"]
        self._write_header_row(ws, headers)
        rows = [
            [
                m.label, m.surface, m.reservations,
                round(m.booked_minutes / 60, 2), m.utilisation, float(m.deposits),
            ]
            for m in report.courts
        ]
        last = self._write_rows(ws, rows)
        for row in range(2, last + 1):
            ws.cell(row=row, column=5).number_format = "0.0%"
        self._set_widths(ws, [8, 12, 12, 10, 12, 14])
