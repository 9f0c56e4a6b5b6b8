"""Padel-Anlagenplaner — Haupt-CLI.

Verwendung:
  python main.py setup                          Ersteinrichtung (Wizard)
  python main.py config edit                    Konfiguration bearbeiten
  python main.py config show                    Konfiguration anzeigen
  python main.py generate                       Demo-Anlage mit Buchungen erzeugen
  python main.py layout add-court --color wpt   Platz hinzufügen
  python main.py layout add-zone --name Empfang Zone hinzufügen
  python main.py layout move <id> <dx> <dy>     Element verschieben
  python main.py layout resize <id> <h> <dx> <dy>  Zone am Anfasser skalieren
  python main.py layout rotate <id>             Element um 90° drehen
  python main.py layout delete <id>             Element entfernen
  python main.py layout clear                   Layout leeren
  python main.py layout show | plan             Layout als Tabelle / Grundriss
  python main.py book <platz> ...               Platz reservieren
  python main.py cancel <res-id>                Reservierung stornieren
  python main.py reservations                   Reservierungen auflisten
  python main.py agenda <platz>                 Wochenagenda eines Platzes
  python main.py status --at "…"                Belegung zu einem Zeitpunkt
  python main.py search ...                     Freie Plätze suchen
  python main.py check                          Konsistenzprüfung
  python main.py report                         Auslastungsbericht
  python main.py export                         Excel-Export
  python main.py scenario save|load|list        Szenarien verwalten
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from models.errors import PlannerError

console = Console()

# Standard-Pfad für die Arbeitsdatei der Anlage
DEFAULT_DATA_JSON = Path("output/facility.json")


def _data_path(ctx: click.Context) -> Path:
    return Path(ctx.obj["data_path"])


def _load_planner(ctx: click.Context):
    """Lädt die Anlage aus der Arbeitsdatei; ohne Datei eine leere Anlage."""
    from config.manager import ConfigManager
    from models.facility import FacilityData
    from store.planner import FacilityPlanner

    path = _data_path(ctx)
    if path.exists():
        try:
            data = FacilityData.load_json(path)
            return FacilityPlanner.from_snapshot(data)
        except (ValueError, PlannerError) as e:
            console.print(f"[red bold]Arbeitsdatei unlesbar:[/red bold] {path}\n{e}")
            sys.exit(1)
    try:
        config = ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    return FacilityPlanner(config)


def _save_planner(ctx: click.Context, planner) -> None:
    planner.snapshot().save_json(_data_path(ctx))


def _load_data_or_abort(ctx: click.Context):
    """Lädt FacilityData oder bricht ab, wenn noch keine Arbeitsdatei existiert."""
    from models.facility import FacilityData

    path = _data_path(ctx)
    if not path.exists():
        console.print(
            f"[red]Keine Arbeitsdatei gefunden: {path}[/red]\n"
            "Verwenden Sie [bold]python main.py generate[/bold] "
            "oder legen Sie mit [bold]layout add-court[/bold] Plätze an."
        )
        sys.exit(1)
    return FacilityData.load_json(path)


def _fail(e: Exception) -> None:
    console.print(f"[red bold]Fehler:[/red bold] {e}")
    sys.exit(1)


def _resolve_court(planner, ref: str) -> str:
    """Platz über ID ('court-3') oder Platznummer ('2') finden."""
    if ref.isdigit():
        for c in planner.layout.courts():
            if c.label == int(ref):
                return c.id
    return ref


def _resolve_color(planner, value: Optional[str]) -> Optional[str]:
    """Farbname aus der Palette ('blau', 'wpt') oder direkter Hex-Wert."""
    from config.defaults import COURT_COLORS

    if value is None:
        return None
    if value.startswith("#"):
        return value
    key = value.lower().replace("ü", "ue")
    if key in COURT_COLORS:
        return COURT_COLORS[key]
    for hex_color, name in planner.config.courts.palette.items():
        if name.lower() == value.lower():
            return hex_color
    raise click.BadParameter(
        f"Unbekannte Farbe '{value}' (verfügbar: {', '.join(COURT_COLORS)})",
        param_hint="--color",
    )


def _parse_day(value: Optional[str]) -> date:
    from store.planner import parse_date
    return parse_date(value) if value else date.today()


def _print_element(el, verb: str) -> None:
    console.print(
        f"[green]✓[/green] {el.display_name} ({el.id}) {verb}: "
        f"Mitte ({el.x:.1f}, {el.y:.1f}), {el.width:g} × {el.height:g}, {el.rotation:g}°"
    )


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Ersteinrichtung: Anlagenkonfiguration mit dem Setup-Wizard anlegen."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]python main.py config edit[/bold] zum Bearbeiten."
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Führen Sie jetzt [bold]python main.py generate[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktive Konfiguration (oder die Standardwerte) an."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        _fail(e)

    source = "Standardwerte" if mgr.first_run_check() else str(mgr.DEFAULT_CONFIG)
    console.print(Panel(
        f"[bold]{config.facility_name}[/bold]  |  Quelle: {source}",
        title="Anlagenkonfiguration",
        border_style="cyan",
    ))

    cv = config.canvas
    w, h = config.court_size_px
    zw, zh = config.zone_size_px
    table = Table(title="Maße", box=box.ROUNDED)
    table.add_column("Eintrag")
    table.add_column("Wert", justify="right")
    table.add_row("Maßstab", f"{cv.pixels_per_meter:g} px/m")
    table.add_row("Zeichenfläche", f"{cv.width:g} × {cv.height:g} px")
    table.add_row("Platz", f"{config.courts.width_m:g} × {config.courts.height_m:g} m ({w:g} × {h:g} px)")
    table.add_row("Neue Zone", f"{config.zones.default_width_m:g} × {config.zones.default_height_m:g} m ({zw:g} × {zh:g} px)")
    table.add_row("Mindestgröße Zone", f"{config.zones.min_size:g} px")
    console.print(table)

    table2 = Table(title="Belagsfarben", box=box.ROUNDED)
    table2.add_column("Farbe")
    table2.add_column("Belag")
    for hex_color, name in config.courts.palette.items():
        marker = " (Standard)" if hex_color == config.courts.default_color else ""
        table2.add_row(f"[{hex_color}]■[/{hex_color}] {hex_color}", f"{name}{marker}")
    console.print(table2)

    ec, bc = config.editor, config.booking
    console.print(
        f"\n[bold]Editor:[/bold] Zoom {ec.zoom_min:.0%}–{ec.zoom_max:.0%} "
        f"in {ec.zoom_step:.0%}-Schritten | Versatz ±{ec.spawn_jitter:g} px"
    )
    console.print(
        f"[bold]Buchungen:[/bold] Dauern {', '.join(str(d) for d in bc.durations)} min "
        f"(Standard {bc.default_duration}) | Agenda {bc.agenda_days} Tage | "
        f"Währung {bc.currency}"
    )


@cmd_config.command("edit")
def config_edit():
    """Bearbeitet die Konfiguration interaktiv."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    mgr.edit_interactive(mgr.load())


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--courts", "n_courts", default=4, type=click.IntRange(1, 12),
              help="Anzahl Plätze.")
@click.option("--zones", "n_zones", default=2, type=click.IntRange(0, 8),
              help="Anzahl Zonen.")
@click.option("--start", default=None, help="Erster Buchungstag (JJJJ-MM-TT, Standard: heute).")
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Bestehende Arbeitsdatei ohne Rückfrage überschreiben.")
@click.pass_context
def cmd_generate(ctx, seed: int, n_courts: int, n_zones: int, start: Optional[str], yes: bool):
    """Erzeugt eine Demo-Anlage mit Plätzen, Zonen und einer Woche Buchungen."""
    from config.manager import ConfigManager
    from data.demo_data import DemoDataGenerator

    path = _data_path(ctx)
    if path.exists() and not yes:
        if not click.confirm(f"Arbeitsdatei {path} überschreiben?", default=False):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return

    try:
        config = ConfigManager().load_or_default()
        start_day = _parse_day(start)
        console.print("[bold]Demo-Anlage wird generiert...[/bold]")
        gen = DemoDataGenerator(config, seed=seed)
        data = gen.generate(n_courts=n_courts, n_zones=n_zones, start_day=start_day)
    except (PlannerError, ValueError) as e:
        _fail(e)

    gen.print_summary(data)
    console.print(f"\n[dim]{data.summary()}[/dim]")
    data.save_json(path)
    console.print(f"[green]✓[/green] Arbeitsdatei gespeichert: {path}")


# ─── LAYOUT ───────────────────────────────────────────────────────────────────

@click.group("layout")
def cmd_layout():
    """Plätze und Zonen anlegen, verschieben, skalieren, drehen und löschen."""


@cmd_layout.command("add-court")
@click.option("--color", "-c", default=None,
              help="Belagsfarbe: blau, gruen, wpt, terrakotta oder #RRGGBB.")
@click.pass_context
def layout_add_court(ctx, color: Optional[str]):
    """Fügt einen Platz nahe der Bildmitte hinzu."""
    planner = _load_planner(ctx)
    try:
        court = planner.add_court(_resolve_color(planner, color))
    except PlannerError as e:
        _fail(e)
    _save_planner(ctx, planner)
    _print_element(court, "angelegt")
    console.print(f"  Belag: {planner.config.surface_name(court.color)}")


@cmd_layout.command("add-zone")
@click.option("--name", "-n", default="Zone", help="Bezeichnung der Zone.")
@click.pass_context
def layout_add_zone(ctx, name: str):
    """Fügt eine skalierbare Zone in der Bildmitte hinzu."""
    planner = _load_planner(ctx)
    zone = planner.add_zone(name)
    _save_planner(ctx, planner)
    _print_element(zone, "angelegt")


@cmd_layout.command("move")
@click.argument("element_id")
@click.argument("dx", type=float)
@click.argument("dy", type=float)
@click.option("--zoom", "-z", default=None, type=float,
              help="Zoomfaktor, unter dem gezogen wurde (Standard: 1.0).")
@click.pass_context
def layout_move(ctx, element_id: str, dx: float, dy: float, zoom: Optional[float]):
    """Verschiebt ein Element um (DX, DY) Bildschirm-Pixel."""
    planner = _load_planner(ctx)
    try:
        session = planner.begin_move(_resolve_court(planner, element_id), zoom)
        el = planner.drag(session, dx, dy)
    except PlannerError as e:
        _fail(e)
    _save_planner(ctx, planner)
    _print_element(el, "verschoben")


@cmd_layout.command("resize")
@click.argument("element_id")
@click.argument("handle", type=click.Choice(["n", "s", "e", "w", "ne", "nw", "se", "sw"]))
@click.argument("dx", type=float)
@click.argument("dy", type=float)
@click.option("--zoom", "-z", default=None, type=float,
              help="Zoomfaktor, unter dem gezogen wurde (Standard: 1.0).")
@click.pass_context
def layout_resize(ctx, element_id: str, handle: str, dx: float, dy: float, zoom: Optional[float]):
    """Skaliert eine Zone am Anfasser HANDLE um (DX, DY) Bildschirm-Pixel."""
    planner = _load_planner(ctx)
    try:
        session = planner.begin_resize(element_id, handle, zoom)
        el = planner.drag(session, dx, dy)
    except PlannerError as e:
        _fail(e)
    _save_planner(ctx, planner)
    _print_element(el, "skaliert")


@cmd_layout.command("rotate")
@click.argument("element_id")
@click.pass_context
def layout_rotate(ctx, element_id: str):
    """Dreht ein Element zwischen 0° und 90°."""
    planner = _load_planner(ctx)
    try:
        el = planner.rotate(_resolve_court(planner, element_id))
    except PlannerError as e:
        _fail(e)
    _save_planner(ctx, planner)
    _print_element(el, "gedreht")


@cmd_layout.command("delete")
@click.argument("element_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage löschen.")
@click.pass_context
def layout_delete(ctx, element_id: str, yes: bool):
    """Entfernt ein Element; bei Plätzen auch deren Reservierungen."""
    planner = _load_planner(ctx)
    element_id = _resolve_court(planner, element_id)
    try:
        el = planner.layout.get(element_id)
    except PlannerError as e:
        _fail(e)

    n_res = len(planner.reservations.for_resource(element_id))
    if n_res and not yes:
        if not click.confirm(
            f"{el.display_name} hat {n_res} Reservierungen. Trotzdem löschen?", default=False
        ):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return

    el, removed = planner.delete_element(element_id)
    _save_planner(ctx, planner)
    console.print(f"[green]✓[/green] {el.display_name} ({el.id}) entfernt.")
    if removed:
        console.print(f"  {len(removed)} Reservierungen storniert.")


@cmd_layout.command("clear")
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage leeren.")
@click.pass_context
def layout_clear(ctx, yes: bool):
    """Entfernt alle Elemente und alle Reservierungen."""
    planner = _load_planner(ctx)
    if not yes and not click.confirm("Gesamtes Layout und alle Reservierungen löschen?",
                                     default=False):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return
    n_el, n_res = planner.clear_layout()
    _save_planner(ctx, planner)
    console.print(f"[green]✓[/green] {n_el} Elemente und {n_res} Reservierungen entfernt.")


@cmd_layout.command("show")
@click.pass_context
def layout_show(ctx):
    """Zeigt alle Elemente als Tabelle."""
    from export.tui_renderer import render_layout_rows

    planner = _load_planner(ctx)
    elements = planner.layout.list()
    if not elements:
        console.print("[dim]Das Layout ist leer.[/dim]")
        return

    table = Table(title=f"Layout – {planner.config.facility_name}", box=box.ROUNDED)
    for col in ("ID", "Art", "Name", "Mitte", "Größe (px)", "Größe (m)", "Drehung", "Details"):
        table.add_column(col)
    for row in render_layout_rows(elements, planner.config):
        table.add_row(*row)
    console.print(table)


@cmd_layout.command("plan")
@click.option("--columns", default=72, type=click.IntRange(20, 240),
              help="Breite des Grundrisses in Zeichen.")
@click.pass_context
def layout_plan(ctx, columns: int):
    """Zeichnet einen ASCII-Grundriss der Anlage."""
    from export.tui_renderer import render_floor_plan

    planner = _load_planner(ctx)
    lines = render_floor_plan(planner.layout.list(), planner.config, columns=columns)
    console.print(f"[bold cyan]{planner.config.facility_name}[/bold cyan]")
    for line in lines:
        console.print(line, markup=False, highlight=False)
    console.print("[dim]Ziffern = Plätze, ░ = Zonen[/dim]")


# ─── BUCHUNGEN ────────────────────────────────────────────────────────────────

@click.command("book")
@click.argument("court")
@click.option("--date", "date_str", required=True, help="Datum (JJJJ-MM-TT oder TT.MM.JJJJ).")
@click.option("--time", "time_str", required=True, help="Beginn (HH:MM).")
@click.option("--duration", "-d", default=None, type=int,
              help="Dauer in Minuten (Standard aus der Konfiguration).")
@click.option("--client", required=True, help="Name des Kunden.")
@click.option("--deposit", default="", help="Anzahlung (leer = 0).")
@click.pass_context
def cmd_book(ctx, court: str, date_str: str, time_str: str, duration: Optional[int],
             client: str, deposit: str):
    """Reserviert einen Platz (ID oder Platznummer)."""
    planner = _load_planner(ctx)
    if duration is None:
        duration = planner.config.booking.default_duration
    try:
        res = planner.book(
            _resolve_court(planner, court), date_str, time_str, duration, client, deposit
        )
    except PlannerError as e:
        _fail(e)
    _save_planner(ctx, planner)

    if duration not in planner.config.booking.durations:
        console.print(f"[yellow]Hinweis:[/yellow] {duration} min ist keine Standarddauer.")
    console.print(
        f"[green]✓[/green] Reservierung {res.id} angelegt: "
        f"{planner.court(res.resource_id).display_name}, {res.interval}, {res.client_name}"
    )


@click.command("cancel")
@click.argument("reservation_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage stornieren.")
@click.pass_context
def cmd_cancel(ctx, reservation_id: str, yes: bool):
    """Storniert eine Reservierung."""
    planner = _load_planner(ctx)
    try:
        res = planner.reservations.get(reservation_id)
    except PlannerError as e:
        _fail(e)

    if not yes and not click.confirm(
        f"Reservierung {res.id} ({res.client_name}, {res.interval}) stornieren?",
        default=False,
    ):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return

    planner.cancel(reservation_id)
    _save_planner(ctx, planner)
    console.print(f"[green]✓[/green] Reservierung {reservation_id} storniert.")


@click.command("reservations")
@click.option("--court", default=None, help="Nur dieser Platz (ID oder Nummer).")
@click.option("--date", "date_str", default=None, help="Nur dieser Tag.")
@click.pass_context
def cmd_reservations(ctx, court: Optional[str], date_str: Optional[str]):
    """Listet Reservierungen auf, nach Beginn sortiert."""
    from export.tui_renderer import render_reservation_rows

    planner = _load_planner(ctx)
    try:
        items = planner.reservations.list()
        if court:
            court_id = planner.court(_resolve_court(planner, court)).id
            items = [r for r in items if r.resource_id == court_id]
        if date_str:
            day = _parse_day(date_str)
            items = [r for r in items if r.start.date() == day]
    except PlannerError as e:
        _fail(e)

    if not items:
        console.print("[dim]Keine Reservierungen.[/dim]")
        return

    table = Table(title="Reservierungen", box=box.ROUNDED)
    for col in ("ID", "Platz", "Datum", "Zeit", "Dauer", "Kunde", "Anzahlung"):
        table.add_column(col)
    items.sort(key=lambda r: (r.start, r.resource_id))
    for row in render_reservation_rows(items, planner.config.booking.currency):
        table.add_row(*row)
    console.print(table)


@click.command("agenda")
@click.argument("court")
@click.option("--start", default=None, help="Erster Tag (Standard: heute).")
@click.option("--days", default=None, type=click.IntRange(1, 31), help="Anzahl Tage.")
@click.pass_context
def cmd_agenda(ctx, court: str, start: Optional[str], days: Optional[int]):
    """Zeigt die Wochenagenda eines Platzes."""
    from export.tui_renderer import render_agenda_rows

    planner = _load_planner(ctx)
    try:
        c = planner.court(_resolve_court(planner, court))
        agenda = planner.week_agenda(c.id, _parse_day(start), days)
    except PlannerError as e:
        _fail(e)

    table = Table(
        title=f"{c.display_name} – Belag {planner.config.surface_name(c.color)}",
        box=box.ROUNDED,
    )
    for col in ("Tag", "Zeit", "Dauer", "Kunde", "Anzahlung", "ID"):
        table.add_column(col)
    rows = render_agenda_rows(agenda, planner.config.booking.currency, today=date.today())
    for row in rows:
        table.add_row(*row)
    console.print(table)


@click.command("status")
@click.option("--at", "at_str", default=None,
              help="Ansichtszeitpunkt 'JJJJ-MM-TT HH:MM' (Standard: jetzt).")
@click.pass_context
def cmd_status(ctx, at_str: Optional[str]):
    """Zeigt, welche Plätze zu einem Zeitpunkt belegt sind."""
    from export.tui_renderer import render_status_rows
    from store.planner import parse_start

    planner = _load_planner(ctx)
    try:
        if at_str:
            day_part, _, time_part = at_str.strip().partition(" ")
            at = parse_start(day_part, time_part)
        else:
            at = datetime.now().replace(second=0, microsecond=0)
    except PlannerError as e:
        _fail(e)

    status = planner.court_status(at)
    busy = sum(1 for v in status.values() if v is not None)
    table = Table(
        title=f"Belegung {at:%d.%m.%Y %H:%M} – {busy}/{len(status)} belegt",
        box=box.ROUNDED,
    )
    for col in ("Platz", "Belag", "Status", "Zeit", "Kunde"):
        table.add_column(col)
    for row in render_status_rows(planner.layout.courts(), status, planner.config):
        color = "red" if row[2] == "Belegt" else "green"
        row[2] = f"[{color}]{row[2]}[/{color}]"
        table.add_row(*row)
    console.print(table)


@click.command("search")
@click.option("--date", "date_str", required=True, help="Datum (JJJJ-MM-TT oder TT.MM.JJJJ).")
@click.option("--time", "time_str", required=True, help="Beginn (HH:MM).")
@click.option("--duration", "-d", default=None, type=int, help="Dauer in Minuten.")
@click.pass_context
def cmd_search(ctx, date_str: str, time_str: str, duration: Optional[int]):
    """Sucht freie Plätze für Datum, Uhrzeit und Dauer."""
    planner = _load_planner(ctx)
    if duration is None:
        duration = planner.config.booking.default_duration
    try:
        free = planner.search(date_str, time_str, duration)
    except PlannerError as e:
        _fail(e)

    if not free:
        console.print("[yellow]Keine freien Plätze in diesem Zeitraum.[/yellow]")
        return

    table = Table(title=f"Freie Plätze ({duration} min)", box=box.ROUNDED)
    table.add_column("Platz")
    table.add_column("ID")
    table.add_column("Belag")
    for c in free:
        table.add_row(c.display_name, c.id, planner.config.surface_name(c.color))
    console.print(table)


# ─── ANALYSE ──────────────────────────────────────────────────────────────────

@click.command("check")
@click.pass_context
def cmd_check(ctx):
    """Prüft die Arbeitsdatei auf verletzte Layout- und Buchungsregeln."""
    from analysis.consistency import ConsistencyValidator

    data = _load_data_or_abort(ctx)
    console.print(f"\n{data.summary()}\n")
    report = ConsistencyValidator().validate(data)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


@click.command("report")
@click.option("--start", default=None, help="Erster Tag (Standard: heute).")
@click.option("--days", default=None, type=click.IntRange(1, 31), help="Anzahl Tage.")
@click.pass_context
def cmd_report(ctx, start: Optional[str], days: Optional[int]):
    """Auslastungsbericht pro Platz."""
    from analysis.occupancy import OccupancyAnalyzer

    data = _load_data_or_abort(ctx)
    try:
        start_day = _parse_day(start)
    except PlannerError as e:
        _fail(e)
    analyzer = OccupancyAnalyzer()
    report = analyzer.analyze(data, start_day, days or data.config.booking.agenda_days)
    analyzer.print_rich(report, data.config.booking.currency)


@click.command("export")
@click.option("--output", "-o", default="output/anlage.xlsx", help="Ausgabepfad.")
@click.option("--start", default=None, help="Erster Agenda-Tag (Standard: heute).")
@click.option("--with-report", is_flag=True, default=False,
              help="Auslastungsblatt hinzufügen.")
@click.pass_context
def cmd_export(ctx, output: str, start: Optional[str], with_report: bool):
    """Exportiert Layout, Reservierungen und Agenden als Excel-Datei."""
    from analysis.occupancy import OccupancyAnalyzer
    from export.excel_export import ExcelExporter

    data = _load_data_or_abort(ctx)
    try:
        start_day = _parse_day(start)
    except PlannerError as e:
        _fail(e)

    report = None
    if with_report:
        report = OccupancyAnalyzer().analyze(data, start_day, data.config.booking.agenda_days)

    out_path = Path(output)
    console.print("[bold]Excel-Export wird erzeugt...[/bold]")
    ExcelExporter(data).export(out_path, start_day=start_day, occupancy_report=report)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── SCENARIO ─────────────────────────────────────────────────────────────────

@click.group("scenario")
def cmd_scenario():
    """Szenarien verwalten (speichern, laden, auflisten)."""


@cmd_scenario.command("save")
@click.argument("name")
@click.option("--description", "-d", default="", help="Beschreibung des Szenarios.")
def scenario_save(name: str, description: str):
    """Speichert die aktuelle Konfiguration als Szenario."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        _fail(e)
    mgr.save_scenario(config, name, description)


@cmd_scenario.command("load")
@click.argument("name")
def scenario_load(name: str):
    """Lädt ein gespeichertes Szenario als aktive Konfiguration."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_scenario(name)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)
    mgr.save(config)
    console.print(f"[green]✓[/green] Szenario '{name}' als aktive Config gesetzt.")


@cmd_scenario.command("list")
def scenario_list():
    """Listet alle gespeicherten Szenarien auf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    scenarios = mgr.list_scenarios()

    if not scenarios:
        console.print("[dim]Keine Szenarien vorhanden.[/dim]")
        return

    table = Table(title="Gespeicherte Szenarien", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Erstellt")
    table.add_column("Beschreibung")
    for s in scenarios:
        table.add_row(s["name"], s.get("created", ""), s.get("description", ""))
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--data", "data_path", default=str(DEFAULT_DATA_JSON),
              help="Arbeitsdatei der Anlage (JSON).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Log-Ausgabe.")
@click.pass_context
def cli(ctx, data_path: str, verbose: bool):
    """Padel-Anlagenplaner: Layout-Editor und Platzreservierungen.

    Starten Sie mit: python main.py setup
    """
    ctx.ensure_object(dict)
    ctx.obj["data_path"] = data_path
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        )


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Padel-Anlagenplaner![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_layout)
cli.add_command(cmd_book)
cli.add_command(cmd_cancel)
cli.add_command(cmd_reservations)
cli.add_command(cmd_agenda)
cli.add_command(cmd_status)
cli.add_command(cmd_search)
cli.add_command(cmd_check)
cli.add_command(cmd_report)
cli.add_command(cmd_export)
cli.add_command(cmd_scenario)


if __name__ == "__main__":
    main()
