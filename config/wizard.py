"""Interaktiver Setup-Wizard für die Ersteinrichtung des Anlagen-Planers.

Führt den Nutzer Schritt für Schritt durch Maßstab, Platzgröße, Zonen,
Editor und Buchungsoptionen. Nutzt rich für die Konsolenausgabe.
"""

from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    BookingConfig,
    CanvasConfig,
    CourtConfig,
    EditorConfig,
    PlannerConfig,
    ZoneConfig,
)
from config.defaults import (
    default_booking,
    default_canvas,
    default_courts,
    default_editor,
    default_zones,
)

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def _show_canvas_table(cc: CanvasConfig) -> None:
    """Zeigt Maßstab und Zeichenfläche als rich-Tabelle an."""
    table = Table(title="Zeichenfläche", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Maßstab", f"{cc.pixels_per_meter:g} px/m")
    table.add_row("Breite", f"{cc.width:g} px ({cc.width / cc.pixels_per_meter:.0f} m)")
    table.add_row("Höhe", f"{cc.height:g} px ({cc.height / cc.pixels_per_meter:.0f} m)")
    console.print(table)


def _show_courts_table(cc: CourtConfig) -> None:
    """Zeigt Platzgröße und Belagsfarben an."""
    table = Table(title=f"Plätze ({cc.width_m:g} m × {cc.height_m:g} m)", box=box.ROUNDED)
    table.add_column("Farbe", style="bold")
    table.add_column("Belag")
    for color, name in cc.palette.items():
        marker = " [dim](Standard)[/dim]" if color == cc.default_color else ""
        table.add_row(f"[{color}]■[/{color}] {color}", name + marker)
    console.print(table)


def _show_booking_table(bc: BookingConfig) -> None:
    """Zeigt die Buchungsoptionen an."""
    table = Table(title="Buchungen", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Spieldauern", ", ".join(f"{d} min" for d in bc.durations))
    table.add_row("Vorauswahl", f"{bc.default_duration} min")
    table.add_row("Agenda", f"{bc.agenda_days} Tage")
    table.add_row("Währung", bc.currency)
    console.print(table)


# ─── SCHRITT 1: Anlage ───

def _wizard_facility() -> str:
    _header("Schritt 1 — Anlage")
    return Prompt.ask("Name der Anlage", default="Padel-Club")


# ─── SCHRITT 2: Zeichenfläche ───

def _wizard_canvas() -> CanvasConfig:
    _header("Schritt 2 — Zeichenfläche")
    default_cc = default_canvas()
    _show_canvas_table(default_cc)

    if Confirm.ask("Standard-Zeichenfläche übernehmen?", default=True):
        _success("Standard-Zeichenfläche übernommen.")
        return default_cc

    ppm = FloatPrompt.ask("Pixel pro Meter", default=15.0)
    width = FloatPrompt.ask("Breite (px)", default=1200.0)
    height = FloatPrompt.ask("Höhe (px)", default=800.0)
    return CanvasConfig(pixels_per_meter=ppm, width=width, height=height)


# ─── SCHRITT 3: Plätze ───

def _wizard_courts() -> CourtConfig:
    _header("Schritt 3 — Plätze")
    default_cc = default_courts()
    _show_courts_table(default_cc)

    if Confirm.ask("Standard-Plätze übernehmen?", default=True):
        _success("Standard-Plätze übernommen.")
        return default_cc

    width_m = FloatPrompt.ask("Platzbreite (m)", default=10.0)
    height_m = FloatPrompt.ask("Platzlänge (m)", default=20.0)
    _success("Platzgröße konfiguriert.")
    return default_cc.model_copy(update={"width_m": width_m, "height_m": height_m})


# ─── SCHRITT 4: Zonen ───

def _wizard_zones() -> ZoneConfig:
    _header("Schritt 4 — Zonen")
    _info("Zonen sind frei skalierbare Flächen (Empfang, Bänke, Lager, …).")
    default_zc = default_zones()

    if Confirm.ask(
        f"Standard übernehmen ({default_zc.default_width_m:g} m × "
        f"{default_zc.default_height_m:g} m, min. {default_zc.min_size:g} px)?",
        default=True,
    ):
        return default_zc

    w = FloatPrompt.ask("Standardbreite (m)", default=10.0)
    h = FloatPrompt.ask("Standardhöhe (m)", default=5.0)
    min_size = FloatPrompt.ask("Minimale Kantenlänge (px)", default=30.0)
    return ZoneConfig(default_width_m=w, default_height_m=h, min_size=min_size)


# ─── SCHRITT 5: Editor ───

def _wizard_editor() -> EditorConfig:
    _header("Schritt 5 — Editor")
    default_ec = default_editor()
    if Confirm.ask(
        f"Zoom {default_ec.zoom_min:.0%}–{default_ec.zoom_max:.0%} übernehmen?",
        default=True,
    ):
        return default_ec

    zmin = FloatPrompt.ask("Kleinster Zoom", default=0.5)
    zmax = FloatPrompt.ask("Größter Zoom", default=3.0)
    step = FloatPrompt.ask("Zoom-Schrittweite", default=0.1)
    jitter = FloatPrompt.ask("Zufallsversatz neuer Plätze (px)", default=20.0)
    return EditorConfig(zoom_min=zmin, zoom_max=zmax, zoom_step=step, spawn_jitter=jitter)


# ─── SCHRITT 6: Buchungen ───

def _wizard_booking() -> BookingConfig:
    _header("Schritt 6 — Buchungen")
    default_bc = default_booking()
    _show_booking_table(default_bc)

    if Confirm.ask("Standard-Buchungsoptionen übernehmen?", default=True):
        return default_bc

    raw = Prompt.ask("Spieldauern (min, kommagetrennt)", default="60,90,120")
    durations = [int(p) for p in raw.replace(" ", "").split(",") if p]
    default_duration = IntPrompt.ask("Vorausgewählte Dauer", default=durations[0])
    if default_duration not in durations:
        _warn(f"{default_duration} min ist keine der Spieldauern, verwende {durations[0]} min.")
        default_duration = durations[0]
    days = IntPrompt.ask("Tage in der Agenda", default=7)
    currency = Prompt.ask("Währungssymbol", default="$")
    return BookingConfig(
        durations=durations,
        default_duration=default_duration,
        agenda_days=days,
        currency=currency,
    )


# ─── ZUSAMMENFASSUNG ───

def _show_summary(config: PlannerConfig) -> None:
    _header("Zusammenfassung")
    table = Table(box=box.ROUNDED, title="Konfigurationsübersicht")
    table.add_column("Bereich", style="bold cyan")
    table.add_column("Wert")

    cw, ch = config.court_size_px
    table.add_row("Anlage", config.facility_name)
    table.add_row("Maßstab", f"{config.canvas.pixels_per_meter:g} px/m")
    table.add_row("Platz", f"{cw:g} × {ch:g} px")
    table.add_row("Zonen (min.)", f"{config.zones.min_size:g} px")
    table.add_row("Zoom", f"{config.editor.zoom_min:.0%}–{config.editor.zoom_max:.0%}")
    table.add_row("Spieldauern", ", ".join(str(d) for d in config.booking.durations))
    console.print(table)


# ─── HAUPT-WIZARD ───

def run_wizard() -> Optional[PlannerConfig]:
    """Führt den vollständigen interaktiven Setup-Wizard aus.

    Returns:
        Fertige PlannerConfig oder None, wenn der Nutzer abbricht.
    """
    console.print()
    console.print(Panel(
        "[bold]Willkommen beim Padel-Anlagenplaner![/bold]\n\n"
        "Der Wizard legt Maßstab, Platzgröße und Buchungsoptionen fest.\n"
        "[dim]Standard-Werte können mit Enter übernommen werden.[/dim]",
        title="[bold cyan]Anlagenplaner[/bold cyan]",
        border_style="cyan",
    ))

    if not Confirm.ask("\nMöchten Sie jetzt die Anlage einrichten?", default=True):
        console.print("[yellow]Einrichtung abgebrochen.[/yellow]")
        return None

    try:
        config = PlannerConfig(
            facility_name=_wizard_facility(),
            canvas=_wizard_canvas(),
            courts=_wizard_courts(),
            zones=_wizard_zones(),
            editor=_wizard_editor(),
            booking=_wizard_booking(),
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard abgebrochen.[/yellow]")
        return None
    except (ValidationError, ValueError) as e:
        console.print(f"\n[red]Fehler während der Konfiguration: {e}[/red]")
        return None

    _show_summary(config)

    if not Confirm.ask("\nKonfiguration speichern?", default=True):
        console.print("[yellow]Konfiguration wird nicht gespeichert.[/yellow]")
        return None

    _success("Konfiguration wird gespeichert...")
    return config
