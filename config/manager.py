"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import (
    BookingConfig,
    CanvasConfig,
    EditorConfig,
    PlannerConfig,
    ZoneConfig,
)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Padel-Anlagenplaner — Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "canvas": (
        "Zeichenfläche",
        "Szene-Einheiten sind Pixel bei Zoom 1. Maßstab in px/m.",
    ),
    "courts": (
        "Plätze",
        "Feste Größe in Metern; Palette: Farbwert → Belagsbezeichnung.",
    ),
    "zones": (
        "Zonen",
        "min_size: kleinste Kantenlänge beim Skalieren (px).",
    ),
    "editor": (
        "Editor",
        None,
    ),
    "booking": (
        "Buchungen",
        "Spieldauern in Minuten. Buchungsintervalle sind halboffen [Beginn, Ende).",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "planner_config.yaml"
    SCENARIOS_DIR = Path("scenarios")

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um die Anlage einzurichten."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return PlannerConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self) -> PlannerConfig:
        """Lädt die aktive Config; ohne Datei gelten die Standardwerte."""
        from config.defaults import default_planner_config
        if self.first_run_check():
            return default_planner_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "zones" in cm:
            zone_map = CommentedMap(cm["zones"])
            zone_map.yaml_add_eol_comment("Pixel, nicht Meter", "min_size")
            cm["zones"] = zone_map

        return cm

    # ─── Szenarios ───

    def save_scenario(self, config: PlannerConfig, name: str,
                      description: str = "") -> None:
        """Speichert eine Config als benanntes Szenario."""
        self.SCENARIOS_DIR.mkdir(parents=True, exist_ok=True)
        path = self.SCENARIOS_DIR / f"{name}.yaml"
        if path.exists():
            if not Confirm.ask(
                f"Szenario '{name}' existiert bereits. Überschreiben?", default=False
            ):
                console.print("[yellow]Abgebrochen.[/yellow]")
                return
        self.save(config, path)
        if description:
            meta_path = self.SCENARIOS_DIR / f"{name}.meta.yaml"
            with open(meta_path, "w", encoding="utf-8") as f:
                yaml.dump({"name": name, "description": description,
                           "created": date.today().isoformat()}, f)
        console.print(f"[green]✓[/green] Szenario '{name}' gespeichert.")

    def list_scenarios(self) -> list[dict]:
        """Listet alle gespeicherten Szenarien auf."""
        if not self.SCENARIOS_DIR.exists():
            return []
        scenarios = []
        for p in sorted(self.SCENARIOS_DIR.glob("*.yaml")):
            if p.stem.endswith(".meta"):
                continue
            meta_path = self.SCENARIOS_DIR / f"{p.stem}.meta.yaml"
            description = ""
            created = ""
            if meta_path.exists():
                with open(meta_path, "r", encoding="utf-8") as f:
                    meta = yaml.load(f)
                    description = meta.get("description", "")
                    created = meta.get("created", "")
            scenarios.append({
                "name": p.stem,
                "path": str(p),
                "description": description,
                "created": created,
            })
        return scenarios

    def load_scenario(self, name: str) -> PlannerConfig:
        """Lädt ein gespeichertes Szenario."""
        path = self.SCENARIOS_DIR / f"{name}.yaml"
        if not path.exists():
            raise FileNotFoundError(
                f"Szenario '{name}' nicht gefunden. "
                f"Verfügbar: {[s['name'] for s in self.list_scenarios()]}"
            )
        return self.load(path)

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: PlannerConfig) -> PlannerConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] Zeichenfläche (Maßstab, Größe)")
            console.print("  [bold]2.[/bold] Zonen (Standardgröße, Mindestgröße)")
            console.print("  [bold]3.[/bold] Editor (Zoom)")
            console.print("  [bold]4.[/bold] Buchungen (Spieldauern)")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            if choice == "1":
                config = config.model_copy(
                    update={"canvas": self._edit_canvas(config.canvas)}
                )
            elif choice == "2":
                config = config.model_copy(
                    update={"zones": self._edit_zones(config.zones)}
                )
            elif choice == "3":
                config = config.model_copy(
                    update={"editor": self._edit_editor(config.editor)}
                )
            elif choice == "4":
                config = config.model_copy(
                    update={"booking": self._edit_booking(config.booking)}
                )
            elif choice == "0":
                # model_copy validiert nicht; Querprüfungen hier nachholen
                try:
                    config = PlannerConfig.model_validate(config.model_dump())
                except ValidationError as e:
                    console.print(f"[red]Konfiguration ungültig:[/red] {e}")
                    continue
                self.save(config)
                break
            else:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")

        return config

    def _show_section(self, model) -> None:
        table = Table(box=box.SIMPLE)
        table.add_column("Parameter", style="bold")
        table.add_column("Aktuell")
        for k, v in model.model_dump().items():
            table.add_row(k, str(v))
        console.print(table)

    def _edit_canvas(self, cc: CanvasConfig) -> CanvasConfig:
        """Zeichenfläche interaktiv anpassen."""
        self._show_section(cc)
        return CanvasConfig(
            pixels_per_meter=FloatPrompt.ask("Pixel pro Meter", default=cc.pixels_per_meter),
            width=FloatPrompt.ask("Breite (px)", default=cc.width),
            height=FloatPrompt.ask("Höhe (px)", default=cc.height),
        )

    def _edit_zones(self, zc: ZoneConfig) -> ZoneConfig:
        """Zonen-Größen interaktiv anpassen."""
        self._show_section(zc)
        return ZoneConfig(
            default_width_m=FloatPrompt.ask("Standardbreite (m)", default=zc.default_width_m),
            default_height_m=FloatPrompt.ask("Standardhöhe (m)", default=zc.default_height_m),
            min_size=FloatPrompt.ask("Minimale Kantenlänge (px)", default=zc.min_size),
        )

    def _edit_editor(self, ec: EditorConfig) -> EditorConfig:
        """Zoom-Grenzen interaktiv anpassen."""
        self._show_section(ec)
        if not Confirm.ask("Änderungen vornehmen?", default=False):
            return ec
        from config.wizard import _wizard_editor
        return _wizard_editor()

    def _edit_booking(self, bc: BookingConfig) -> BookingConfig:
        """Buchungsoptionen interaktiv anpassen."""
        self._show_section(bc)
        days = IntPrompt.ask("Tage in der Agenda", default=bc.agenda_days)
        if Confirm.ask("Spieldauern ändern?", default=False):
            from config.wizard import _wizard_booking
            bc = _wizard_booking()
        return bc.model_copy(update={"agenda_days": days})
