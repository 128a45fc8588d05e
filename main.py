"""Kursplaner — Haupt-CLI.

Verwendung:
  python main.py solve <datensatz.yaml>       Stundenplan berechnen
  python main.py solve <datensatz.yaml> --all Alle Kandidaten anzeigen
  python main.py tree <datensatz.yaml>        PQ-Baum und Anordnungen anzeigen
  python main.py tree <datensatz.yaml> --kurse Nach Kursen gruppierter PQ-Baum
  python main.py config show                  Konfiguration anzeigen
  python main.py config init                  Default-Konfiguration anlegen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(config_path: Optional[str]):
    """Lädt die Konfiguration (Default-Werte wenn keine Datei existiert)."""
    from config.manager import ConfigManager
    mgr = ConfigManager(Path(config_path) if config_path else None)
    try:
        return mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration ungültig:[/red bold]\n{e}")
        sys.exit(1)


def _load_dataset_or_abort(datei: Path):
    """Importiert den Datensatz oder bricht mit Fehlermeldung ab."""
    from data.yaml_import import import_dataset, DatasetImportError
    try:
        return import_dataset(datei)
    except DatasetImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)


def _print_schedule(title: str, schedule, catalog, day_names) -> None:
    from export.tui_renderer import render_week_rows

    table = Table(title=title, box=box.ROUNDED)
    for col in ("Tag", "Zeit", "Kurs", "Lehrkraft", "Section"):
        table.add_column(col)
    for row in render_week_rows(schedule, catalog, day_names):
        table.add_row(*row)
    console.print(table)


# ─── SOLVE ────────────────────────────────────────────────────────────────────

@click.command("solve")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--config", "config_path", default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--all", "show_all", is_flag=True, default=False,
              help="Alle Kandidaten-Pläne anzeigen.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliches Logging.")
def cmd_solve(datei: Path, config_path: Optional[str], show_all: bool, verbose: bool):
    """Berechnet einen Stundenplan für den Datensatz."""
    _setup_logging(verbose)
    config = _load_config(config_path)
    catalog, report = _load_dataset_or_abort(datei)
    report.print_rich()

    from solver.scheduler import SchedulingEngine
    from analysis.quality_report import QualityAnalyzer
    from analysis.schedule_validator import ScheduleValidator

    engine = SchedulingEngine(config=config, catalog=catalog)
    found = engine.generate_schedule()

    stats = engine.last_run
    if stats.over_limit:
        console.print(
            f"[red bold]Abbruch:[/red bold] {stats.num_sections} Sections überschreiten "
            f"max_sections={config.search.max_sections}."
        )
        sys.exit(1)
    console.print(Panel(
        f"Anordnungen: {stats.frontiers} (verworfen: {stats.dropped_frontiers})\n"
        f"Kandidaten: {stats.total_candidates} "
        f"({stats.base_candidates} Basis, {stats.variant_candidates} Varianten, "
        f"{stats.discarded_candidates} mit Konflikt, {stats.duplicate_candidates} doppelt)\n"
        f"Zeit: {stats.solve_time_seconds:.3f}s",
        title="Scheduler-Lauf",
        border_style="cyan",
    ))

    schedule = engine.get_current_schedule()
    if schedule is None:
        console.print("[red]Kein gültiger Stundenplan gefunden.[/red]")
        sys.exit(1)

    day_names = config.time_grid.day_names
    status = "[green]alle Anforderungen erfüllt[/green]" if found else "[yellow]Fallback[/yellow]"
    _print_schedule(f"Gewählter Plan ({status})", schedule, catalog, day_names)

    analyzer = QualityAnalyzer()
    analyzer.print_rich(analyzer.analyze(schedule, catalog.requirements))
    ScheduleValidator().validate(schedule, catalog).print_rich()

    if show_all:
        for i, candidate in enumerate(engine.get_all_possible_schedules(), start=1):
            _print_schedule(f"Kandidat {i}", candidate, catalog, day_names)

    sys.exit(0 if found else 1)


# ─── TREE ─────────────────────────────────────────────────────────────────────

@click.command("tree")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--limit", default=20, show_default=True,
              help="Maximal angezeigte Anordnungen.")
@click.option("--kurse", "by_course", is_flag=True, default=False,
              help="Nach Kursen gruppierter Baum (Section-IDs als Blätter).")
def cmd_tree(datei: Path, limit: int, by_course: bool):
    """Zeigt den PQ-Baum und die zulässigen Anordnungen."""
    catalog, _ = _load_dataset_or_abort(datei)

    from solver.scheduler import SchedulingEngine
    engine = SchedulingEngine(catalog=catalog)
    tree = engine.build_course_tree() if by_course else engine.build_schedule_tree()

    console.print(Panel(Text(tree.render()), title="PQ-Baum", border_style="cyan"))
    frontiers = tree.get_frontiers(limit=limit)
    if not frontiers:
        console.print("[dim]Keine Anordnungen (keine Sections).[/dim]")
        return
    for i, frontier in enumerate(frontiers, start=1):
        console.print(f"[bold]{i}.[/bold] " + " → ".join(frontier))


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.option("--config", "config_path", default=None,
              help="Pfad zur YAML-Konfiguration.")
def config_show(config_path: Optional[str]):
    """Zeigt die wirksame Konfiguration an."""
    config = _load_config(config_path)

    tg = config.time_grid
    console.print(Panel(
        f"Arbeitstag ab [bold]{tg.day_start}[/bold]  |  Tage: {', '.join(tg.day_names)}",
        title="Scheduler-Konfiguration",
        border_style="cyan",
    ))

    sc = config.search
    console.print(
        f"[bold]Suche:[/bold] max. {sc.max_sections} Sections | "
        f"max. {sc.max_frontiers} Anordnungen"
    )
    table = Table(title="Varianten-Regeln", box=box.ROUNDED)
    table.add_column("Tagesverschiebung", justify="right")
    table.add_column("Startzeit")
    for rule in sc.variant_rules:
        table.add_row(f"+{rule.day_shift}", rule.start_time or "unverändert")
    console.print(table)


@cmd_config.command("init")
@click.option("--path", "target", default=None,
              help="Zielpfad (Standard: config/engine_config.yaml).")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Datei überschreiben.")
def config_init(target: Optional[str], force: bool):
    """Schreibt die Default-Konfiguration als YAML."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager(Path(target) if target else None)
    if mgr.exists() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        sys.exit(1)
    mgr.save(default_engine_config())


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Kursplaner: Sections auf Tage und Zeiten verteilen.

    Starten Sie mit: python main.py solve <datensatz.yaml>
    """


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_solve)
cli.add_command(cmd_tree)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
