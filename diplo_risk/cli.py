"""
Diplomatic Risk Dashboard — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (pipeline run, settings write, etc.).
  5. Report result to stdout.

Install and run::

    pip install -e .
    diplo-risk --help
    diplo-risk validate-config
    diplo-risk regions
    diplo-risk set-key newsapi <key>
    diplo-risk set-region "East Africa"
    diplo-risk run --export
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="diplo-risk",
    help="Diplomatic risk dashboard — news, economy and weather signals to a 1-10 score.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from diplo_risk.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from diplo_risk.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("run")
def run(
    region: Optional[str] = typer.Option(
        None,
        "--region",
        help="Region to score for this run only (does not change saved settings).",
    ),
    country: Optional[list[str]] = typer.Option(
        None,
        "--country",
        "-c",
        help="Country key to score (e.g. ghana). Repeatable; defaults to the region's countries.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the synthetic trend fallback and chart wobble.",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        help="Write the snapshot JSON (and a CSV table) to data/outputs/.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override the export directory from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Fetch signals, score every country and print the dashboard.

    \b
    Sources:
      NewsAPI      — needs a key (set-key newsapi or NEWSAPI_KEY)
      World Bank   — no key
      OpenWeather  — optional key (set-key openweather or OPENWEATHER_API_KEY)

    A source that fails or times out is replaced by its fallback; the run
    itself never fails because of a single source.
    """
    from diplo_risk.pipeline.orchestrator import RiskOrchestrator
    from diplo_risk.reporting.export import export_snapshot, export_to_csv, flatten_snapshot
    from diplo_risk.reporting.sinks import ConsoleSink
    from diplo_risk.settings.store import open_settings_store, resolve_settings
    from diplo_risk.taxonomy.regions import SUPPORTED_REGIONS, region_for_countries

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    settings = resolve_settings(open_settings_store(config))
    if region is not None:
        if region not in SUPPORTED_REGIONS:
            typer.echo(
                f"[ERROR] Unknown region '{region}'. "
                f"Valid: {', '.join(sorted(SUPPORTED_REGIONS))}",
                err=True,
            )
            raise typer.Exit(code=1)
        settings = settings.model_copy(update={"region": region})

    rng_seed = seed if seed is not None else config.series.random_seed
    orchestrator = RiskOrchestrator(
        config=config,
        settings=settings,
        rng=random.Random(rng_seed),
        sink=ConsoleSink(),
    )

    keys = list(country) if country else None
    label = settings.region if keys is None else region_for_countries(keys, settings.region)
    typer.echo(f"Diplomatic risk | region={label}")
    if not settings.newsapi_key:
        mode = "demo headlines" if config.acquisition.demo_news else "no headlines"
        typer.echo(f"  (no NewsAPI key: {mode})")
    typer.echo("")

    snapshot = orchestrator.run(countries=keys)

    if export:
        target = Path(output_dir or config.data.outputs_dir)
        json_path = export_snapshot(snapshot, target)
        csv_path = export_to_csv(flatten_snapshot(snapshot), json_path.with_suffix(".csv"))
        typer.echo(f"  Snapshot written: {json_path}")
        typer.echo(f"  Table written:    {csv_path}")

    typer.echo("[OK] Run complete.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default region:   {config.regions.default_region}")
    typer.echo(f"  Fetch timeout:    {config.acquisition.timeout_seconds}s")
    typer.echo(f"  Demo news:        {config.acquisition.demo_news}")
    typer.echo(f"  Series points:    {config.series.point_count} "
               f"(every {config.series.checkpoint_interval_days}d, "
               f"±{config.series.wobble_amplitude})")
    typer.echo(f"  Settings file:    {config.data.settings_file}")
    typer.echo(f"  Outputs dir:      {config.data.outputs_dir}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("regions")
def regions() -> None:
    """List supported regions and their countries."""
    from diplo_risk.taxonomy.regions import REGIONS, display_name

    for name, countries in REGIONS.items():
        typer.echo(f"{name}: {', '.join(display_name(c) for c in countries)}")


@app.command("settings")
def show_settings(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show saved settings (keys are masked)."""
    from diplo_risk.settings.store import mask_secret, open_settings_store, resolve_settings

    config = _load_config_or_exit(config_path)
    store = open_settings_store(config)
    resolved = resolve_settings(store)

    typer.echo(f"Settings file: {store.path}")
    typer.echo(f"  NewsAPI key:     {mask_secret(resolved.newsapi_key)}")
    typer.echo(f"  OpenWeather key: {mask_secret(resolved.openweather_key)}")
    typer.echo(f"  Region:          {resolved.region}")


@app.command("set-key")
def set_key(
    service: str = typer.Argument(..., help="newsapi | openweather"),
    value: str = typer.Argument("", help="API key; omit or pass '' to clear."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Save an API key to the settings file."""
    from diplo_risk.errors import ConfigurationInvalid
    from diplo_risk.settings.store import CREDENTIAL_KEYS, open_settings_store

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if service not in CREDENTIAL_KEYS:
        typer.echo(
            f"[ERROR] Unknown service '{service}'. Valid: {', '.join(sorted(CREDENTIAL_KEYS))}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        open_settings_store(config).set(service, value)
    except ConfigurationInvalid as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] {service} key {'saved' if value.strip() else 'cleared'}.")


@app.command("set-region")
def set_region(
    region: str = typer.Argument(..., help="West Africa | East Africa | Central Africa"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Save the region used by future runs.

    Unknown regions are rejected and the saved region is left unchanged.
    """
    from diplo_risk.errors import ConfigurationInvalid
    from diplo_risk.settings.store import open_settings_store

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    store = open_settings_store(config)
    try:
        store.set("region", region)
    except ConfigurationInvalid as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        typer.echo(f"  Region unchanged: {store.get('region')}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] Region set to {store.get('region')}.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
