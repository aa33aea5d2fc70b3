"""
ReForester CLI - analysis and projection commands

Thin shell over ReforestationEngine for local use and smoke testing.
"""
import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from reforester import __version__
from reforester.config import get_config
from reforester.engine import ReforestationEngine
from reforester.errors import ReforesterError
from reforester.projections.models import Project
from reforester.utils import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def _load_projects(path):
    """Read one project object or a list of them from a JSON file"""
    with open(Path(path)) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    return [Project.model_validate(item) for item in data]


def _dump(model):
    return model.model_dump(mode="json", by_alias=True)


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', default=None, help='Override REFORESTER_LOG_LEVEL')
def main(log_level):
    """
    ReForester - reforestation potential estimation and impact projections
    """
    config = get_config()
    setup_logging(log_level or config.log_level, config.log_file)


# ═══════════════════════════════════════════════════════════════════
# ANALYSIS COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('lat', type=float)
@click.argument('lon', type=float)
@click.option('--json', 'as_json', is_flag=True, help='Print the raw JSON response')
def analyze(lat, lon, as_json):
    """Analyze reforestation potential at LAT LON"""

    async def _run():
        async with ReforestationEngine() as engine:
            return await engine.analyze(lat, lon)

    try:
        with console.status("[bold green]Collecting soil, weather and recommendation..."):
            result = asyncio.run(_run())
    except ReforesterError as e:
        logger.error("Analysis failed for (%s, %s): %s", lat, lon, e)
        console.print(f"\n[red]✗ Error: {e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    sources = result['dataSources']
    soil = result['soil']
    weather = result['weather']

    table = Table(title=f"Site ({result['coordinates']['lat']}, {result['coordinates']['lon']})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_column("Provenance", style="green")

    table.add_row("Clay / Sand / Silt", f"{soil['clay']} / {soil['sand']} / {soil['silt']} %", sources['soil'])
    table.add_row("Temperature", f"{weather['temperature']} °C", sources['weather'])
    table.add_row("Precipitation", f"{weather['precipitation']} mm", sources['weather'])
    table.add_row("Range", f"{weather['minTemperature']} to {weather['maxTemperature']} °C", sources['weather'])
    table.add_row("Recommendation", result['recommendation'].get('biome', ''), sources['ai'])
    console.print(table)

    for note in (soil.get('note'), weather.get('note')):
        if note:
            console.print(f"[yellow]! {note}[/yellow]")

    console.print(f"\n{result['recommendation']['text']}")
    console.print(f"\n[green]✓ Analysis complete in {result['processingTimeMs']}ms[/green]")


@main.command()
def biomes():
    """List supported biomes"""
    table = Table(title="Biomes")
    table.add_column("Name", style="cyan")
    table.add_column("Range", style="magenta")
    table.add_column("Description")

    for biome in ReforestationEngine.list_biomes():
        table.add_row(biome['name'], biome['range'], biome['description'])

    console.print(table)


# ═══════════════════════════════════════════════════════════════════
# PROJECTION COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('project_json', type=click.Path(exists=True))
@click.option(
    '--section', '-s',
    type=click.Choice(['growth', 'carbon', 'biodiversity', 'financial', 'all']),
    default='all',
    help='Which projection to print',
)
def project(project_json, section):
    """Project growth, carbon, biodiversity and ROI for a project file"""
    from reforester.projections import (
        calculate_biodiversity_impact,
        calculate_financial_analytics,
        carbon_timeline,
        environmental_equivalents,
        project_growth,
    )

    projects = _load_projects(project_json)
    if not projects:
        console.print("\n[red]✗ Error: no project found in file[/red]")
        raise SystemExit(1)
    target = projects[0]

    output = {}
    if section in ('growth', 'all'):
        output['growthProjections'] = [_dump(p) for p in project_growth(target)]
    if section in ('carbon', 'all'):
        output['carbonTimeline'] = [_dump(e) for e in carbon_timeline(target)]
        output['environmentalEquivalents'] = _dump(environmental_equivalents(target))
    if section in ('biodiversity', 'all'):
        output['biodiversityImpact'] = _dump(calculate_biodiversity_impact(target))
    if section in ('financial', 'all'):
        output['financialAnalytics'] = _dump(calculate_financial_analytics(target))

    click.echo(json.dumps(output, indent=2))


@main.command()
@click.argument('projects_json', type=click.Path(exists=True))
@click.option(
    '--metric', '-m',
    type=click.Choice(['carbon_sequestration', 'cost_efficiency', 'biodiversity', 'area', 'total_trees']),
    default='carbon_sequestration',
    help='Metric to rank projects by',
)
def compare(projects_json, metric):
    """Rank projects in a JSON file by a metric"""
    from reforester.projections import comparative_analytics, portfolio_overview

    projects = _load_projects(projects_json)
    overview = portfolio_overview(projects).overview

    table = Table(title=f"Projects by {metric}")
    table.add_column("#", style="dim")
    table.add_column("Project", style="cyan")
    table.add_column("Status")
    table.add_column("Value", style="magenta", justify="right")

    for rank, entry in enumerate(comparative_analytics(projects, metric), start=1):
        table.add_row(str(rank), entry.project_name or entry.project_id, entry.status, f"{entry.value}")

    console.print(table)
    console.print(
        f"\n[cyan]{overview.total_projects}[/cyan] projects, "
        f"[cyan]{overview.total_trees}[/cyan] trees, "
        f"[cyan]{overview.total_carbon:.2f}[/cyan] t CO2/yr"
    )


if __name__ == '__main__':
    main()
