"""tubescribe providers: show which LLM providers are configured."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from tubescribe.utils.progress import console


@click.command()
@click.option("--env-file", default=".env", type=click.Path(path_type=Path), help="Optional .env file")
def providers_cmd(env_file: Path) -> None:
    """List providers, whether an API key is set, and the model in use."""
    from tubescribe.config import PROVIDER_CONFIGS, Settings

    settings = Settings.from_env(env_file)
    configured = settings.configured_providers()

    table = Table(title="Providers", title_style="bold", padding=(0, 2))
    table.add_column("Provider", style="bold")
    table.add_column("Configured")
    table.add_column("Key setting", style="dim")
    table.add_column("Model")

    for key, config in PROVIDER_CONFIGS.items():
        mark = "[green]yes[/green]" if configured[key] else "[red]no[/red]"
        table.add_row(
            key.value,
            mark,
            config.api_key_env,
            escape(f"{settings.model_name(key)} ({settings.model(key)})"),
        )

    console.print(table)
