"""Root CLI group for tubescribe."""

from __future__ import annotations

import click

from tubescribe import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tubescribe")
def cli() -> None:
    """tubescribe: YouTube caption cleanup and multi-provider LLM summaries."""


# Import and register subcommands
from tubescribe.cli.process_cmd import process_cmd  # noqa: E402
from tubescribe.cli.providers_cmd import providers_cmd  # noqa: E402
from tubescribe.cli.summarize_cmd import summarize_cmd  # noqa: E402

cli.add_command(process_cmd, "process")
cli.add_command(summarize_cmd, "summarize")
cli.add_command(providers_cmd, "providers")
