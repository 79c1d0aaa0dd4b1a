"""tubescribe summarize: clean captions and summarize them with one or more LLMs."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import click

from tubescribe.models.summary import ProviderKey, SummaryStyle
from tubescribe.utils.progress import log_error, log_success


@click.command()
@click.argument("captions", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--provider", "-p",
    default="all",
    type=click.Choice([key.value for key in ProviderKey] + ["all"]),
    help="Provider to use, or all of them concurrently",
)
@click.option(
    "--style", "-s",
    default=SummaryStyle.BULLETS.value,
    type=click.Choice([style.value for style in SummaryStyle]),
    help="Summary style",
)
@click.option("--url", "video_url", default=None, help="Video URL for timestamp links (bullets style)")
@click.option(
    "--output-dir", "-o",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Write one Markdown file per successful provider",
)
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path), help="Path to tubescribe.yaml")
@click.option("--env-file", default=".env", type=click.Path(path_type=Path), help="Optional .env file")
def summarize_cmd(
    captions: Path,
    provider: str,
    style: str,
    video_url: str | None,
    output_dir: Path | None,
    config_path: Path | None,
    env_file: Path,
) -> None:
    """Summarize an SRT caption file."""
    from tubescribe.config import Settings, load_app_config
    from tubescribe.errors import TubescribeError
    from tubescribe.ingestion import parse_transcript, process_transcript
    from tubescribe.summary.service import build_service
    from tubescribe.utils.io import write_atomic
    from tubescribe.utils.progress import show_summary_results

    try:
        config = load_app_config(config_path)
        transcript = process_transcript(parse_transcript(captions.read_bytes()), config.processing)
    except TubescribeError as e:
        log_error(str(e))
        raise SystemExit(1)

    if not transcript.segments:
        log_error(f"No caption blocks found in {captions}")
        raise SystemExit(1)

    service = build_service(Settings.from_env(env_file), config)
    providers = None if provider == "all" else [ProviderKey(provider)]

    started = time.monotonic()
    results = asyncio.run(
        service.generate_all_summaries(transcript, SummaryStyle(style), video_url, providers)
    )
    show_summary_results(results, time.monotonic() - started)

    if output_dir is not None:
        for result in results:
            if not result.success:
                continue
            path = output_dir / f"{captions.stem}.{result.provider.value}.{style}.md"
            write_atomic(path, result.summary.rstrip() + "\n")
            log_success(f"Wrote {path}")

    if not any(r.success for r in results):
        log_error("Every provider failed")
        raise SystemExit(1)
