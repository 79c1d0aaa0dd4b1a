"""tubescribe process: clean a caption file and export the transcript."""

from __future__ import annotations

from pathlib import Path

import click

from tubescribe.errors import TubescribeError
from tubescribe.ingestion.export import EXPORT_FORMATS, export_transcript
from tubescribe.utils.progress import console, log_error, log_success


@click.command()
@click.argument("captions", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "fmt",
    default="txt",
    type=click.Choice(EXPORT_FORMATS),
    help="Output format",
)
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of stdout",
)
@click.option("--no-dedup", is_flag=True, help="Skip repetition removal")
@click.option("--no-speakers", is_flag=True, help="Skip speaker attribution")
@click.option("--no-normalize", is_flag=True, help="Skip text cleanup")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path), help="Path to tubescribe.yaml")
def process_cmd(
    captions: Path,
    fmt: str,
    output: Path | None,
    no_dedup: bool,
    no_speakers: bool,
    no_normalize: bool,
    config_path: Path | None,
) -> None:
    """Parse and clean an SRT caption file."""
    from tubescribe.config import load_app_config
    from tubescribe.ingestion import parse_transcript, process_transcript
    from tubescribe.utils.io import write_atomic

    try:
        config = load_app_config(config_path)
        options = config.processing.model_copy(update={
            "deduplication": config.processing.deduplication and not no_dedup,
            "speaker_detection": config.processing.speaker_detection and not no_speakers,
            "normalize_text": config.processing.normalize_text and not no_normalize,
        })
        segments = parse_transcript(captions.read_bytes())
        transcript = process_transcript(segments, options)
    except TubescribeError as e:
        log_error(str(e))
        raise SystemExit(1)

    if not transcript.segments:
        log_error(f"No caption blocks found in {captions}")
        raise SystemExit(1)

    text = export_transcript(transcript, fmt)
    if output is None:
        click.echo(text)
        return

    write_atomic(output, text)
    log_success(f"Wrote {fmt} transcript to {output}")
    console.print(f"[dim]{len(transcript.segments)} segments, {transcript.word_count} words[/dim]", highlight=False)
