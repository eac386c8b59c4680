"""Typer CLI definition for og-audio-dl."""

import json
import logging
from pathlib import Path

import typer

from .download import download_audio, read_batch_file
from .errors import ExtractionError
from .extractor import AudioInfoExtractor

app = typer.Typer(help="Download audio from any webpage using Open Graph metadata")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def info(
    url: str = typer.Argument(..., help="Page that declares og:audio metadata"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose logging"),
) -> None:
    """Print the audio metadata found on a page as JSON."""
    _configure_logging(debug)
    try:
        audio_info = AudioInfoExtractor().get_audio_info(url)
    except ExtractionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    typer.echo(json.dumps(audio_info.to_dict(), indent=2, ensure_ascii=False))


@app.command()
def download(
    urls: list[str] | None = typer.Argument(None, help="Pages to download audio from"),
    batch: Path | None = typer.Option(
        None, "-b", "--batch", help="Read URLs from a file, one per line"
    ),
    output_dir: Path = typer.Option(
        Path("."), "-o", "--output-dir", help="Directory to save audio files in"
    ),
    no_tags: bool = typer.Option(False, "--no-tags", help="Do not write ID3 tags"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose logging"),
) -> None:
    """Download the audio declared by one or more pages."""
    _configure_logging(debug)

    targets = list(urls or [])
    if batch is not None:
        try:
            targets.extend(read_batch_file(batch))
        except FileNotFoundError:
            typer.echo(f"Error: File not found: {batch}", err=True)
            raise typer.Exit(1) from None
    if not targets:
        typer.echo("Error: No URLs given", err=True)
        raise typer.Exit(1)

    extractor = AudioInfoExtractor()
    downloaded = 0
    for index, url in enumerate(targets, start=1):
        typer.echo(f"[{index}] Fetching: {url}")
        try:
            result = download_audio(extractor, url, output_dir, write_tags=not no_tags)
        except ExtractionError as e:
            typer.echo(f"  Error: {e}", err=True)
            continue
        except OSError as e:
            typer.echo(f"  Error: Failed to save audio file: {e}", err=True)
            continue

        typer.echo(f"  Title: {result.info.title}")
        typer.echo(f"  Audio: {result.info.audio_url}")
        typer.echo(f"  Saved: {result.path}")
        if result.suspiciously_small:
            typer.echo(
                f"  Warning: File is very small ({result.size} bytes), may not be valid.",
                err=True,
            )
            continue
        typer.echo(f"  Done ({result.size} bytes)")
        downloaded += 1

    failed = len(targets) - downloaded
    if len(targets) > 1:
        typer.echo(
            f"Batch complete: {downloaded} downloaded, {failed} failed, {len(targets)} total"
        )
    if failed:
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose logging"),
) -> None:
    """Run the HTTP API."""
    from .app import create_app

    _configure_logging(debug)
    create_app().run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    app()
