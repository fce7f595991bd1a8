"""
Leaderboard CLI - Main entry point.
Creates jobs, uploads CVs for scoring and shows per-job leaderboards.
"""

import asyncio
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from shared.config import get_settings
from shared.log import setup_logging
from shared.models import Job, LeaderboardEntry

from .api_client import AnalyzeClient, AnalyzeRequestError
from .session import ViewSession, ViewStateError
from .store import JsonFileRepository, StateStore


def render_job(job: Job, entries: list[LeaderboardEntry]) -> None:
    """Print a job and its leaderboard."""
    click.secho(job.title, bold=True)
    click.echo(job.description)
    click.echo()
    click.secho("Leaderboard", bold=True)
    if not entries:
        click.echo("  (no CVs analysed yet)")
    for entry in entries:
        click.echo(f"  {entry.file_name} - {entry.score}%")
        if entry.summary:
            click.echo(f"    {entry.summary}")


def _preview(text: str, length: int = 30) -> str:
    return text if len(text) <= length else text[:length] + "..."


@click.group()
@click.option(
    "--state",
    "-s",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="State file holding jobs and leaderboards",
)
@click.option("--api-url", "-u", type=str, default=None, help="Analysis API base URL")
@click.pass_context
def cli(ctx: click.Context, state: Optional[Path], api_url: Optional[str]):
    """CV Leaderboard - Scores candidate CVs against your jobs."""
    setup_logging()
    settings = get_settings()

    store = StateStore(JsonFileRepository(state or settings.state_path)).load()
    ctx.obj = {
        "store": store,
        "api_url": api_url or settings.api_url,
    }


def _session(ctx: click.Context, with_client: bool = False) -> ViewSession:
    client = AnalyzeClient(base_url=ctx.obj["api_url"]) if with_client else None
    return ViewSession(ctx.obj["store"], analyze_client=client)


@cli.command("jobs")
@click.pass_context
def list_jobs(ctx: click.Context):
    """List all jobs."""
    store: StateStore = ctx.obj["store"]
    if not store.jobs:
        click.echo("No jobs yet. Create one with: cv-leaderboard create TITLE DESCRIPTION")
        return
    for job in store.jobs:
        count = len(store.entries_for(job.id))
        click.echo(f"{job.id}  {job.title}  ({count} CVs)  {_preview(job.description)}")


@cli.command("create")
@click.argument("title")
@click.argument("description")
@click.pass_context
def create_job(ctx: click.Context, title: str, description: str):
    """Create a job and show it."""
    session = _session(ctx)
    try:
        job = session.submit_job(title, description)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created job {job.id}")
    render_job(job, session.leaderboard())


@cli.command("show")
@click.argument("job_id")
@click.option("--by-score", is_flag=True, help="Order by score instead of submission")
@click.pass_context
def show_job(ctx: click.Context, job_id: str, by_score: bool):
    """Show a job and its leaderboard."""
    session = _session(ctx)
    try:
        job = session.select_job(job_id)
    except ViewStateError as e:
        raise click.ClickException(str(e))

    entries = session.leaderboard()
    if by_score:
        entries = sorted(entries, key=lambda e: e.score, reverse=True)
    render_job(job, entries)


async def _upload_all(session: ViewSession, files: tuple[Path, ...]) -> None:
    try:
        for path in files:
            click.echo(f"Uploading {path.name}...")
            entry = await session.upload(path)
            click.echo(f"  {entry.file_name} - {entry.score}%")
    finally:
        await session.analyze_client.close()


@cli.command("upload")
@click.argument("job_id")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def upload_cvs(ctx: click.Context, job_id: str, files: tuple[Path, ...]):
    """Upload one or more CVs (PDF/DOCX) for scoring against a job."""
    session = _session(ctx, with_client=True)
    try:
        session.select_job(job_id)
        asyncio.run(_upload_all(session, files))
    except (ViewStateError, AnalyzeRequestError) as e:
        logger.error(f"Upload failed: {e}")
        raise click.ClickException(f"Upload failed: {e}")

    render_job(session.current_job, session.leaderboard())


@cli.command("clear")
@click.confirmation_option(prompt="Delete all jobs and leaderboards?")
@click.pass_context
def clear_state(ctx: click.Context):
    """Delete all stored jobs and leaderboards."""
    ctx.obj["store"].clear()
    click.echo("State cleared")


def main():
    cli()


if __name__ == "__main__":
    main()
