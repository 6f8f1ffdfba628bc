"""
veo – CLI entrypoint (Click group)

Subcommands:
- list: list a club's recordings, one page or all pages
- get: show one recording (or the latest) with its share URL
- update: edit recording metadata (not implemented yet)
"""

import json
import logging
import os

import rich_click as click

from veo import __version__
from veo.client import ListRecordingsOptions, VeoClient
from veo.config import Config
from veo.exceptions import NotImplementedCommandError, RecordingNotFoundError, VeoError
from veo.logger import setup_logging
from veo.models import Period
from veo.output import OutputFormatter

click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True

LATEST = "latest"

logger = logging.getLogger(__name__)


def _autoload_dotenv() -> None:
    """Automatically load a local .env file for CLI usage.

    Skipped when VEO_NO_DOTENV is set (e.g., tests). Existing environment
    variables are never overridden.
    """
    if os.getenv("VEO_NO_DOTENV"):
        return
    try:
        from dotenv import find_dotenv, load_dotenv

        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)
    except OSError as e:
        logger.debug(f"Skipping .env autoload: {e}")


def _load_config(config: str | None, *, verbose: bool = False, debug: bool = False) -> Config:
    cfg = Config(config_file=config) if config else Config()
    if not (verbose or debug):
        # LOG_LEVEL / config log_level applies when no CLI flag overrides it
        logging.getLogger("veo").setLevel(cfg.log_level)
    cfg.validate()
    return cfg


def _build_client(cfg: Config) -> VeoClient:
    return VeoClient(cfg.token, base_url=cfg.api_base_url, timeout=cfg.timeout)


def _fail(
    error: Exception,
    *,
    command: str,
    context: str,
    json_mode: bool,
    debug: bool,
    formatter: OutputFormatter,
) -> None:
    """Report a command failure and exit non-zero (re-raise in debug mode)"""
    if isinstance(error, VeoError):
        logger.debug(f"VeoError in {command} command:", exc_info=True)
        if json_mode:
            payload = {"status": "error", "command": command, "error": error.to_dict()}
            print(json.dumps(payload, indent=2))
        else:
            formatter.output_error(f"{context}: {error.code}: {error.message}")
            if error.details and error.details not in error.message:
                formatter.output_info(error.details)
    else:
        logger.debug(f"Unexpected exception in {command} command:", exc_info=True)
        if json_mode:
            payload = {
                "status": "error",
                "command": command,
                "error": {"code": "UNEXPECTED_ERROR", "message": str(error), "details": ""},
            }
            print(json.dumps(payload, indent=2))
        else:
            formatter.output_error(f"Unexpected error: {error}")
    if debug:
        raise error
    raise SystemExit(1)


@click.group(help="veo – command-line client for Veo sports camera recordings")
@click.version_option(version=__version__)
def cli() -> None:
    """Top-level Click group."""
    _autoload_dotenv()


@cli.command(name="list", help="List recordings from your Veo camera")
@click.option("--club", "-c", help="Club slug (or set VEO_CLUB environment variable)")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number")
@click.option("--all", "-a", "fetch_all", is_flag=True, help="Fetch all pages")
@click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--debug", "-d", is_flag=True, help="Debug output (request tracing)")
@click.option("--config", type=click.Path(exists=True), help="Path to config file")
def list_command(
    club: str | None,
    page: int,
    fetch_all: bool,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    setup_logging(verbose=verbose, debug=debug)
    formatter = OutputFormatter("json" if json_mode else "human")

    if page < 0:
        raise click.BadParameter("--page must be 1 or greater", param_hint="--page")

    try:
        cfg = _load_config(config, verbose=verbose, debug=debug)
        club_slug = cfg.require_club(club)
        with _build_client(cfg) as client:
            result = client.list_recordings(
                club_slug, ListRecordingsOptions(page=page, fetch_all=fetch_all)
            )
        logger.info(
            f"Fetched {len(result.recordings)} recordings for {club_slug} "
            f"(server total: {result.total_count})"
        )
        formatter.output_recordings(result)
    except Exception as e:
        _fail(
            e,
            command="list",
            context="Failed to list recordings",
            json_mode=json_mode,
            debug=debug,
            formatter=formatter,
        )


@cli.command(
    name="get",
    help=(
        "Get details for a specific recording.\n\n"
        'Use "latest" to get the most recent recording of the club.'
    ),
)
@click.argument("recording_id", metavar="<recording-id|latest>")
@click.option(
    "--club",
    "-c",
    help="Club slug (required for 'latest', or set VEO_CLUB environment variable)",
)
@click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--debug", "-d", is_flag=True, help="Debug output (request tracing)")
@click.option("--config", type=click.Path(exists=True), help="Path to config file")
def get_command(
    recording_id: str,
    club: str | None,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    setup_logging(verbose=verbose, debug=debug)
    formatter = OutputFormatter("json" if json_mode else "human")

    try:
        cfg = _load_config(config, verbose=verbose, debug=debug)
        with _build_client(cfg) as client:
            if recording_id == LATEST:
                club_slug = cfg.require_club(club)
                latest = client.list_recordings(club_slug, ListRecordingsOptions(page=1))
                if not latest.recordings:
                    raise RecordingNotFoundError(
                        "no recordings found", details=f"Club '{club_slug}' has no recordings"
                    )
                recording_id = latest.recordings[0].identifier
                logger.info(f"Resolved '{LATEST}' to recording {recording_id}")

            details = client.get_recording(recording_id)

            # Periods only add the kickoff timestamp to the share URL
            periods: list[Period] | None = None
            try:
                periods = client.get_periods(details.slug)
            except VeoError as e:
                logger.debug("Periods request failed:", exc_info=True)
                formatter.output_warning(f"could not fetch periods: {e}")

        formatter.output_recording_details(details, periods)
    except Exception as e:
        _fail(
            e,
            command="get",
            context="Failed to get recording",
            json_mode=json_mode,
            debug=debug,
            formatter=formatter,
        )


@cli.command(name="update", help="Update video metadata")
@click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")
@click.option("--debug", "-d", is_flag=True, help="Debug output")
def update_command(json_mode: bool, debug: bool) -> None:
    # TODO: implement once the metadata update endpoint and payload are known
    _fail(
        NotImplementedCommandError("update is not yet implemented"),
        command="update",
        context="Failed to update recording",
        json_mode=json_mode,
        debug=debug,
        formatter=OutputFormatter("json" if json_mode else "human"),
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
