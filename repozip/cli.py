"""
Repozip CLI interface.

"The command line is where the real work happens. Everything else is just theater." — schema.cx
"""

import sys
from pathlib import Path

import typer
from typer.core import TyperGroup

from .backup import BackupOrchestrator
from .config import build_config, dump_settings, load_settings
from .errors import ConfigError, RepozipError
from .models import BackupConfig
from .rich_utils import (
    console,
    create_summary_table,
    format_repo_name,
    print_error,
    print_header,
    print_success,
    print_warning,
)

# Root options handled by the group itself, not by the default command
ROOT_OPTIONS = frozenset({"--version", "-v", "--help"})


class DefaultBackupGroup(TyperGroup):
    """Route anything that is not a known command to ``backup``."""

    default_command = "backup"

    def parse_args(self, ctx, args):
        if not args or (args[0] not in self.commands and args[0] not in ROOT_OPTIONS):
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    cls=DefaultBackupGroup,
    name="repozip",
    help="📦 Repozip - Zip every repo you own, in one command.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from . import __version__
        console.print(f"Repozip version {__version__}")
        raise typer.Exit()


def load_config(
    config_file: Path | None,
    output_directory: Path | None = None,
    allow_others_repos: bool = False,
    owner: str | None = None,
    env_file: Path | None = None,
    token_env: str | None = None,
    api_url: str | None = None,
    timeout: float | None = None,
    max_pages: int | None = None,
    dry_run: bool = False,
) -> BackupConfig:
    """
    Build the run configuration from the settings file and CLI options.

    Flags only override the file when they are set.
    """
    settings = load_settings(config_file)
    return build_config(
        settings,
        output_directory=output_directory,
        allow_other_owners=True if allow_others_repos else None,
        owner_login=owner,
        env_file=env_file,
        token_env=token_env,
        api_url=api_url,
        timeout=timeout,
        max_pages=max_pages,
        dry_run=True if dry_run else None,
    )


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    📦 Repozip - Zip every repo you own, in one command.

    "Control is an illusion. But backups? Those are real." — schema.cx
    """
    pass


@app.command()
def backup(
    output_directory: Path | None = typer.Argument(
        None,
        help="Directory for the .zip archives (default: ./backups)",
        show_default=False,
    ),
    allow_others_repos: bool = typer.Option(
        False,
        "--allow-others-repos",
        help="Also back up repositories owned by other accounts (orgs, collaborations)",
    ),
    owner: str | None = typer.Option(
        None,
        "--owner",
        "-o",
        help="Owner login to keep (default: the account the token belongs to)",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file (default: ~/.config/repozip/config.yaml if present)",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Env file to load the token from (default: .env)",
    ),
    token_env: str | None = typer.Option(
        None,
        "--token-env",
        help="Environment variable holding the token (default: GITHUB_AUTH_KEY)",
    ),
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        help="GitHub API base URL, e.g. https://github.mycompany.com/api/v3",
        envvar="GITHUB_API_URL",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds (default: 30)",
    ),
    max_pages: int | None = typer.Option(
        None,
        "--max-pages",
        help="Maximum pages of 100 repositories to list (default: 10)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List what would be downloaded without downloading",
    ),
) -> None:
    """
    Download a zip archive of every repository you own.

    This is also what runs when no command is given.

    Example:
        repozip
        repozip ./backups --allow-others-repos
        repozip backup ~/github-backups
        repozip backup ./backups --allow-others-repos
        repozip backup --owner my-org --allow-others-repos --dry-run
    """
    try:
        config = load_config(
            config_file,
            output_directory=output_directory,
            allow_others_repos=allow_others_repos,
            owner=owner,
            env_file=env_file,
            token_env=token_env,
            api_url=api_url,
            timeout=timeout,
            max_pages=max_pages,
            dry_run=dry_run,
        )

        print_header("📦 Repozip backup", f"Destination: {config.output_directory}")
        summary = BackupOrchestrator(config).run()
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        sys.exit(1)
    except RepozipError as e:
        print_error(f"Could not list repositories: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_warning("Operation cancelled by user")
        sys.exit(130)

    if summary.total and summary.failed == summary.total:
        # Every repository failed
        sys.exit(1)
    # Exit 0 even if some repos failed but were reported
    sys.exit(0)


@app.command("list")
def list_repos(
    allow_others_repos: bool = typer.Option(
        False,
        "--allow-others-repos",
        help="Include repositories owned by other accounts",
    ),
    owner: str | None = typer.Option(
        None,
        "--owner",
        "-o",
        help="Owner login to keep (default: the account the token belongs to)",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Env file to load the token from (default: .env)",
    ),
    token_env: str | None = typer.Option(
        None,
        "--token-env",
        help="Environment variable holding the token (default: GITHUB_AUTH_KEY)",
    ),
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        help="GitHub API base URL",
        envvar="GITHUB_API_URL",
    ),
    max_pages: int | None = typer.Option(
        None,
        "--max-pages",
        help="Maximum pages of 100 repositories to list (default: 10)",
    ),
) -> None:
    """
    Show the repositories a backup would download.

    Example:
        repozip list
        repozip list --allow-others-repos
    """
    try:
        config = load_config(
            config_file,
            allow_others_repos=allow_others_repos,
            owner=owner,
            env_file=env_file,
            token_env=token_env,
            api_url=api_url,
            max_pages=max_pages,
        )
        repos = BackupOrchestrator(config).discover()
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        sys.exit(1)
    except RepozipError as e:
        print_error(f"Could not list repositories: {e}")
        sys.exit(1)

    if not repos:
        print_warning("No repositories found matching the specified filters.")
        return

    table = create_summary_table(f"Repositories ({len(repos)})")
    table.add_column("Repository")
    table.add_column("Default branch")
    for repo in repos:
        table.add_row(format_repo_name(repo.full_name), repo.default_branch)
    console.print(table)


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file",
    ),
) -> None:
    """
    Print the effective settings as YAML.

    The output can be saved and passed back with --config.
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        sys.exit(1)

    console.print(dump_settings(config), markup=False, highlight=False)
    print_success("Settings are valid")


if __name__ == "__main__":
    app()
