"""
Backup orchestration.

"Orchestration is just delegation with a fancy name." — schema.cx
"""

from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from .auth import resolve_credential
from .errors import ArchiveWriteError, HttpStatusError, TransportError
from .fetcher import ArchiveFetcher
from .github_api import GitHubAPIClient
from .lister import RepositoryLister
from .models import BackupConfig, BackupSummary, Owner, RepositoryDescriptor
from .rich_utils import console, format_size, print_warning
from .storage import ArchiveWriter, archive_destination

# Per-repository failures that are counted instead of aborting the run
RECOVERABLE_ERRORS = (TransportError, HttpStatusError, ArchiveWriteError)


class BackupOrchestrator:
    """
    Drives discovery, download and persistence of repository archives.

    Repositories are processed one at a time, in listing order.
    """

    def __init__(
        self,
        config: BackupConfig,
        client: GitHubAPIClient | None = None,
        writer: ArchiveWriter | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Run configuration
            client: Pre-built API client. When omitted the token is resolved
                and a client is created (and closed) by each run.
            writer: Archive writer, mostly for tests
        """
        self.config = config
        self._client = client
        self.writer = writer or ArchiveWriter()

    def run(self) -> BackupSummary:
        """
        Run the backup.

        Raises:
            ConfigError: If no usable token is available
            TransportError, HttpStatusError, DecodeError: If identity
                resolution or listing fails. Nothing has been written then.
        """
        client, owned = self._open_client()
        try:
            repos = tuple(self._discover(client))
            summary = BackupSummary(total=len(repos))

            if not repos:
                console.print("[yellow]No repositories found matching the specified filters.[/yellow]")
                return summary

            console.print(f"[green]✓ Found {len(repos)} repositories[/green]\n")

            if self.config.dry_run:
                console.print("[yellow]DRY RUN MODE - No archives will be downloaded[/yellow]\n")
                self._dry_run_repos(repos)
            else:
                self._ensure_output_directory()
                self._backup_repos(client, repos, summary)

            self._print_summary(summary)
            return summary
        finally:
            if owned:
                client.close()

    def discover(self) -> list[RepositoryDescriptor]:
        """List and filter repositories without downloading anything."""
        client, owned = self._open_client()
        try:
            return self._discover(client)
        finally:
            if owned:
                client.close()

    def resolve_owner(self, client: GitHubAPIClient) -> Owner:
        """Use the configured login, or ask GitHub who the token belongs to."""
        if self.config.owner_login:
            return Owner(login=self.config.owner_login)

        owner = client.get_authenticated_user()
        console.print(f"[cyan]🔑 Authenticated as {owner.login}[/cyan]")
        return owner

    def _open_client(self) -> tuple[GitHubAPIClient, bool]:
        """Return the injected client, or build one. The flag says who closes it."""
        if self._client is not None:
            return self._client, False

        token = resolve_credential(self.config.token_env, self.config.env_file)
        client = GitHubAPIClient(token, api_url=self.config.api_url, timeout=self.config.timeout)
        return client, True

    def _discover(self, client: GitHubAPIClient) -> list[RepositoryDescriptor]:
        owner = self.resolve_owner(client)
        console.print(f"\n[cyan]🔍 Fetching repositories for {owner.login}...[/cyan]")

        lister = RepositoryLister(client, max_pages=self.config.max_pages)
        return lister.list_repositories(owner, self.config.allow_other_owners)

    def _ensure_output_directory(self) -> None:
        """Create the output directory. Failures surface later as write errors."""
        try:
            self.config.output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print_warning(f"Could not create {self.config.output_directory}: {e}")

    def _dry_run_repos(self, repos: tuple[RepositoryDescriptor, ...]) -> None:
        """Print what would be downloaded."""
        for repo in repos:
            dest = archive_destination(repo.name, self.config.output_directory)
            console.print(f"[green]{'ZIP':8}[/green] {repo.full_name}@{repo.default_branch} -> {escape(str(dest))}")

    def _backup_repos(
        self,
        client: GitHubAPIClient,
        repos: tuple[RepositoryDescriptor, ...],
        summary: BackupSummary,
    ) -> None:
        """
        Fetch and write each archive in turn.

        A failed fetch or write is counted and the loop moves on.
        """
        fetcher = ArchiveFetcher(client)
        output_directory = self.config.output_directory

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Downloading archives...", total=len(repos))

            for repo in repos:
                progress.update(task, description=f"Downloading {repo.full_name}")
                try:
                    # Unusable names fail before the download
                    self.writer.check_name(repo.name)
                    payload = fetcher.fetch_archive(repo)
                    path = self.writer.write(payload, output_directory)
                except RECOVERABLE_ERRORS as e:
                    summary.record_failure(repo, e)
                    progress.console.print(f"[red]{'FAIL':8}[/red] {repo.full_name}: {escape(str(e))}")
                    continue

                summary.record_success(path)
                progress.console.print(
                    f"[green]{'SAVED':8}[/green] {repo.full_name} -> {escape(str(path))} ({format_size(payload.size)})"
                )
                progress.advance(task)

            progress.update(task, description="Done")

    def _print_summary(self, summary: BackupSummary) -> None:
        """
        Print operation summary.

        "Numbers tell the story. Make sure it's a good one." — schema.cx
        """
        console.print("\n" + "=" * 60)
        console.print("[bold]Summary[/bold]")
        console.print("=" * 60)
        console.print(f"Total repositories: {summary.total}")
        if self.config.dry_run:
            console.print("[yellow]⊘ Dry run, nothing downloaded[/yellow]")
        else:
            console.print(f"[green]✓ Saved:   {summary.succeeded}[/green]")
            console.print(f"[red]✗ Failed:  {summary.failed}[/red]")
            console.print(f"Output directory: {escape(str(self.config.output_directory))}")

        if summary.errors:
            console.print("\n[bold red]Errors:[/bold red]")
            for error in summary.errors:
                console.print(f"  • {escape(error)}")

        console.print("=" * 60 + "\n")
