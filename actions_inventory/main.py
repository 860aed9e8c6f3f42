import logging
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from actions_inventory.cli import CLI, StandardCLI
from actions_inventory.globals.cli_config import CLIConfig
from actions_inventory.globals.github_client import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT

app = typer.Typer()


def setup_logging(verbosity: int = 1) -> None:
    level = logging.INFO
    if verbosity > 1:
        level = logging.DEBUG
    elif verbosity == 0:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


@app.callback(invoke_without_command=True)
def main(
    org: Optional[str] = typer.Option(default=None, help="Organization to audit [env: GITHUB_ORG]"),
    user: Optional[str] = typer.Option(
        default=None, help="User account to audit when no organization is given [env: GITHUB_USERNAME]"
    ),
    token: Optional[str] = typer.Option(default=None, help="GitHub token [env: GITHUB_TOKEN]"),
    api_url: Optional[str] = typer.Option(default=None, help="GitHub REST API base URL [env: GITHUB_API_URL]"),
    output_dir: Path = typer.Option(default=Path("outputs"), help="Directory for the CSV reports"),
    workers: int = typer.Option(default=4, min=1, help="Repositories audited concurrently"),
    timeout: Optional[float] = typer.Option(default=None, help="Deadline for the whole run in seconds"),
    request_timeout: float = typer.Option(
        default=DEFAULT_REQUEST_TIMEOUT, help="Timeout for each API request in seconds"
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
):
    """Inventory the actions used by every repository of a GitHub account.

    Writes one CSV per repository with the columns workflow, action and
    using, where using is the action's declared runtime (node20, docker,
    composite, ...) or NOT_FOUND when it has no action.yml/action.yaml.

    Environment Variables:
        GITHUB_TOKEN: GitHub token for API access (required)
        GITHUB_ORG: Organization to audit
        GITHUB_USERNAME: User account to audit when GITHUB_ORG is unset
        GITHUB_API_URL: API base URL for GitHub Enterprise servers

    Variables are also read from a .env file in the working directory.

    Examples:
        Audit an organization:
            $ actions-inventory --org my-org

        Audit a user with a ten minute deadline:
            $ actions-inventory --user octocat --timeout 600
    """
    load_dotenv()
    setup_logging(0 if quiet else verbose + 1)

    github_token = token or os.getenv("GITHUB_TOKEN")
    if not github_token:
        typer.echo("Error: GITHUB_TOKEN environment variable or --token is required", err=True)
        sys.exit(1)

    if not org and not user:
        org = os.getenv("GITHUB_ORG")
        user = os.getenv("GITHUB_USERNAME")
    if not org and not user:
        typer.echo("Error: GITHUB_USERNAME or GITHUB_ORG (or --user/--org) is required", err=True)
        sys.exit(1)

    config = CLIConfig(
        github_token=github_token,
        org=org,
        user=user,
        api_url=api_url or os.getenv("GITHUB_API_URL") or DEFAULT_API_URL,
        output_dir=output_dir,
        workers=workers,
        timeout=timeout,
        request_timeout=request_timeout,
    )

    cli: CLI = StandardCLI(config)
    exit_code = cli.run()
    sys.exit(exit_code)
