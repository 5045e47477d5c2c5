"""CLI interface for the document uploader."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .api import DocsClient
from .auth import authenticate
from .config import config
from .conflicts import ConsolePrompt
from .exceptions import DocsAPIError, DocsFileNotFoundError
from .formats import FORMAT_CATEGORIES, SIZE_LIMITS, SUPPORTED_FORMATS
from .output import OutputFormatter
from .store import DocsStore
from .synchronizer import Synchronizer
from .utils import format_size

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Using this tool, you can batch upload your documents to a document store "
    "account preserving folder structure."
)


@click.group()
@click.option("--api-url", envvar="DOCSUPLOAD_API_URL", help="Document store API URL")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output the result in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(__version__)
@click.pass_context
def main(
    ctx: Any,
    api_url: Optional[str],
    quiet: bool,
    json: bool,
    verbose: bool,
) -> None:
    """docsupload - Batch upload documents preserving folder structure."""
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("docsupload").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.option(
    "--token",
    "-t",
    prompt="Enter your access token",
    hide_input=True,
    help="Access token",
)
@click.pass_context
def init(ctx: Any, token: str) -> None:
    """Store an access token (and --api-url, if given) in the config file."""
    out: OutputFormatter = ctx.obj["out"]
    client = DocsClient(token=token, api_url=ctx.obj["api_url"])

    try:
        out.info("Validating token...")
        try:
            DocsStore(client).authenticate(token=token)
            out.success("✓ Token is valid")
        except DocsAPIError as e:
            out.error(f"Token validation failed: {e}")
            if not click.confirm("Save token anyway?", default=False):
                out.warning("Configuration cancelled.")
                ctx.exit(1)
    finally:
        client.close()

    config.save_token(token)
    if ctx.obj["api_url"]:
        config.save_api_url(ctx.obj["api_url"])
    out.print_summary(
        "Initialization Complete",
        [
            ("Status", "✓ Configuration saved successfully"),
            ("Config file", str(config.get_config_path())),
        ],
    )


@main.command()
@click.argument("path", required=False, type=click.Path())
@click.option("--username", "-u", help="Account user name")
@click.option("--password", "-p", help="Account password")
@click.option(
    "--token", "-t", envvar="DOCSUPLOAD_TOKEN", help="Access token (skips login)"
)
@click.option("--recursive", "-r", is_flag=True, help="Recursively upload subfolders")
@click.option(
    "--remote-folder",
    "-rf",
    help="Remote folder path to upload into, separated by '/'",
)
@click.option(
    "--without-folders",
    "-wf",
    is_flag=True,
    help="Do not recreate the folder structure remotely",
)
@click.option(
    "--add-all",
    "-aa",
    is_flag=True,
    help="Upload documents even if documents with the same names exist",
)
@click.option(
    "--skip-all",
    "-sa",
    is_flag=True,
    help="Skip documents if documents with the same names exist",
)
@click.option(
    "--replace-all",
    "-ra",
    is_flag=True,
    help="Replace remote documents that have the same names as the uploaded",
)
@click.option(
    "--disable-retries",
    "-dr",
    is_flag=True,
    help="Disable auto-retries when an upload fails",
)
@click.option(
    "--lock-folders",
    is_flag=True,
    help="Mark local folders read-only while they are uploaded",
)
@click.pass_context
def upload(  # noqa: C901
    ctx: Any,
    path: Optional[str],
    username: Optional[str],
    password: Optional[str],
    token: Optional[str],
    recursive: bool,
    remote_folder: Optional[str],
    without_folders: bool,
    add_all: bool,
    skip_all: bool,
    replace_all: bool,
    disable_retries: bool,
    lock_folders: bool,
) -> None:
    """Upload a file or folder.

    PATH: Local file or folder to upload (asked for if omitted)
    """
    out: OutputFormatter = ctx.obj["out"]
    out.info(WELCOME_MESSAGE)
    out.print("")

    client = DocsClient(api_url=ctx.obj["api_url"])
    store = DocsStore(client)

    try:
        authenticate(ctx, out, store, username, password, token)

        if path is None:
            path = click.prompt("Path")
        local_path = Path(path)
        if not local_path.exists():
            out.error(f"Specified path {path} doesn't exist")
            ctx.exit(1)

        engine = Synchronizer(store, out, provider=ConsolePrompt())
        uploaded = engine.upload(
            local_path,
            recursive=recursive,
            remote_root_path=remote_folder,
            without_folders=without_folders,
            add_all=add_all,
            skip_all=skip_all,
            replace_all=replace_all,
            disable_retries=disable_retries,
            lock_folders=lock_folders,
        )
        stats = engine.stats

        if out.json_output:
            out.output_json(
                {
                    "success": uploaded,
                    "failed": stats.errors,
                    "skipped": stats.skips,
                }
            )
        else:
            summary_items = [("Successfully uploaded", f"{uploaded} files")]
            if stats.skips > 0:
                summary_items.append(("Skipped", f"{stats.skips} files"))
            if stats.errors > 0:
                summary_items.append(("Failed", f"{stats.errors} files"))
            out.print_summary("Upload Complete", summary_items)

    except KeyboardInterrupt:
        out.warning("\nUpload cancelled by user")
        ctx.exit(130)
    except DocsFileNotFoundError as e:
        out.error(str(e))
        ctx.exit(1)
    except DocsAPIError as e:
        out.error(f"API error: {e}")
        ctx.exit(1)
    finally:
        client.close()


@main.command()
@click.pass_context
def formats(ctx: Any) -> None:
    """List the supported file formats."""
    out: OutputFormatter = ctx.obj["out"]

    if out.json_output:
        out.output_json(
            [
                {
                    "extension": ext,
                    "type": FORMAT_CATEGORIES.get(ext),
                    "size_limit": SIZE_LIMITS.get(FORMAT_CATEGORIES.get(ext, "")),
                }
                for ext in SUPPORTED_FORMATS
            ]
        )
        return

    out.print("Supported file formats are: " + ", ".join(SUPPORTED_FORMATS))
    out.print("")
    for ext in sorted(SUPPORTED_FORMATS):
        doc_type = FORMAT_CATEGORIES.get(ext, "other")
        limit = SIZE_LIMITS.get(doc_type)
        limit_str = format_size(limit) if limit is not None else "no limit"
        out.print(f"  {ext:<6} {doc_type:<13} {limit_str}")


@main.command()
@click.pass_context
def status(ctx: Any) -> None:
    """Show the configured API URL and check the stored token."""
    out: OutputFormatter = ctx.obj["out"]
    api_url = ctx.obj["api_url"] or config.api_url

    items = [("API URL", api_url), ("Config file", str(config.get_config_path()))]
    if not config.is_configured():
        items.append(("Token", "not configured"))
        out.print_summary("Status", items)
        ctx.exit(1)

    token = config.token
    client = DocsClient(token=token, api_url=api_url)
    try:
        DocsStore(client).authenticate(token=token)
        items.append(("Token", "✓ valid"))
    except DocsAPIError as e:
        items.append(("Token", f"invalid ({e})"))
        out.print_summary("Status", items)
        ctx.exit(1)
    finally:
        client.close()

    out.print_summary("Status", items)
