"""Credential resolution for CLI commands."""

import logging
from typing import Any, Optional

import click

from .config import config
from .exceptions import DocsAPIError, DocsAuthenticationError
from .output import OutputFormatter
from .store import DocumentStore

logger = logging.getLogger(__name__)


def resolve_credentials(
    username: Optional[str],
    password: Optional[str],
    token: Optional[str],
) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """Fill in missing credentials from the config or by prompting.

    A token given on the command line wins. Username and password given on
    the command line come next; after that a stored token is used, and
    finally the user is asked for whatever is missing.

    Returns:
        Tuple of (username, password, token)
    """
    if token:
        return None, None, token
    if username is None or password is None:
        stored = config.token
        if stored and username is None and password is None:
            return None, None, stored
        if username is None:
            username = click.prompt("Username")
        if password is None:
            password = click.prompt("Password", hide_input=True)
    return username, password, None


def authenticate(
    ctx: Any,
    out: OutputFormatter,
    store: DocumentStore,
    username: Optional[str] = None,
    password: Optional[str] = None,
    token: Optional[str] = None,
) -> str:
    """Log in to the document store, exiting with status 1 on failure.

    Args:
        ctx: Click context
        out: Output formatter
        store: Document store to authenticate against
        username: User name from the command line
        password: Password from the command line
        token: Access token from the command line or environment

    Returns:
        The access token in use
    """
    username, password, token = resolve_credentials(username, password, token)
    try:
        return store.authenticate(username=username, password=password, token=token)
    except DocsAuthenticationError as e:
        logger.debug(f"Authentication failed: {e}")
        out.error("Authentication error")
        ctx.exit(1)
    except DocsAPIError as e:
        out.error(f"Authentication error: {e}")
        ctx.exit(1)
    # ctx.exit raises, this is never reached
    raise click.Abort()
