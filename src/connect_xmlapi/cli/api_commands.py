"""CLI commands that talk to the XML API.

Exit codes:
    0: Server answered ok
    1: Configuration or argument problem (nothing was sent)
    2: Server-reported failure or transport error
"""

import logging
import sys
from typing import Optional

import click

from connect_xmlapi.api.client import ConnectXmlAPI
from connect_xmlapi.models.status import ApiStatus
from connect_xmlapi.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _get_api(ctx: click.Context) -> ConnectXmlAPI:
    """Build the client from the configuration loaded by the root group."""
    obj = ctx.ensure_object(dict)
    config = obj.get("config")
    if config is None:
        error = obj.get("config_error", "No configuration loaded")
        click.echo(click.style("✗", fg="red", bold=True) + f" Configuration error: {error}", err=True)
        sys.exit(1)
    return ConnectXmlAPI(config, provider=obj.get("provider"))


def _fail(action: str, status: ApiStatus) -> None:
    click.echo(
        click.style("✗", fg="red", bold=True) + f" {action} failed: {status.summary()}",
        err=True,
    )
    sys.exit(1 if isinstance(status.error, ValidationError) else 2)


def _login(api: ConnectXmlAPI) -> None:
    result = api.login()
    if not result.result:
        _fail("Login", result)


@click.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Log in with the configured credentials and show the current user."""
    api = _get_api(ctx)
    _login(api)
    try:
        info = api.get_user_info()
        if not info.is_ok or info.result is None:
            _fail("common-info", info)
        user = info.result
        click.echo(click.style("✓", fg="green", bold=True) + " Logged in")
        click.echo(f"  User ID: {user.user_id}")
        click.echo(f"  Name:    {user.name}")
        click.echo(f"  Login:   {user.login}")
    finally:
        api.logout()


@click.group(name="meetings")
def meetings_group() -> None:
    """Meeting listing commands."""
    pass


@meetings_group.command(name="list")
@click.option("--like", "like_name", default=None, help="Only meetings whose name contains this text")
@click.option("--mine", is_flag=True, help="List only the caller's own meetings")
@click.pass_context
def list_meetings(ctx: click.Context, like_name: Optional[str], mine: bool) -> None:
    """List meetings on the account."""
    api = _get_api(ctx)
    _login(api)
    try:
        result = api.get_my_meetings(like_name) if mine else api.get_all_meetings(like_name)
        if not result.is_ok:
            _fail("Meeting listing", result)
        items = result.result or []
        for item in items:
            begin = item.dates.date_begin.isoformat() if item.dates.date_begin else "-"
            click.echo(f"{item.sco_id}\t{begin}\t{item.name}\t{item.full_url or ''}")
        click.echo(f"\n{len(items)} meeting(s)")
    finally:
        api.logout()


@click.group(name="sco")
def sco_group() -> None:
    """SCO inspection commands."""
    pass


@sco_group.command(name="info")
@click.argument("sco_id")
@click.pass_context
def sco_info(ctx: click.Context, sco_id: str) -> None:
    """Show details of one SCO."""
    api = _get_api(ctx)
    _login(api)
    try:
        result = api.get_meeting_detail(sco_id)
        if not result.is_ok:
            _fail("sco-info", result)
        detail = result.result
        if detail is None:
            click.echo(f"SCO {sco_id} has no details")
            return
        click.echo(f"SCO {detail.sco_id}")
        click.echo(f"  Name:        {detail.name}")
        click.echo(f"  Folder:      {detail.folder_id}")
        click.echo(f"  URL:         {detail.full_url or '-'}")
        click.echo(f"  Begins:      {detail.dates.date_begin or '-'}")
        click.echo(f"  Ends:        {detail.dates.date_end or '-'}")
    finally:
        api.logout()
