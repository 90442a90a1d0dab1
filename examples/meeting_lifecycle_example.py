"""Meeting lifecycle example for the Connect XML API client.

This module demonstrates a complete session against a live service: log in,
list meetings, create a meeting in the shared meetings folder, inspect it,
delete it again and log out. Every call returns a status envelope, so each
step checks the outcome instead of catching exceptions.

Set CONNECT_XMLAPI_SERVICE_URL, CONNECT_XMLAPI_USER and
CONNECT_XMLAPI_PASSWORD (or a config/config.json) before running.
"""

import logging
from datetime import datetime, timedelta, timezone

from connect_xmlapi import ConnectXmlAPI
from connect_xmlapi.models import MeetingUpdateItem, ScoType, XmlDates

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def example_1_list_meetings(api: ConnectXmlAPI) -> None:
    """Example 1: List every meeting whose name contains "sync"."""
    print("=" * 80)
    print("EXAMPLE 1: Listing Meetings")
    print("=" * 80)

    result = api.get_all_meetings(like_name="sync")
    if not result.is_ok:
        print(f"Listing failed: {result.summary()}")
        return

    for item in result.result:
        print(f"  {item.sco_id:>8}  {item.duration}  {item.name}  {item.full_url}")
    print(f"{len(result.result)} meeting(s)")
    print()


def example_2_create_and_delete(api: ConnectXmlAPI) -> None:
    """Example 2: Create a meeting in the shared folder, read it back, delete it.

    If the server's answer to the create cannot be decoded, the client
    deletes the new meeting itself and reports the problem in ``error``
    (and in ``secondary_error`` if that delete fails too).
    """
    print("=" * 80)
    print("EXAMPLE 2: Create, Inspect and Delete a Meeting")
    print("=" * 80)

    shortcuts = api.get_meeting_shortcuts()
    if not shortcuts.result:
        print(f"No meetings folder available: {shortcuts.summary()}")
        return

    begin = datetime.now(timezone.utc) + timedelta(days=1)
    item = MeetingUpdateItem(
        folder_id=shortcuts.result[0].sco_id,
        name=f"Example meeting {begin:%Y%m%d%H%M}",
        item_type=ScoType.MEETING,
        dates=XmlDates(date_begin=begin, date_end=begin + timedelta(hours=1)),
    )

    created = api.meeting_create(item)
    if not created.is_ok or created.result is None:
        print(f"Create failed: {created.summary()}")
        return
    print(f"Created {created.result.sco_id}: {created.result.full_url}")

    detail = api.get_meeting_detail(created.result.sco_id)
    if detail.result is not None:
        print(f"  Name:   {detail.result.name}")
        print(f"  Begins: {detail.result.dates.date_begin}")

    deleted = api.sco_delete(created.result.sco_id)
    print(f"Deleted: {deleted.is_ok}")
    print()


if __name__ == "__main__":
    client = ConnectXmlAPI.from_config_file()

    login = client.login()
    if not login.result:
        raise SystemExit(f"Login failed: {login.summary()}")

    try:
        example_1_list_meetings(client)
        example_2_create_and_delete(client)
    finally:
        client.logout()
