"""
GitHub → Discord Release Notifier
Triggers on:
- Published releases (release notes, version)
- Any other event, e.g. push (branch, commit)
"""

import os
import sys
import json
from dataclasses import dataclass

from dotenv import load_dotenv

from embeds import DeliveryPayload, EventContext, Release, ReleaseTarget, branch_name, build_notification, classify
from webhook import send_to_discord, validate_webhook_url

load_dotenv()

DEFAULT_COLOR = '8892be'
DEFAULT_USERNAME = 'GitHub Release'
DEFAULT_AVATAR_URL = 'https://emoji-cdn.mqrio.dev/%F0%9F%93%A6?style=microsoft-3D-fluent'
DEFAULT_CONTENT = 'A new release is now available!'
DEFAULT_FOOTER = 'Powered by Lettermint · lettermint.co'


class MissingInputError(ValueError):
    """Raised when a required action input is empty"""


@dataclass(frozen=True)
class ActionInputs:
    webhook_url: str
    color: str
    username: str
    avatar_url: str
    content: str
    footer: str


def get_input(name, required=False):
    """Read an action input the way the runner passes it (INPUT_<NAME>)"""
    value = os.getenv(f"INPUT_{name.replace(' ', '_').upper()}", '').strip()
    if required and not value:
        raise MissingInputError(f"Input required and not supplied: {name}")
    return value


def read_inputs():
    return ActionInputs(
        webhook_url=get_input('webhook_url', required=True),
        color=get_input('color') or DEFAULT_COLOR,
        username=get_input('username') or DEFAULT_USERNAME,
        avatar_url=get_input('avatar_url') or DEFAULT_AVATAR_URL,
        content=get_input('content') or DEFAULT_CONTENT,
        footer=get_input('footer') or DEFAULT_FOOTER,
    )


def load_event_context():
    """Build the event context from the GITHUB_* runner variables"""
    repository = os.getenv('GITHUB_REPOSITORY', '')
    owner, _, repo = repository.partition('/')
    if not owner or not repo:
        raise ValueError("context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'")

    event = {}
    event_path = os.getenv('GITHUB_EVENT_PATH')
    if event_path and os.path.exists(event_path):
        with open(event_path, encoding='utf-8') as f:
            event = json.load(f)

    release = event.get('release')
    return EventContext(
        owner=owner,
        repo=repo,
        sha=os.getenv('GITHUB_SHA', ''),
        ref=os.getenv('GITHUB_REF', ''),
        event_name=os.getenv('GITHUB_EVENT_NAME', ''),
        release=Release.from_payload(release) if release else None,
    )


def escape_command_data(value):
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def set_failed(message):
    print(f"::error::{escape_command_data(message)}")


def set_output(name, value):
    output_path = os.getenv('GITHUB_OUTPUT')
    if not output_path:
        print(f"Output {name}={value} (GITHUB_OUTPUT not set)")
        return
    with open(output_path, 'a', encoding='utf-8') as f:
        f.write(f"{name}={value}\n")


def log_context(ctx):
    target = classify(ctx)
    if isinstance(target, ReleaseTarget):
        print(f"Release Event Detected: {target.release.tag_name}")
        print(f"Release Name: {target.release.name or 'N/A'}")
        print(f"Repository: {ctx.full_name}")
    else:
        print(f"Repository: {ctx.full_name}")
        print(f"Branch: {branch_name(target.ref)}")
        print(f"Commit: {target.sha[:7]}")


def run():
    """Send the notification for the current event, reporting the outcome to the runner"""
    try:
        inputs = read_inputs()
        validate_webhook_url(inputs.webhook_url)

        ctx = load_event_context()
        notification = build_notification(ctx, inputs.color, inputs.footer)
        payload = DeliveryPayload(
            username=inputs.username,
            avatar_url=inputs.avatar_url,
            content=inputs.content,
            embeds=(notification,),
        )

        print("Sending Discord webhook...")
        log_context(ctx)

        send_to_discord(inputs.webhook_url, payload.to_dict())
        print("Discord webhook sent successfully")

        set_output('success', 'true')
    except Exception as e:
        set_failed(f"Action failed: {e}")
        return False
    return True


def main():
    sys.exit(0 if run() else 1)


if __name__ == "__main__":
    main()
