"""
Discord webhook delivery: URL validation and a single POST.
"""

import re
from urllib.parse import urlparse

import requests

DISCORD_HOSTS = ('discord.com', 'discordapp.com')
FORBIDDEN_HOST_CHARS = re.compile(r'[\s<>"{}|\\^`%]')


class InvalidWebhookURLError(ValueError):
    """Raised when the webhook URL is malformed or not a Discord URL"""


class DiscordWebhookError(RuntimeError):
    """Raised when Discord answers with a non-2xx status"""

    def __init__(self, status, reason, body):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"Discord webhook failed: {status} {reason}. {body}")


def validate_webhook_url(url):
    """Check the URL parses and points at a Discord host"""
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        # raises ValueError for a non-numeric or out of range port
        parsed.port
    except ValueError:
        raise InvalidWebhookURLError("Invalid webhook URL: Invalid URL") from None

    if not parsed.scheme or not hostname or FORBIDDEN_HOST_CHARS.search(parsed.netloc):
        raise InvalidWebhookURLError("Invalid webhook URL: Invalid URL")

    # Substring match, so e.g. discord.com.example.net also passes
    if not any(host in hostname for host in DISCORD_HOSTS):
        raise InvalidWebhookURLError(
            "Invalid webhook URL: Webhook URL must be a Discord webhook URL"
        )


def send_to_discord(webhook_url, payload):
    """POST the payload dict to the webhook, raising on any non-2xx answer"""
    response = requests.post(webhook_url, json=payload)
    if not 200 <= response.status_code < 300:
        raise DiscordWebhookError(response.status_code, response.reason, response.text)
