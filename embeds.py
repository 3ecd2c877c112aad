"""
Embed building for push and release notifications.
Everything here is pure: the event context comes in as a parameter,
the caller decides when "now" is.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import discord

RELEASE_NOTES_LIMIT = 300
SHORT_SHA_LENGTH = 7
REF_PREFIXES = ('refs/heads/', 'refs/tags/')
HEX_COLOR = re.compile(r'[0-9a-fA-F]{1,6}')


@dataclass(frozen=True)
class Release:
    tag_name: str
    html_url: str
    name: Optional[str] = None
    body: Optional[str] = None

    @classmethod
    def from_payload(cls, release):
        """Build a Release from the `release` object of a webhook event"""
        return cls(
            tag_name=release['tag_name'],
            html_url=release['html_url'],
            name=release.get('name'),
            body=release.get('body'),
        )


@dataclass(frozen=True)
class EventContext:
    owner: str
    repo: str
    sha: str
    ref: str
    event_name: str
    release: Optional[Release] = None

    @property
    def full_name(self):
        return f"{self.owner}/{self.repo}"

    @property
    def repo_url(self):
        return f"https://github.com/{self.full_name}"


@dataclass(frozen=True)
class PushTarget:
    ref: str
    sha: str


@dataclass(frozen=True)
class ReleaseTarget:
    release: Release


@dataclass(frozen=True)
class Field:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class Notification:
    title: str
    url: str
    color: int
    timestamp: datetime
    footer: str
    fields: tuple = ()

    def to_embed(self):
        """Render as a discord.Embed"""
        embed = discord.Embed(
            title=self.title,
            url=self.url,
            color=self.color,
            timestamp=self.timestamp,
        )
        for f in self.fields:
            embed.add_field(name=f.name, value=f.value, inline=f.inline)
        embed.set_footer(text=self.footer)
        return embed


@dataclass(frozen=True)
class DeliveryPayload:
    username: str
    avatar_url: str
    content: str
    embeds: tuple = field(default_factory=tuple)

    def to_dict(self):
        return {
            'username': self.username,
            'avatar_url': self.avatar_url,
            'content': self.content,
            'embeds': [n.to_embed().to_dict() for n in self.embeds],
        }


def hex_to_decimal(value):
    """Convert an `8892be` / `#8892be` colour string to an integer"""
    cleaned = value.strip()
    if cleaned.startswith('#'):
        cleaned = cleaned[1:]
    if not HEX_COLOR.fullmatch(cleaned):
        raise ValueError(f"Invalid color {value!r}: expected a hex value between 000000 and ffffff")
    return int(cleaned, 16)


def branch_name(ref):
    """Strip refs/heads/ or refs/tags/ from a git ref"""
    for prefix in REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def truncate_text(text, limit):
    """Shorten text to `limit` characters, preferring a word boundary"""
    if len(text) <= limit:
        return text

    truncated = text[:limit]
    last_space = truncated.rfind(' ')
    if last_space > 0:
        return truncated[:last_space] + '...'
    return truncated + '...'


def classify(ctx):
    """Pick the rendering mode for an event"""
    if ctx.event_name == 'release' and ctx.release is not None:
        return ReleaseTarget(ctx.release)
    return PushTarget(ref=ctx.ref, sha=ctx.sha)


def release_title(release):
    return f"Release {release.tag_name}: {release.name or release.tag_name}"


def repository_field(ctx):
    return Field(name="📦 Repository", value=f"[{ctx.full_name}]({ctx.repo_url})")


def push_fields(ctx, target):
    short_sha = target.sha[:SHORT_SHA_LENGTH]
    commit_url = f"{ctx.repo_url}/commit/{target.sha}"
    return [
        repository_field(ctx),
        Field(name="🌿 Branch", value=branch_name(target.ref)),
        Field(name="🔗 Commit", value=f"[`{short_sha}`]({commit_url})"),
    ]


def release_fields(ctx, target):
    release = target.release
    fields = [
        repository_field(ctx),
        Field(name="🏷️ Version", value=release.tag_name),
    ]

    # Release notes go first, full width
    if release.body:
        notes = truncate_text(release.body, RELEASE_NOTES_LIMIT)
        fields.insert(0, Field(
            name="📝 Release Notes",
            value=f"{notes}\n\n[Read more →]({release.html_url})",
            inline=False,
        ))
    return fields


def build_notification(ctx, color, footer, now=None):
    """Create the Discord notification for a push-like or release event"""
    target = classify(ctx)

    if isinstance(target, ReleaseTarget):
        title = release_title(target.release)
        url = target.release.html_url
        fields = release_fields(ctx, target)
    else:
        title = ctx.full_name
        url = ctx.repo_url
        fields = push_fields(ctx, target)

    return Notification(
        title=title,
        url=url,
        color=hex_to_decimal(color),
        timestamp=now or datetime.now(timezone.utc),
        footer=footer,
        fields=tuple(fields),
    )
