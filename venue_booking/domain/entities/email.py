from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EmailContent:
    subject: str
    text: str
    html: str


@dataclass(frozen=True)
class EmailMessage:
    to: tuple[str, ...]
    from_address: str
    content: EmailContent
    cc: tuple[str, ...] = field(default_factory=tuple)
    bcc: tuple[str, ...] = field(default_factory=tuple)
    reply_to: str | None = None
