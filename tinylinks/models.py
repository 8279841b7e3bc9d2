from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class ClickEvent:
    timestamp: datetime  # When the redirect happened (UTC)
    source: str          # Caller-supplied label, e.g. the client's User-Agent


# fmt: off
@dataclass(frozen=True)
class ShortcodeRecord:
    target: str                                                     # Original long URL
    shortcode: str                                                  # Unique short identifier of shortened URL
    validity: int                                                   # Minutes from creation until expiry
    created_at: datetime                                            # Creation instant (UTC), never changes
    clicks: int = 0                                                 # Number of recorded redirects
    click_events: tuple[ClickEvent, ...] = field(default_factory=tuple)  # Append-only click log
# fmt: on

    def with_click(self, event: ClickEvent, clicks: int | None = None) -> 'ShortcodeRecord':
        """Return a copy with `event` appended and the click counter advanced."""
        return replace(
            self,
            clicks=self.clicks + 1 if clicks is None else clicks,
            click_events=(*self.click_events, event),
        )


@dataclass(frozen=True)
class CreatedShortcode:
    shortcode: str
    expires_at: datetime


@dataclass(frozen=True)
class ShortcodeStats:
    clicks: int
    target: str
    created_at: datetime
    expires_at: datetime
    click_events: tuple[ClickEvent, ...]
