"""Script Filter feed returned to the launcher."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, TextIO

ICON_WORKFLOW = "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources/AutomatorIcon.icns"
ICON_WARNING = "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources/AlertCautionIcon.icns"
ICON_BUSY = "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources/Sync.icns"


class FeedError(ValueError):
    """Raised for invalid feed items or a feed sent twice."""


@dataclass
class FeedItem:
    """One selectable row in the launcher's result list."""

    title: str
    subtitle: str = ""
    uid: str | None = None
    arg: str | None = None
    autocomplete: str | None = None
    valid: bool = False
    icon: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title, "subtitle": self.subtitle, "valid": self.valid}
        if self.uid:
            payload["uid"] = self.uid
        if self.arg is not None:
            payload["arg"] = self.arg
        if self.autocomplete is not None:
            payload["autocomplete"] = self.autocomplete
        if self.icon:
            payload["icon"] = {"path": self.icon}
        return payload


@dataclass
class Feed:
    items: List[FeedItem] = field(default_factory=list)
    sent: bool = False

    def add_item(self, title: str, subtitle: str = "", **options: Any) -> FeedItem:
        if not isinstance(title, str) or not title.strip():
            raise FeedError("Feed item title must be a non-empty string")
        item = FeedItem(title=title, subtitle=subtitle, **options)
        self.items.append(item)
        return item

    def warn_empty(self, title: str, subtitle: str = "") -> None:
        if self.items:
            return
        self.add_item(title, subtitle, icon=ICON_WARNING)

    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}

    def send(self, stream: TextIO | None = None) -> None:
        if self.sent:
            raise FeedError("Feed already sent")
        out = stream if stream is not None else sys.stdout
        out.write(json.dumps(self.to_dict(), ensure_ascii=False) + "\n")
        out.flush()
        self.sent = True


__all__ = ["Feed", "FeedError", "FeedItem", "ICON_BUSY", "ICON_WARNING", "ICON_WORKFLOW"]
