"""Data models for Google Chat card messages.

The classes mirror the ``cardsV2`` schema of the Google Chat API and
render themselves into the wire dictionaries with ``to_dict()``.
"""

from dataclasses import dataclass
from typing import Any

DEFAULT_CARD_ID = "createCardMessage"


@dataclass(frozen=True)
class CardHeader:
    """Card header shown above the sections."""

    title: str
    subtitle: str
    image_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "imageUrl": self.image_url,
        }


@dataclass(frozen=True)
class DecoratedText:
    """Text widget; ``text`` may contain Google Chat's HTML subset."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"decoratedText": {"text": self.text}}


@dataclass(frozen=True)
class Button:
    """Button that opens a link when clicked."""

    text: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "onClick": {"openLink": {"url": self.url}}}


@dataclass(frozen=True)
class ButtonList:
    """Widget holding a row of buttons."""

    buttons: tuple[Button, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"buttonList": {"buttons": [button.to_dict() for button in self.buttons]}}


Widget = DecoratedText | ButtonList


@dataclass(frozen=True)
class CardSection:
    """A group of widgets."""

    widgets: tuple[Widget, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"widgets": [widget.to_dict() for widget in self.widgets]}


@dataclass(frozen=True)
class Card:
    """A card: header plus sections."""

    header: CardHeader
    sections: tuple[CardSection, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass(frozen=True)
class ChatCardMessage:
    """A complete webhook message carrying one card."""

    card: Card
    card_id: str = DEFAULT_CARD_ID

    def to_dict(self) -> dict[str, Any]:
        # cardsV2 is sent as a single object, not a list
        return {"cardsV2": {"cardId": self.card_id, "card": self.card.to_dict()}}
