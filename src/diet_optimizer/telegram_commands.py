"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "What this bot does")
    DIET = TelegramCommand(
        "diet", "Balanced diet for one meal; /diet N for an N-meal shopping list"
    )
    HELP = TelegramCommand("help", "Diet commands and options")


class DietAction(Enum):
    """Arguments accepted by the /diet command."""

    CLEAR = "clear"
    STRICT = "strict"
    TASTE = "taste"
    HELP = "help"
    DEBUG = "debug"
    CONFIG = "config"


ADMIN_ACTIONS = frozenset({DietAction.DEBUG, DietAction.CONFIG})


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
