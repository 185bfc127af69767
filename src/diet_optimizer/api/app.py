"""FastAPI application factory."""

import html
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool

from diet_optimizer.api.admin import router as admin_router
from diet_optimizer.api.telegram_models import TelegramUpdate
from diet_optimizer.app_logging import configure_logging
from diet_optimizer.config import parse_user_ids
from diet_optimizer.containers import AppContainer
from diet_optimizer.domain.diet import (
    DietPlan,
    Recommendation,
    RecommendationStatus,
)
from diet_optimizer.domain.taste import TasteListing
from diet_optimizer.telegram_commands import (
    ADMIN_ACTIONS,
    CHAT_MENU_BUTTON,
    BotCommand,
    DietAction,
    telegram_commands,
)

USAGE = "Usage: /diet [meals | clear | strict | taste | help]"
NO_DIET = (
    "Could not find a suitable diet. Try discovering/tasting more foods "
    "or toggling Strict Mode (/diet strict)!"
)
PERMISSION_DENIED = "Permission Denied: This command is for admins only."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_user_ids(container.settings.telegram_allowed_user_ids)
    admin_user_ids = parse_user_ids(container.settings.telegram_admin_user_ids)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        message = update.message
        if message is None or not message.text:
            return {"status": "ok"}
        user_id = message.from_user.id
        if not _is_user_allowed(user_id, allowed_user_ids):
            await state_container.telegram_client.send_message(
                chat_id=message.chat.id, text="This bot is private."
            )
            return {"status": "ok"}

        command, arg = _split_command(message.text)
        if command in {BotCommand.START.value.command, BotCommand.HELP.value.command}:
            reply = _format_help()
        elif command == BotCommand.DIET.value.command:
            is_admin = admin_user_ids is not None and user_id in admin_user_ids
            try:
                reply = await run_in_threadpool(
                    _handle_diet, state_container, str(user_id), arg, is_admin
                )
            except Exception as exc:
                logger.exception("Diet command failed", extra={"user_id": user_id})
                reply = _format_error(state_container, exc)
        else:
            return {"status": "ok"}

        for chunk in reply:
            await state_container.telegram_client.send_message(
                chat_id=message.chat.id, text=chunk
            )
        return {"status": "ok"}

    return app


def _handle_diet(  # noqa: PLR0911
    container: AppContainer, user_id: str, arg: str, is_admin: bool
) -> list[str]:
    """Run a /diet command and return the messages to send back."""
    service = container.diet_service
    if not arg:
        return _format_recommendation(service.recommend(user_id))
    if arg.isdigit():
        return _format_recommendation(service.recommend(user_id, meals=int(arg)))

    parts = arg.split()
    action = _parse_action(parts[0])
    if action is None:
        return [USAGE]
    if action in ADMIN_ACTIONS and not is_admin:
        return [PERMISSION_DENIED]
    if action is DietAction.CLEAR:
        if service.clear(user_id):
            return ["Diet cache cleared."]
        return ["No cached diet found."]
    if action is DietAction.STRICT:
        state = "ON" if service.toggle_strict() else "OFF"
        return [f"Strict Discovery Mode (Only Tasted Foods) is now {state}."]
    if action is DietAction.TASTE:
        return [_format_taste_listing(service.taste_listing(user_id))]
    if action is DietAction.HELP:
        return [_format_help()]
    if action is DietAction.DEBUG:
        state = "ON" if service.toggle_debug() else "OFF"
        return [f"Debug mode is now {state}."]
    if len(parts) > 1 and parts[1].isdigit():
        minutes = int(parts[1])
        service.set_cooldown(minutes)
        return [f"Diet cooldown set to {minutes} minutes (Global)."]
    return ["Usage: /diet config <minutes>"]


def _split_command(text: str) -> tuple[str, str]:
    """Split '/cmd@bot args' into ('cmd', 'args')."""
    head, _, rest = text.strip().partition(" ")
    if not head.startswith("/"):
        return "", ""
    command = head[1:].split("@", maxsplit=1)[0].lower()
    return command, rest.strip()


def _parse_action(raw: str) -> DietAction | None:
    try:
        return DietAction(raw.lower())
    except ValueError:
        return None


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    """Return true when the user is allowed to interact with the bot."""
    return allowed is None or user_id in allowed


def _format_error(state_container: AppContainer, exc: Exception) -> list[str]:
    """Return a user-facing error message with local debug info."""
    fallback = "Sorry, something went wrong while planning your diet."
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return [f"{fallback} (debug: {detail})"]
    return [fallback]


def _format_recommendation(result: Recommendation) -> list[str]:
    """Format a recommendation, its shopping list and cooldown notice."""
    messages: list[str] = []
    if result.status is not RecommendationStatus.CACHED:
        messages.append(_progress_notice(result))
    if result.plan is None:
        messages.append(NO_DIET)
        return messages
    if result.meals > 0:
        messages.append(_format_shopping_list(result.plan, result.names, result.meals))
    else:
        messages.append(_format_diet(result.plan, result.names))
    if result.remaining is not None:
        messages.append(_format_cooldown(result.remaining))
    return messages


def _progress_notice(result: Recommendation) -> str:
    if result.meals > 0 and not result.had_previous:
        return "No cached diet found. Calculating new one..."
    if result.meals > 0:
        return "Diet cache expired. Recalculating..."
    return "Calculating diet..."


def _format_diet(plan: DietPlan, names: dict[str, str]) -> str:
    """Format a single-meal plan for Telegram."""
    lines = [
        f"<b>Recommended Diet</b> (Score: {plan.score:.2f}, "
        f"Cals: {plan.total_calories:.0f}, Tier: {plan.average_tier:.1f}, "
        f"Taste: {plan.average_taste_score:.1f})",
        "<b>Eat (Per Meal):</b>",
    ]
    for food_id, count in plan.foods.items():
        lines.append(f"- {_food_name(food_id, names)}: {count}")
    shares = plan.macro_percentages()
    lines.append(
        f"Expected balance: Carbs: {shares['carbs']:.1f}%, "
        f"Protein: {shares['protein']:.1f}%, "
        f"Fat: {shares['fat']:.1f}%, "
        f"Vitamins: {shares['vitamins']:.1f}%"
    )
    return "\n".join(lines)


def _format_shopping_list(plan: DietPlan, names: dict[str, str], meals: int) -> str:
    """Format the plan multiplied over several meals."""
    lines = [f"<b>Shopping List for {meals} Meals</b>"]
    for food_id, count in plan.scaled(meals).items():
        lines.append(f"- {_food_name(food_id, names)}: {count}")
    return "\n".join(lines)


def _format_cooldown(remaining: timedelta) -> str:
    total_seconds = int(remaining.total_seconds())
    if total_seconds < 60:
        return f"Diet updated recently. Next update in {total_seconds} seconds."
    hours, rest = divmod(total_seconds, 3600)
    return f"Next diet update available in {hours}h {rest // 60}m."


def _format_taste_listing(listing: TasteListing) -> str:
    lines = [
        f"<b>Favorite</b>: {html.escape(listing.favorite or 'Unknown')}",
        f"<b>Worst</b>: {html.escape(listing.worst or 'Unknown')}",
    ]
    for label, foods in listing.groups.items():
        lines.append(f"--- <b>{label.value}</b> ---")
        lines.extend(f"- {html.escape(food)}" for food in foods)
    lines.append("")
    lines.append(f"Total of known foods: {listing.total}")
    return "\n".join(lines)


def _format_help() -> str:
    return "\n".join(
        [
            "<b>Diet Optimizer</b>",
            "Suggests the best balanced diet for your stomach size and known "
            "food preferences, aiming for 25% each of Carbs, Fat, Protein "
            "and Vitamins.",
            "",
            "<b>User Commands:</b>",
            "- <b>/diet</b>: Best balanced diet for 1 meal "
            "(only tasted foods by default).",
            "- <b>/diet N</b>: Shopping list for N meals from the current "
            "suggestion.",
            "- <b>/diet taste</b>: Your discovered foods grouped by taste.",
            "- <b>/diet clear</b>: Clear the cached suggestion and recalculate "
            "next time.",
            "- <b>/diet strict</b>: Toggle strict discovery mode "
            "(On: only tasted foods. Off: all foods).",
            "",
            "<b>Admin Commands:</b>",
            "- <b>/diet config N</b>: Set the global recalculation cooldown to "
            "N minutes.",
            "- <b>/diet debug</b>: Toggle verbose logging.",
        ]
    )


def _food_name(food_id: str, names: dict[str, str]) -> str:
    return html.escape(names.get(food_id, food_id))
