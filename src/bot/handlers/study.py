"""
Study materials search and purchase dialogue.

Idle -> search matches -> awaiting_contact_details -> valid "name, email, phone"
-> one checkout link per result -> Idle. State lives in the dispatcher's FSM
storage, keyed per chat and user.
"""

import logging
from html import escape

from aiogram import F, Router
from aiogram.enums import ChatType
from aiogram.filters import Command, CommandObject, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from src.bot.keyboards.study import CANCEL_CALLBACK, get_cancel_keyboard, get_results_page_keyboard
from src.config import settings
from src.core.catalog import EmptyQuery, SearchResult, get_catalog, rank
from src.core.catalog.links import delivery_link
from src.core.orders import (
    ContactDetails,
    ContactDetailsValidator,
    OrderOutcome,
    OrderStatus,
    PendingOrder,
    StudyStates,
    format_outcomes,
)
from src.db.repository import interaction_log
from src.integrations.payments import PaymentFailure, get_default_gateway
from src.integrations.telegraph import PublishFailed, PublishUnavailable, telegraph_publisher

logger = logging.getLogger(__name__)

router = Router(name="study")


EMPTY_QUERY_MESSAGE = (
    "❌ Please enter a search term.\n"
    "Example: <code>/study mtg biology</code>"
)

GROUP_REFUSAL_MESSAGE = (
    "🔒 Searching and buying works in private chat only.\n"
    "Message me directly: @{username}"
)

CONTACT_PROMPT = (
    "To buy, send your details in one message:\n"
    "<b>Name, email, phone</b>\n"
    "Example: <code>John Doe, john@example.com, 9876543210</code>\n\n"
    "Price: ₹{amount:g} per item. /cancel to stop."
)

APOLOGY_MESSAGE = "❌ Something went wrong. Please try again later."


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def format_results(query: str, results: list[SearchResult], total: int) -> str:
    """Inline listing of search results."""
    lines = [f"🔍 Found <b>{total}</b> matches for <b>{escape(query)}</b>:", ""]
    for i, result in enumerate(results, 1):
        lines.append(
            f"{i}. {escape(result.item.label)} "
            f"<i>({escape(result.category_title)})</i> - {result.rank}%"
        )
    if total > len(results):
        lines.append("")
        lines.append(f"Showing the top {len(results)}.")
    return "\n".join(lines)


async def show_results(message: Message, query: str, results: list[SearchResult]) -> None:
    """Reply with the results, as a published page when the list is long."""
    pending = results[:settings.max_pending_results]
    prompt = CONTACT_PROMPT.format(amount=settings.payment_amount)

    if settings.telegraph_enabled and len(results) > settings.inline_results_limit:
        try:
            url = await telegraph_publisher.publish(query, results)
        except (PublishUnavailable, PublishFailed) as e:
            logger.warning(f"Publishing results for '{query}' failed, listing inline: {e}")
        else:
            await message.answer(
                f"🔍 Found <b>{len(results)}</b> matches for <b>{escape(query)}</b>.\n"
                f"The top {len(pending)} can be bought here.\n\n{prompt}",
                reply_markup=get_results_page_keyboard(url),
                disable_web_page_preview=True,
            )
            return

    await message.answer(
        f"{format_results(query, pending, len(results))}\n\n{prompt}",
        reply_markup=get_cancel_keyboard(),
    )


async def request_orders(
    chat_id: int,
    contact: ContactDetails,
    results: list[SearchResult],
) -> list[OrderOutcome]:
    """One gateway order per result; failures are reported, not retried."""
    gateway = get_default_gateway()
    outcomes = []

    for result in results:
        item = result.item
        telegram_link = delivery_link(item.key)
        created = await gateway.create_order(
            product_id=f"{chat_id}_{item.key}",
            product_name=item.label,
            amount=settings.payment_amount,
            telegram_link=telegram_link,
            customer_name=contact.name,
            customer_email=contact.email,
            customer_phone=contact.phone,
        )

        if isinstance(created, PaymentFailure):
            outcomes.append(OrderOutcome(
                label=item.label, status=OrderStatus.FAILED, reason=created.reason,
            ))
            continue

        outcomes.append(OrderOutcome(
            label=item.label,
            status=OrderStatus.CREATED,
            order=PendingOrder(
                order_id=created.order_id,
                item_key=item.key,
                telegram_link=telegram_link,
                customer_name=contact.name,
                customer_email=contact.email,
                customer_phone=contact.phone,
                checkout_url=created.checkout_url,
            ),
        ))

    return outcomes


async def notify_admin_failures(
    message: Message,
    contact: ContactDetails,
    outcomes: list[OrderOutcome],
) -> None:
    """Tell the admin about order requests the gateway rejected."""
    failed = [o for o in outcomes if not o.is_success]
    if not failed:
        return

    lines = [
        "⚠️ <b>Order creation failed</b>",
        f"Chat ID: {message.chat.id}",
        f"Customer: {escape(contact.name)} ({escape(contact.email)}, {contact.phone})",
        "",
    ]
    lines.extend(f"• {escape(o.label)}: {escape(o.reason or 'unknown error')}" for o in failed)

    try:
        await message.bot.send_message(settings.admin_id, "\n".join(lines))
    except Exception as e:
        logger.error(f"Failed to notify admin {settings.admin_id}: {e}", exc_info=True)


# =============================================================================
# SEARCH
# =============================================================================

async def start_search(message: Message, state: FSMContext, query: str) -> None:
    """Run a search and wait for contact details if anything matched."""
    if message.chat.type != ChatType.PRIVATE:
        await message.reply(GROUP_REFUSAL_MESSAGE.format(username=settings.bot_username))
        return

    try:
        results = rank(query, get_catalog())
    except EmptyQuery:
        await message.reply(EMPTY_QUERY_MESSAGE)
        return

    if not results:
        await state.clear()
        await message.reply(f'❌ No materials found for "{escape(query.strip())}".')
        return

    query = query.strip()
    pending = results[:settings.max_pending_results]
    logger.info(f"Search '{query}' in chat {message.chat.id}: {len(results)} matches")

    await show_results(message, query, results)
    await state.set_state(StudyStates.awaiting_contact_details)
    await state.set_data({"query": query, "results": [r.to_dict() for r in pending]})


@router.message(Command("study"))
async def handle_study(message: Message, command: CommandObject, state: FSMContext) -> None:
    """Handle /study <query>."""
    try:
        await start_search(message, state, command.args or "")
    except Exception as e:
        logger.error(f"Search failed in chat {message.chat.id}: {e}", exc_info=True)
        await state.clear()
        await message.answer(APOLOGY_MESSAGE)


# =============================================================================
# CANCEL
# =============================================================================

@router.message(Command("cancel"))
async def handle_cancel(message: Message, state: FSMContext) -> None:
    if await state.get_state() is None:
        await message.answer("Nothing to cancel. Send a subject or book name to search.")
        return

    await state.clear()
    await message.answer("❌ Purchase cancelled.")


@router.callback_query(F.data == CANCEL_CALLBACK)
async def handle_cancel_button(callback: CallbackQuery, state: FSMContext) -> None:
    await state.clear()
    await callback.answer("Cancelled")
    await callback.message.edit_reply_markup(reply_markup=None)
    await callback.message.answer("❌ Purchase cancelled.")


# =============================================================================
# CONTACT DETAILS
# =============================================================================

@router.message(StudyStates.awaiting_contact_details, F.text, ~F.text.startswith("/"))
async def handle_contact_details(message: Message, state: FSMContext) -> None:
    """Validate contact details and issue one checkout link per pending result."""
    is_valid, contact, error = ContactDetailsValidator.validate(message.text)
    if not is_valid:
        await message.answer(f"❌ {error}\n\nPlease try again.", reply_markup=get_cancel_keyboard())
        return

    try:
        data = await state.get_data()
        results = [SearchResult.from_dict(r) for r in data.get("results", [])]

        await interaction_log.save_chat(message.chat)

        await message.bot.send_chat_action(chat_id=message.chat.id, action="typing")
        outcomes = await request_orders(message.chat.id, contact, results)

        await message.answer(format_outcomes(outcomes), disable_web_page_preview=True)
        await notify_admin_failures(message, contact, outcomes)

        logger.info(
            f"Chat {message.chat.id}: {sum(o.is_success for o in outcomes)}/{len(outcomes)} "
            f"orders created for '{data.get('query')}'"
        )
    except Exception as e:
        logger.error(f"Purchase failed in chat {message.chat.id}: {e}", exc_info=True)
        await message.answer(APOLOGY_MESSAGE)
    finally:
        await state.clear()


# =============================================================================
# PLAIN TEXT SEARCH
# =============================================================================

@router.message(StateFilter(None), F.chat.type == ChatType.PRIVATE, F.text, ~F.text.startswith("/"))
async def handle_text_search(message: Message, state: FSMContext) -> None:
    """Plain text in a private chat is a search query."""
    try:
        await start_search(message, state, message.text)
    except Exception as e:
        logger.error(f"Search failed in chat {message.chat.id}: {e}", exc_info=True)
        await state.clear()
        await message.answer(APOLOGY_MESSAGE)
