import sys
import logging
from pathlib import Path

from telegram import Update, BotCommand, LinkPreviewOptions, Message
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from config import (
    BOT_TOKEN,
    WEBHOOK_URL,
    PORT,
    WEBHOOK_PATH,
    LOG_LEVEL,
    LOG_FILE,
    DEFAULT_MEDIA_TYPE,
    SEND_MEDIA_PREVIEW,
    MEDIA_PREVIEW_TIMEOUT,
)
from services.link_router import extract_urls
from services.link_converter import ConversionResult, MediaType, MEDIA_TYPES, convert
from utils.message_builder import (
    TYPE_CALLBACK_PREFIX,
    VIEWER_TOGGLE_CALLBACK,
    build_keyboard,
    render_help,
    render_result,
)


# ─── Logging Setup ─────────────────────────────────────────
def setup_logging() -> None:
    """Configure structured logging to console and file."""
    log_format = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    try:
        log_dir = Path(LOG_FILE).parent
        if str(log_dir) != ".":
            log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))
    except OSError:
        pass  # File logging optional; console always works

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
    )


logger = logging.getLogger(__name__)

NO_LINK_PREVIEW = LinkPreviewOptions(is_disabled=True)

# user_data keys
INPUT_KEY = "input"
MEDIA_TYPE_KEY = "media_type"
OFFICE_VIEWER_KEY = "office_viewer"


# ─── Per-user UI state ─────────────────────────────────────
def _default_media_type() -> MediaType:
    try:
        return MediaType.parse(DEFAULT_MEDIA_TYPE)
    except ValueError:
        logger.warning(f"Unknown DEFAULT_MEDIA_TYPE {DEFAULT_MEDIA_TYPE!r}, using ppt")
        return MediaType.PPT


def _get_media_type(user_data: dict) -> MediaType:
    return user_data.get(MEDIA_TYPE_KEY) or _default_media_type()


def _set_media_type(user_data: dict, media_type: MediaType) -> None:
    user_data[MEDIA_TYPE_KEY] = media_type
    # Viewer toggle only exists for PPT
    if media_type is not MediaType.PPT:
        user_data[OFFICE_VIEWER_KEY] = False


def _current_result(user_data: dict) -> ConversionResult:
    return convert(
        user_data.get(INPUT_KEY, ""),
        _get_media_type(user_data),
        user_data.get(OFFICE_VIEWER_KEY, False),
    )


# ─── /start, /help ─────────────────────────────────────────
async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start and /help commands."""
    await update.message.reply_text(render_help(), parse_mode="Markdown")


# ─── /type ─────────────────────────────────────────────────
async def type_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /type <media>: switch media type and re-convert the last link."""
    user_data = context.user_data

    if context.args:
        try:
            _set_media_type(user_data, MediaType.parse(context.args[0]))
        except ValueError:
            names = ", ".join(f"`{mt.value}`" for mt in MediaType)
            await update.message.reply_text(
                f"❌ Unknown type. Choose one of: {names}", parse_mode="Markdown"
            )
            return

    await _reply_result(update.message, context)


# ─── /reset ────────────────────────────────────────────────
async def reset_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reset: forget the last link (media type is kept)."""
    context.user_data.pop(INPUT_KEY, None)
    context.user_data[OFFICE_VIEWER_KEY] = False
    await update.message.reply_text("🔄 Cleared. Paste a new link.")


# ─── Text Messages (links) ─────────────────────────────────
async def text_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle a text message containing the link to convert."""
    text = update.message.text.strip()
    # A single pasted token is the link verbatim; only prose gets URL extraction
    if text and not any(ch.isspace() for ch in text):
        context.user_data[INPUT_KEY] = text
    else:
        urls = extract_urls(text)
        context.user_data[INPUT_KEY] = urls[0] if urls else text

    await _reply_result(update.message, context)


# ─── Inline Buttons ────────────────────────────────────────
async def button_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle media-type picker and Microsoft viewer toggle presses."""
    query = update.callback_query
    await query.answer()

    user_data = context.user_data
    data = query.data or ""

    if data.startswith(TYPE_CALLBACK_PREFIX):
        try:
            media_type = MediaType.parse(data[len(TYPE_CALLBACK_PREFIX):])
        except ValueError:
            logger.warning(f"Ignoring unknown callback data: {data}")
            return
        _set_media_type(user_data, media_type)
    elif data == VIEWER_TOGGLE_CALLBACK:
        user_data[OFFICE_VIEWER_KEY] = not user_data.get(OFFICE_VIEWER_KEY, False)
    else:
        logger.warning(f"Ignoring unknown callback data: {data}")
        return

    media_type = _get_media_type(user_data)
    result = _current_result(user_data)
    await _safe_edit(
        query.message,
        render_result(result, media_type),
        parse_mode="Markdown",
        reply_markup=build_keyboard(result, media_type, user_data.get(OFFICE_VIEWER_KEY, False)),
        link_preview_options=NO_LINK_PREVIEW,
    )
    if data.startswith(TYPE_CALLBACK_PREFIX):
        await _send_media_preview(query.message, result, media_type)


# ─── Core Reply Pipeline ───────────────────────────────────
async def _reply_result(message: Message, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Convert → reply → (media preview)."""
    user_data = context.user_data
    media_type = _get_media_type(user_data)
    result = _current_result(user_data)

    if result.error:
        logger.info(f"Conversion error ({media_type.value}): {result.error}")
    else:
        logger.info(f"Converted {media_type.value}: {result.export_url}")

    try:
        await message.reply_text(
            render_result(result, media_type),
            parse_mode="Markdown",
            reply_markup=build_keyboard(result, media_type, user_data.get(OFFICE_VIEWER_KEY, False)),
            link_preview_options=NO_LINK_PREVIEW,
        )
    except TelegramError as e:
        logger.error(f"Failed to send result: {e}", exc_info=True)
        await message.reply_text(f"❌ Could not send the result: {str(e)[:200]}")
        return

    await _send_media_preview(message, result, media_type)


async def _send_media_preview(message: Message, result: ConversionResult, media_type: MediaType) -> None:
    """Let Telegram fetch image/video/audio previews by URL; ppt/pdf stay links."""
    if not SEND_MEDIA_PREVIEW or result.error or not result.preview_url:
        return

    caption = MEDIA_TYPES[media_type].label + " preview"
    try:
        if media_type is MediaType.IMAGE:
            await message.reply_photo(
                photo=result.preview_url, caption=caption, read_timeout=MEDIA_PREVIEW_TIMEOUT
            )
        elif media_type is MediaType.VIDEO:
            await message.reply_video(
                video=result.preview_url,
                caption=caption,
                supports_streaming=True,
                read_timeout=MEDIA_PREVIEW_TIMEOUT,
            )
        elif media_type is MediaType.AUDIO:
            await message.reply_audio(
                audio=result.preview_url, caption=caption, read_timeout=MEDIA_PREVIEW_TIMEOUT
            )
    except TelegramError as e:
        logger.warning(f"Media preview failed for {result.preview_url}: {e}")
        await message.reply_text(
            "⚠️ Preview couldn't be loaded. The file may not be public, "
            "or it isn't the selected type."
        )


# ─── Helpers ───────────────────────────────────────────────
async def _safe_edit(message, text: str, **kwargs) -> None:
    try:
        await message.edit_text(text, **kwargs)
    except TelegramError as e:
        logger.debug(f"Edit failed: {e}")


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Global error handler: logs all unhandled exceptions."""
    logger.error("Unhandled exception:", exc_info=context.error)


async def post_init(application: Application) -> None:
    """Runs once after the application is initialized."""
    await application.bot.set_my_commands([
        BotCommand("start", "Start the bot and see instructions"),
        BotCommand("help", "Show supported link types"),
        BotCommand("type", "Choose ppt, pdf, image, video or audio"),
        BotCommand("reset", "Clear the last link"),
    ])
    logger.info("Bot commands registered.")


def build_application(token: str) -> Application:
    app = (
        Application.builder()
        .token(token)
        .post_init(post_init)
        .build()
    )

    app.add_handler(CommandHandler(["start", "help"], start_handler))
    app.add_handler(CommandHandler("type", type_handler))
    app.add_handler(CommandHandler("reset", reset_handler))
    app.add_handler(CallbackQueryHandler(button_handler))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, text_handler))
    app.add_error_handler(error_handler)
    return app


# ─── Entry Point ───────────────────────────────────────────
def main() -> None:
    setup_logging()

    if not BOT_TOKEN:
        logger.critical("TELEGRAM_BOT_TOKEN is not set. Exiting.")
        sys.exit(1)

    app = build_application(BOT_TOKEN)

    if WEBHOOK_URL:
        logger.info(f"Starting webhook on port {PORT}: {WEBHOOK_URL}{WEBHOOK_PATH}")
        app.run_webhook(
            listen="0.0.0.0",
            port=PORT,
            url_path=WEBHOOK_PATH,
            webhook_url=f"{WEBHOOK_URL}{WEBHOOK_PATH}",
        )
    else:
        logger.info("Starting polling mode…")
        app.run_polling(allowed_updates=Update.ALL_TYPES, drop_pending_updates=True)


if __name__ == "__main__":
    main()
