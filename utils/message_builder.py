"""
Message Builder
- Renders a ConversionResult as a Telegram (Markdown) message
- Builds the inline keyboard: media-type picker, viewer toggle, open buttons
"""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from telegram.helpers import escape_markdown

from services.link_converter import ConversionResult, MediaType, MEDIA_TYPES

TYPE_CALLBACK_PREFIX = "type:"
VIEWER_TOGGLE_CALLBACK = "viewer:toggle"


def _code(url: str) -> str:
    # Backticks would close the code span early.
    return f"`{url.replace('`', '%60')}`"


def _is_http_url(url: str | None) -> bool:
    return bool(url) and url.lower().startswith(("http://", "https://"))


def render_result(result: ConversionResult, media_type: MediaType) -> str:
    """Format *result* for a Markdown reply. Errors replace everything else."""
    label = MEDIA_TYPES[media_type].label

    if result.error:
        return f"❌ {escape_markdown(result.error)}"

    lines = [f"🔗 *{escape_markdown(label)}*"]
    if result.file_id:
        lines.append(f"File ID: {_code(result.file_id)}")
    if result.export_url:
        lines += ["", "*Export URL*", _code(result.export_url)]
    if result.embed_url and result.embed_url != result.preview_url:
        lines += ["", "*Embed URL*", _code(result.embed_url)]
    if result.preview_url:
        lines += ["", "*Preview URL*", _code(result.preview_url)]
    if result.notes:
        lines.append("")
        lines += [f"• {escape_markdown(note)}" for note in result.notes]
    return "\n".join(lines)


def build_keyboard(
    result: ConversionResult,
    media_type: MediaType,
    office_viewer_enabled: bool = False,
) -> InlineKeyboardMarkup:
    """Picker row, PPT-only viewer toggle, then open-link buttons."""
    picker = [
        InlineKeyboardButton(
            ("✅ " if mt is media_type else "") + MEDIA_TYPES[mt].label,
            callback_data=f"{TYPE_CALLBACK_PREFIX}{mt.value}",
        )
        for mt in MediaType
    ]
    rows = [picker[:3], picker[3:]]

    if media_type is MediaType.PPT:
        mark = "☑️" if office_viewer_enabled else "⬜"
        rows.append([
            InlineKeyboardButton(f"{mark} Microsoft viewer", callback_data=VIEWER_TOGGLE_CALLBACK)
        ])

    if result.ok:
        links = []
        if _is_http_url(result.export_url):
            links.append(InlineKeyboardButton("⬇️ Export", url=result.export_url))
        if _is_http_url(result.preview_url) and result.preview_url != result.export_url:
            links.append(InlineKeyboardButton("👁 Preview", url=result.preview_url))
        if links:
            rows.append(links)

    return InlineKeyboardMarkup(rows)


def render_help() -> str:
    lines = [
        "🤖 *Drive Link Converter*",
        "",
        "Send me a Google Drive / Docs / Slides / Sheets link, or any direct file URL.",
        "I'll reply with an export link and a preview link for the chosen type.",
        "",
        "*Types* (`/type <name>`):",
    ]
    for mt, info in MEDIA_TYPES.items():
        lines.append(f"• `{mt.value}`: {escape_markdown(info.label)} ({escape_markdown(info.hint)})")
        lines.append(f"  _{escape_markdown(info.description)}_")
    lines += [
        "",
        "/reset clears the last link.",
        "⚠️ Files must be shared publicly (Anyone with the link → Viewer).",
    ]
    return "\n".join(lines)
