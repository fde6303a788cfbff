"""
Link Converter: turns a pasted link plus a chosen media type into an
export URL and a preview URL.

Pure and synchronous: no network access, no shared state. Every failure is
returned as ConversionResult.error, never raised.

Usage:
    result = convert(text, MediaType.PDF)
    if result.ok:
        print(result.export_url, result.preview_url)
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from services.link_router import LinkType, classify
from services.url_builder import (
    drive_direct_download,
    drive_direct_view,
    slides_export_pptx,
    slides_export_pdf,
    document_export_pdf,
    slides_embed,
    docs_viewer,
    office_viewer,
)

logger = logging.getLogger(__name__)

EMPTY_INPUT_ERROR = "Paste a link first."
UNRESOLVABLE_GOOGLE_LINK_ERROR = (
    "This looks like a Google link, but I couldn't extract the file ID. "
    "Please paste a full Drive/Docs link."
)

NOT_A_DRIVE_LINK_NOTE = "This is not a Google Drive link. Using it as-is."
OFFICE_VIEWER_NOTE = "Microsoft viewer enabled for preview."


class MediaType(Enum):
    """Target media type chosen by the user, never inferred from the link."""
    PPT = "ppt"
    PDF = "pdf"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        return cls(value.strip().lower())


@dataclass(frozen=True)
class MediaTypeInfo:
    label: str
    hint: str
    description: str


MEDIA_TYPES: dict[MediaType, MediaTypeInfo] = {
    MediaType.PPT: MediaTypeInfo(
        "PPT / PPTX",
        "Preview via Slides embed or Microsoft viewer",
        "PowerPoint Presentation - Slideshow format for presentations",
    ),
    MediaType.PDF: MediaTypeInfo(
        "PDF",
        "Preview via Google Docs Viewer",
        "Portable Document Format - Universal document format for viewing and sharing",
    ),
    MediaType.IMAGE: MediaTypeInfo(
        "Image",
        "Sent as a photo",
        "Image File - Pictures and graphics in various formats (PNG, JPG, GIF, etc.)",
    ),
    MediaType.VIDEO: MediaTypeInfo(
        "Video",
        "Sent as a video",
        "Video File - Motion picture content in formats like MP4, WebM, etc.",
    ),
    MediaType.AUDIO: MediaTypeInfo(
        "Audio",
        "Sent as audio",
        "Audio File - Sound content in formats like MP3, WAV, OGG, etc.",
    ),
}


@dataclass(frozen=True)
class ConversionResult:
    file_id: Optional[str] = None
    export_url: Optional[str] = None
    embed_url: Optional[str] = None
    preview_url: Optional[str] = None
    notes: tuple[str, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve(raw_input: str, media_type: MediaType) -> ConversionResult:
    """Build the export / preview URLs for *raw_input* as *media_type*."""
    raw = raw_input.strip()
    if not raw:
        return ConversionResult(error=EMPTY_INPUT_ERROR)

    link = classify(raw)

    if link.is_google_hosted and link.file_id is None:
        return ConversionResult(error=UNRESOLVABLE_GOOGLE_LINK_ERROR)

    if link.link_type is LinkType.DIRECT:
        logger.debug(f"Direct link as {media_type.value}: {raw}")
        return _resolve_direct(raw, media_type)

    logger.debug(f"Google file {link.file_id} as {media_type.value}")
    return _resolve_google(raw, link.file_id, media_type)


def apply_viewer_override(
    result: ConversionResult,
    media_type: MediaType,
    office_viewer_enabled: bool,
) -> ConversionResult:
    """
    Swap the PPT preview for the Microsoft Office viewer.
    export_url and embed_url are kept as they are.
    """
    if media_type is not MediaType.PPT or not office_viewer_enabled or not result.export_url:
        return result
    return replace(
        result,
        preview_url=office_viewer(result.export_url),
        notes=result.notes + (OFFICE_VIEWER_NOTE,),
    )


def convert(
    raw_input: str,
    media_type: MediaType,
    office_viewer_enabled: bool = False,
) -> ConversionResult:
    """resolve() followed by the caller's viewer override."""
    return apply_viewer_override(resolve(raw_input, media_type), media_type, office_viewer_enabled)


# ─── Internal ──────────────────────────────────────────────

def _resolve_direct(direct: str, media_type: MediaType) -> ConversionResult:
    if media_type is MediaType.PPT:
        return ConversionResult(
            export_url=direct,
            preview_url=office_viewer(direct),
            notes=(
                NOT_A_DRIVE_LINK_NOTE,
                "For PPT preview, the URL must be publicly accessible.",
            ),
        )

    if media_type is MediaType.PDF:
        return ConversionResult(
            export_url=direct,
            preview_url=docs_viewer(direct),
            notes=(
                NOT_A_DRIVE_LINK_NOTE,
                "If the PDF doesn't render, ensure the link is public and allows direct access.",
            ),
        )

    # image / video / audio play the URL directly
    return ConversionResult(
        export_url=direct,
        preview_url=direct,
        notes=(NOT_A_DRIVE_LINK_NOTE,),
    )


def _resolve_google(raw: str, file_id: str, media_type: MediaType) -> ConversionResult:
    if media_type is MediaType.PPT:
        # Slides embed is the default preview; the Office viewer is opt-in.
        embed_url = slides_embed(file_id)
        return ConversionResult(
            file_id=file_id,
            export_url=slides_export_pptx(file_id),
            embed_url=embed_url,
            preview_url=embed_url,
            notes=(
                "Export URL downloads as PPTX.",
                "Preview uses Google Slides embed.",
                "If you want PPT-style preview, switch to Microsoft viewer.",
            ),
        )

    if media_type is MediaType.PDF:
        export_url = _pdf_export_url(raw, file_id)
        return ConversionResult(
            file_id=file_id,
            export_url=export_url,
            preview_url=docs_viewer(export_url),
            notes=(
                "Preview uses Google Docs Viewer.",
                "Make sure the file is shared publicly (Anyone with the link → Viewer).",
            ),
        )

    if media_type is MediaType.IMAGE:
        export_url = drive_direct_view(file_id)
        return ConversionResult(
            file_id=file_id,
            export_url=export_url,
            preview_url=export_url,
            notes=(
                "This works best when the Drive file is actually an image.",
                "If it fails, your file may not be an image or it may not be public.",
            ),
        )

    export_url = drive_direct_download(file_id)
    if media_type is MediaType.VIDEO:
        notes = (
            "For Drive videos, direct playback depends on CORS and file permissions.",
            "If it doesn't play, try hosting on a CDN or use a streaming server.",
        )
    else:
        notes = (
            "For Drive audio, direct playback depends on permissions and browser support.",
        )
    return ConversionResult(
        file_id=file_id,
        export_url=export_url,
        preview_url=export_url,
        notes=notes,
    )


def _pdf_export_url(raw: str, file_id: str) -> str:
    """Pick the PDF export endpoint from the product the link came from."""
    lower = raw.lower()
    export_url = drive_direct_download(file_id)

    if "docs.google.com/presentation" in lower:
        export_url = slides_export_pdf(file_id)
    elif "docs.google.com/document" in lower:
        export_url = document_export_pdf(file_id)
    elif "docs.google.com/spreadsheets" in lower:
        # Sheets PDF export needs extra params; stays on Drive download.
        export_url = drive_direct_download(file_id)

    return export_url
