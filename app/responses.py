# =============================================================================
# app/responses.py - File Download Responses
# =============================================================================
# Turns an ExportedFile from the pipeline into an HTTP response.
# Exports are sent as attachments; previews are shown inline.
# =============================================================================

from fastapi.responses import Response

from lib.exporter import ExportedFile


def file_response(exported: ExportedFile, inline: bool = False) -> Response:
    """Response carrying the file bytes with a Content-Disposition header."""
    disposition = "inline" if inline else "attachment"
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'{disposition}; filename="{exported.filename}"',
            "X-Page-Count": str(exported.page_count),
        },
    )
