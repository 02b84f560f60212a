"""
Application document routes.

Serves the lifecycle-specific PDF summary of an application.

Headers:
- Content-Type: application/pdf
- Content-Disposition: inline (default) or attachment (?download=1)
- Cache-Control: no-store, the document follows the application's state
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from src.api.deps import get_base_uri, get_document_generator
from src.components.application_document import ApplicationDocumentGenerator

router = APIRouter()

PDF_MEDIA_TYPE = "application/pdf"


def build_content_disposition(filename: str, download: bool = False) -> str:
    """inline displays in the browser, attachment prompts a download."""
    safe_filename = filename.replace('"', '\\"').replace("\n", "_")

    if download:
        return f'attachment; filename="{safe_filename}"'
    return f'inline; filename="{safe_filename}"'


@router.get("/{application_id}/document")
def get_application_document(
    application_id: UUID,
    download: bool = Query(False),
    generator: ApplicationDocumentGenerator = Depends(get_document_generator),
    base_uri: str = Depends(get_base_uri),
) -> Response:
    pdf = generator.generate(application_id, base_uri)
    if pdf is None:
        raise HTTPException(
            status_code=404,
            detail=f"No document available for application {application_id}",
        )

    return Response(
        content=pdf,
        media_type=PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": build_content_disposition(f"{application_id}.pdf", download),
            "Cache-Control": "no-store",
        },
    )
