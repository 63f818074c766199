from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import pass_context

from app.services.student.uploads import is_external_ref

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@pass_context
def avatar_src(context, ref: Optional[str]) -> str:
    """
    Image URL for an avatar ref.

    Local refs are served from the uploads mount, external URLs are used
    as-is, and anything else falls back to the placeholder.
    """
    request: Request = context["request"]
    current = request.app.state.settings
    uploads = request.app.state.uploads
    if uploads.is_local_ref(ref):
        return f"{current.UPLOAD_URL_PREFIX.rstrip('/')}/{ref}"
    if is_external_ref(ref):
        return ref
    return current.PLACEHOLDER_IMAGE_URL


templates.env.filters["avatar_src"] = avatar_src
