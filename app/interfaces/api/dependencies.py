"""FastAPI dependency utilities."""

from fastapi import Header, HTTPException, status


def get_viewer_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the viewer identifier forwarded by the authentication gateway."""

    viewer_id = (x_user_id or "").strip()
    if not viewer_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return viewer_id
