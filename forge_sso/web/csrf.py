"""CSRF cookie invalidation."""

from starlette.responses import Response

from ..config import SSOSettings


class CSRFCookie:
    def __init__(self, settings: SSOSettings):
        self.settings = settings

    def delete(self, response: Response) -> None:
        """Expire the CSRF cookie so a new token is issued on the next render."""
        response.delete_cookie(
            self.settings.csrf_cookie_name,
            path=self.settings.cookie_path,
            secure=self.settings.cookie_secure,
            httponly=True,
        )
