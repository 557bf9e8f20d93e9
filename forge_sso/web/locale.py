"""Locale negotiation and the locale cookie."""

from starlette.requests import Request
from starlette.responses import Response

from ..config import SSOSettings


def parse_accept_language(header: str) -> list[str]:
    """Return the language tags of an Accept-Language header, best first."""
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if quality <= 0:
            continue
        weighted.append((-quality, index, tag))
    return [tag for _, _, tag in sorted(weighted)]


class Locale:
    """Pick a supported language for a request and remember it in a cookie."""

    def __init__(self, settings: SSOSettings):
        self.settings = settings

    def match(self, tag: str) -> str | None:
        """Map a language tag to a supported one, exact match first."""
        lowered = tag.lower()
        for lang in self.settings.langs:
            if lang.lower() == lowered:
                return lang
        primary = lowered.split("-")[0]
        for lang in self.settings.langs:
            if lang.lower().split("-")[0] == primary:
                return lang
        return None

    def negotiate(self, request: Request, response: Response) -> str:
        """Pick the language from ``?lang=``, the cookie, then Accept-Language.

        A language chosen through the query parameter is also written to the
        locale cookie.
        """
        requested = request.query_params.get("lang")
        if requested:
            lang = self.match(requested)
            if lang:
                self.set_cookie(response, lang, 0)
                return lang

        cookie_lang = request.cookies.get(self.settings.locale_cookie_name)
        if cookie_lang:
            lang = self.match(cookie_lang)
            if lang:
                return lang

        for tag in parse_accept_language(request.headers.get("accept-language", "")):
            lang = self.match(tag)
            if lang:
                return lang

        return self.settings.default_lang

    def set_cookie(self, response: Response, language: str, max_age: int) -> None:
        """Set the locale cookie; a ``max_age`` of 0 makes it a session cookie."""
        response.set_cookie(
            self.settings.locale_cookie_name,
            language,
            max_age=max_age or None,
            path=self.settings.cookie_path,
            secure=self.settings.cookie_secure,
            httponly=True,
        )
