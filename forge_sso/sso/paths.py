"""Request path predicates that decide which SSO methods may run."""

import re

from starlette.requests import Request

ATTACHMENTS_PREFIX = "/attachments/"
API_PREFIX = "/api/"

GIT_PATH_RE = re.compile(
    r"^/[a-zA-Z0-9_.-]+/[a-zA-Z0-9_.-]+/"
    r"(?:(?:git-(?:(?:upload)|(?:receive))-pack$)|(?:info/refs$)|(?:HEAD$)|(?:objects/))"
)
LFS_PATH_RE = re.compile(r"^/[a-zA-Z0-9_.-]+/[a-zA-Z0-9_.-]+/info/lfs/")


def is_api_path(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def is_attachment_download(request: Request) -> bool:
    """Check if the request is a GET for an attachment file."""
    return request.url.path.startswith(ATTACHMENTS_PREFIX) and request.method == "GET"


def is_git_or_lfs_path(request: Request, lfs_enabled: bool) -> bool:
    """Check if the request targets Git smart-HTTP or, when LFS is served, LFS."""
    path = request.url.path
    if GIT_PATH_RE.match(path):
        return True
    if lfs_enabled:
        return LFS_PATH_RE.match(path) is not None
    return False
