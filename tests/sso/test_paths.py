"""Tests for the request path predicates."""

import pytest

from forge_sso.sso.paths import (
    is_api_path,
    is_attachment_download,
    is_git_or_lfs_path,
)


class TestAttachmentDownload:
    """Test attachment download detection."""

    def test_get_attachment(self, request_factory) -> None:
        assert is_attachment_download(request_factory("GET", "/attachments/abc"))

    def test_post_attachment(self, request_factory) -> None:
        assert not is_attachment_download(request_factory("POST", "/attachments/abc"))

    def test_other_path(self, request_factory) -> None:
        assert not is_attachment_download(request_factory("GET", "/owner/attachments/abc"))
        assert not is_attachment_download(request_factory("GET", "/attachments"))


class TestGitOrLFSPath:
    """Test Git smart-HTTP and LFS path detection."""

    @pytest.mark.parametrize(
        "path",
        [
            "/owner/repo/git-upload-pack",
            "/owner/repo/git-receive-pack",
            "/owner/repo/info/refs",
            "/owner/repo/HEAD",
            "/owner/repo/objects/info/packs",
            "/my.org/repo_name-1.git/info/refs",
        ],
    )
    def test_git_paths(self, request_factory, path: str) -> None:
        assert is_git_or_lfs_path(request_factory("GET", path), lfs_enabled=False)

    @pytest.mark.parametrize(
        "path",
        [
            "/owner/repo",
            "/owner/repo/issues",
            "/owner/repo/info/refs/extra",
            "/owner/repo/git-upload-pack/more",
            "/owner/sub/repo/info/refs",
        ],
    )
    def test_non_git_paths(self, request_factory, path: str) -> None:
        assert not is_git_or_lfs_path(request_factory("GET", path), lfs_enabled=True)

    def test_lfs_path_requires_lfs_server(self, request_factory) -> None:
        request = request_factory("POST", "/owner/repo/info/lfs/objects/x")

        assert is_git_or_lfs_path(request, lfs_enabled=True)
        assert not is_git_or_lfs_path(request, lfs_enabled=False)

    def test_lfs_batch_path(self, request_factory) -> None:
        request = request_factory("POST", "/owner/repo/info/lfs/objects/batch")
        assert is_git_or_lfs_path(request, lfs_enabled=True)


def test_is_api_path(request_factory) -> None:
    """Test API path detection."""
    assert is_api_path(request_factory("GET", "/api/v1/user"))
    assert not is_api_path(request_factory("GET", "/apidocs"))
    assert not is_api_path(request_factory("GET", "/user/login"))
