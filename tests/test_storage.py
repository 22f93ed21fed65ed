import re

import pytest

from portal.core.errors import BackendError, NotFoundError, ValidationError
from portal.core import storage as storage_module
from portal.core.storage import prefixed_path


@pytest.mark.asyncio
async def test_upload_download_remove(storage):
    await storage.upload("documents", "a/report.pdf", b"%PDF")

    assert await storage.exists("documents", "a/report.pdf")
    assert await storage.download("documents", "a/report.pdf") == b"%PDF"

    removed = await storage.remove("documents", ["a/report.pdf", "missing.pdf"])
    assert removed == ["a/report.pdf"]
    assert not await storage.exists("documents", "a/report.pdf")


@pytest.mark.asyncio
async def test_upload_refuses_to_overwrite(storage):
    await storage.upload("documents", "same.txt", b"1")
    with pytest.raises(BackendError):
        await storage.upload("documents", "same.txt", b"2")


@pytest.mark.asyncio
async def test_download_missing_file(storage):
    with pytest.raises(NotFoundError):
        await storage.download("documents", "nope.txt")


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["../escape.txt", "/etc/passwd", "a/../../b", ""])
async def test_rejects_unsafe_paths(storage, path):
    with pytest.raises(ValidationError):
        await storage.upload("documents", path, b"x")


def test_public_url_is_percent_encoded(storage):
    url = storage.public_url("chat_files", "chat-1/1700000000000_회의 자료.pdf")

    assert url.startswith("/storage/chat_files/chat-1/")
    assert " " not in url
    assert storage.path_from_public_url("chat_files", url) == "chat-1/1700000000000_회의 자료.pdf"


def test_prefixed_path_flattens_separators():
    assert re.fullmatch(r"meeting-1/\d{13}_a_b\.txt", prefixed_path("meeting-1", "a/b.txt"))
    assert prefixed_path("m", "").endswith("_file")


@pytest.mark.asyncio
async def test_file_io_runs_in_threadpool(storage, monkeypatch):
    offloaded = []
    original = storage_module.run_in_threadpool

    async def recording_threadpool(func, *args):
        offloaded.append(getattr(func, "__name__", repr(func)))
        return await original(func, *args)

    monkeypatch.setattr(storage_module, "run_in_threadpool", recording_threadpool)

    await storage.upload("documents", "a.txt", b"a")
    assert await storage.download("documents", "a.txt") == b"a"
    await storage.remove("documents", ["a.txt"])

    assert offloaded == ["_write", "read_bytes", "unlink"]
