import asyncio
import json

import pytest

from downloader_api.config.settings import config
from downloader_api.core.errors import ExtractionError
from downloader_api.services.ytdlp import (
    CompletedProcess,
    SubprocessExecutor,
    YTDLPCommandBuilder,
    detect_version,
    fetch_info,
)

VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def fake_run(monkeypatch, result=None, exc=None):
    """Replace the subprocess runner; returns the commands it was called with"""
    calls = []

    async def run(cmd, timeout):
        calls.append(cmd)
        if exc is not None:
            raise exc
        return result

    monkeypatch.setattr(SubprocessExecutor, "run", staticmethod(run))
    return calls


def test_build_info_command():
    cmd = YTDLPCommandBuilder.build_info_command(VIDEO_URL)
    assert cmd[0] == config.ytdlp.binary
    assert "--dump-json" in cmd
    assert "--no-playlist" in cmd
    assert cmd[-2:] == ["--", VIDEO_URL]

    single = YTDLPCommandBuilder.build_info_command(VIDEO_URL, single_json=True)
    assert "--dump-single-json" in single
    assert "--dump-json" not in single


def test_build_info_command_optional_flags(monkeypatch):
    monkeypatch.setattr(config.ytdlp, "cookies_file", "/etc/cookies.txt")
    monkeypatch.setattr(config.ytdlp, "js_runtime", "deno:/usr/local/bin/deno")
    cmd = YTDLPCommandBuilder.build_info_command(VIDEO_URL)
    assert cmd[cmd.index("--cookies") + 1] == "/etc/cookies.txt"
    assert cmd[cmd.index("--js-runtimes") + 1] == "deno:/usr/local/bin/deno"
    assert cmd.index("--cookies") < cmd.index("--")


@pytest.mark.asyncio
async def test_fetch_info_uses_first_line(monkeypatch):
    stdout = (json.dumps({"id": "first", "title": "One"}) + "\n" + json.dumps({"id": "second"}) + "\n").encode()
    calls = fake_run(monkeypatch, CompletedProcess(0, stdout, b""))

    info = await fetch_info(VIDEO_URL)
    assert info == {"id": "first", "title": "One"}
    assert "--dump-json" in calls[0]


@pytest.mark.asyncio
async def test_fetch_info_single_json(monkeypatch):
    payload = {"id": "post", "entries": [{"id": "clip"}]}
    stdout = json.dumps(payload, indent=2).encode()
    calls = fake_run(monkeypatch, CompletedProcess(0, stdout, b""))

    assert await fetch_info("https://www.instagram.com/p/C0abcdef/", single_json=True) == payload
    assert "--dump-single-json" in calls[0]


@pytest.mark.asyncio
async def test_fetch_info_nonzero_exit_keeps_stderr_tail(monkeypatch):
    stderr = b"WARNING: noise\n" * 100 + b"ERROR: [youtube] dQw4w9WgXcQ: Video unavailable\n"
    fake_run(monkeypatch, CompletedProcess(1, b"", stderr))

    with pytest.raises(ExtractionError) as excinfo:
        await fetch_info(VIDEO_URL)
    message = str(excinfo.value)
    assert message.endswith("Video unavailable")
    assert len(message) <= 300


@pytest.mark.asyncio
async def test_fetch_info_nonzero_exit_without_stderr(monkeypatch):
    fake_run(monkeypatch, CompletedProcess(2, b"", b""))

    with pytest.raises(ExtractionError, match="exited with code 2"):
        await fetch_info(VIDEO_URL)


@pytest.mark.asyncio
@pytest.mark.parametrize("stdout", [b"<html>not json</html>", b"", b"[1, 2, 3]"])
async def test_fetch_info_bad_output(monkeypatch, stdout):
    fake_run(monkeypatch, CompletedProcess(0, stdout, b""))

    with pytest.raises(ExtractionError):
        await fetch_info(VIDEO_URL)


@pytest.mark.asyncio
async def test_fetch_info_timeout(monkeypatch):
    fake_run(monkeypatch, exc=asyncio.TimeoutError())

    with pytest.raises(ExtractionError, match="timed out"):
        await fetch_info(VIDEO_URL)


@pytest.mark.asyncio
async def test_fetch_info_binary_missing(monkeypatch):
    fake_run(monkeypatch, exc=FileNotFoundError(2, "No such file or directory", "yt-dlp"))

    with pytest.raises(ExtractionError, match="Could not start yt-dlp"):
        await fetch_info(VIDEO_URL)


@pytest.mark.asyncio
async def test_detect_version(monkeypatch):
    fake_run(monkeypatch, CompletedProcess(0, b"2024.12.13\n", b""))
    assert await detect_version() == "2024.12.13"


@pytest.mark.asyncio
async def test_detect_version_failures(monkeypatch):
    fake_run(monkeypatch, exc=FileNotFoundError("yt-dlp"))
    assert await detect_version() == "unknown"

    fake_run(monkeypatch, CompletedProcess(1, b"", b"boom"))
    assert await detect_version() == "unknown"


@pytest.mark.asyncio
async def test_subprocess_executor_runs_command():
    result = await SubprocessExecutor.run(["sh", "-c", "printf out; printf err >&2; exit 3"], timeout=10.0)
    assert result == CompletedProcess(3, b"out", b"err")


@pytest.mark.asyncio
async def test_subprocess_executor_timeout_kills_process():
    with pytest.raises(asyncio.TimeoutError):
        await SubprocessExecutor.run(["sleep", "5"], timeout=0.1)
