import asyncio
import json
import logging
from typing import List, NamedTuple
from downloader_api.config.settings import config
from downloader_api.core.errors import ExtractionError

logger = logging.getLogger("downloader_api")

STDERR_TAIL_CHARS = 300

class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""
    
    @staticmethod
    async def run(cmd: List[str], timeout: float) -> CompletedProcess:
        """
        Run subprocess with timeout and proper cleanup.
        Prevents process leaks and ensures consistent error handling.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )
        
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )
            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        except Exception:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

class YTDLPCommandBuilder:
    """Build yt-dlp commands"""
    
    @staticmethod
    def build_info_command(url: str, single_json: bool = False) -> List[str]:
        """Build command for fetching video info"""
        cmd = [
            config.ytdlp.binary,
            '--dump-single-json' if single_json else '--dump-json',
            '--no-playlist',
            '--no-warnings',
            '--socket-timeout', str(config.ytdlp.socket_timeout),
            '--retries', str(config.ytdlp.retries),
        ]
        
        if config.ytdlp.js_runtime:
            cmd.extend(['--js-runtimes', config.ytdlp.js_runtime])

        if config.ytdlp.cookies_file:
            cmd.extend(['--cookies', config.ytdlp.cookies_file])
        
        # End of options, so a URL starting with '-' is never read as a flag
        cmd.extend(['--', url])
        
        return cmd

    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ytdlp.binary, '--version']

async def fetch_info(url: str, single_json: bool = False) -> dict:
    """Run yt-dlp and return the parsed info dict"""
    cmd = YTDLPCommandBuilder.build_info_command(url, single_json=single_json)

    try:
        result = await SubprocessExecutor.run(cmd, timeout=config.ytdlp.info_timeout_seconds)
    except asyncio.TimeoutError:
        raise ExtractionError(f"yt-dlp timed out after {config.ytdlp.info_timeout_seconds:g}s")
    except OSError as e:
        raise ExtractionError(f"Could not start yt-dlp: {e}")

    if result.returncode != 0:
        error_msg = result.stderr.decode(errors="ignore").strip()
        raise ExtractionError(error_msg[-STDERR_TAIL_CHARS:] or f"yt-dlp exited with code {result.returncode}")

    # --dump-json prints one object per line; with --no-playlist the first is the video
    stdout = result.stdout.decode(errors="ignore").strip()
    first_line = stdout.splitlines()[0] if stdout else ""
    try:
        info = json.loads(stdout if single_json else first_line)
    except json.JSONDecodeError:
        raise ExtractionError("Failed to parse yt-dlp output")

    if not isinstance(info, dict):
        raise ExtractionError("Unexpected yt-dlp output")
    return info

async def detect_version() -> str:
    try:
        result = await SubprocessExecutor.run(YTDLPCommandBuilder.build_version_command(), timeout=10.0)
    except (OSError, asyncio.TimeoutError) as e:
        logger.warning(f"yt-dlp version check failed: {e}")
        return "unknown"
    if result.returncode != 0:
        return "unknown"
    return result.stdout.decode(errors="ignore").strip() or "unknown"
