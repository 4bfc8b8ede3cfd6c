"""Reads server log files to complement the replies given over RCON."""
import asyncio
import logging
from pathlib import Path

from .config import DEFAULT_LOGS_SUBDIR

log = logging.getLogger(__name__)

ACTIVE_LOG_NAMES = ("fxserver.log", "server.log")


class LogFileReader:
    """Finds and tails text log files written by the game server.

    :param logs_dir:
        The directory to search first. Relative fallbacks under the
        current working directory are searched afterwards.

    """

    def __init__(self, logs_dir: Path | str | None = None):
        self.logs_dir = Path(logs_dir) if logs_dir else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.logs_dir!r})"

    def find_log_dirs(self, logs_dir: Path | str | None = None) -> list[Path]:
        """Returns the existing directories that may contain server logs."""
        candidates = [
            Path(logs_dir) if logs_dir else self.logs_dir,
            DEFAULT_LOGS_SUBDIR,
            Path("txData", "default", "logs"),
            Path.cwd() / DEFAULT_LOGS_SUBDIR,
        ]

        found: list[Path] = []
        seen: set[Path] = set()
        for path in candidates:
            if path is None or not path.is_dir():
                continue

            resolved = path.resolve()
            if resolved not in seen:
                seen.add(resolved)
                found.append(path)

        return found

    def find_files(self, logs_dir: Path | str | None = None) -> list[Path]:
        """Returns the log files to read, most relevant first.

        The active ``fxserver.log`` and ``server.log`` files come first.
        When no ``fxserver.log`` exists, the newest dated
        ``fxserver_*.log`` is included in its place.

        """
        files: list[Path] = []

        for directory in self.find_log_dirs(logs_dir):
            for name in ACTIVE_LOG_NAMES:
                path = directory / name
                if path.is_file():
                    files.append(path)

            if not (directory / "fxserver.log").is_file():
                dated = _newest_first(directory.glob("fxserver_*.log"))
                if dated:
                    files.append(dated[0])

        return list(dict.fromkeys(files))

    async def read_last_lines(
        self,
        path: Path | str,
        lines: int,
        filter: str | None = None,
    ) -> str | None:
        """Reads the last non-blank lines of a file, like ``tail -n``.

        :param path: The file to read.
        :param lines: The maximum number of lines to return.
        :param filter:
            If given, only lines containing this text
            (case-insensitive) are considered.
        :returns: The joined lines, or ``None`` if nothing matched.
        :raises OSError: The file could not be read.

        """
        return await asyncio.to_thread(_tail, Path(path), lines, filter)

    async def read_console_logs(self, lines: int = 100) -> str | None:
        """Returns the last lines of every server log file, or ``None``
        if no log files could be found.
        """
        paths = self.find_files()
        if not paths:
            log.debug("no server log files found")
            return None

        sections = ["=== FIVEM SERVER CONSOLE LOGS ===\n"]
        for path in paths:
            try:
                content = await self.read_last_lines(path, lines)
            except OSError as e:
                log.warning(f"could not read {path}: {e}")
                sections.append(f"--- {path.name} ---\nError reading file: {e}\n")
            else:
                if content:
                    sections.append(f"--- {path.name} ---\n{content}\n")

        return "\n".join(sections)

    async def read_plugin_logs(
        self,
        lines: int = 50,
        plugin_name: str | None = None,
    ) -> str | None:
        """Returns the last lines written by server scripts.

        :param lines: The maximum number of lines per file.
        :param plugin_name:
            If given, only lines written by this plugin are returned.
            The ``script:<name>`` prefix is matched case-sensitively.
        :returns: The matching lines, or ``None`` if none were found.

        """
        marker = f"script:{plugin_name}" if plugin_name else "script:"

        sections = ["=== FIVEM SERVER PLUGIN LOGS ===\n"]
        for path in self.find_files():
            try:
                content = await self.read_last_lines(path, lines, marker)
            except OSError as e:
                log.debug(f"skipping unreadable log file {path}: {e}")
                continue

            # Script prefixes are written in lowercase by the server
            if content:
                content = "\n".join(row for row in content.split("\n") if marker in row)
            if content:
                sections.append(f"--- {path.name} (Server Plugin Logs) ---\n{content}\n")

        return "\n".join(sections) if len(sections) > 1 else None


def _newest_first(paths) -> list[Path]:
    return sorted(paths, key=lambda p: p.stat().st_mtime, reverse=True)


def _tail(path: Path, lines: int, filter: str | None) -> str | None:
    if lines <= 0 or path.stat().st_size == 0:
        return None

    text = path.read_text(encoding="utf-8", errors="replace")
    rows = [row for row in text.split("\n") if row.strip()]

    if filter:
        needle = filter.lower()
        rows = [row for row in rows if needle in row.lower()]

    rows = rows[-lines:]
    return "\n".join(rows) if rows else None
