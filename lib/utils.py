# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import time

_WHITESPACE = re.compile(r"\s+")

DEFAULT_FILENAME = "video"

# Longest single path component most filesystems accept, in bytes
MAX_FILENAME_BYTES = 255

# Stored files are written as ".{name}.part" first, then renamed
TEMP_PREFIX = "."
TEMP_SUFFIX = ".part"


# =============================================================================
# Filename Utilities
# =============================================================================

def _truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", "ignore")


def sanitize_filename(filename: str | None, max_bytes: int = MAX_FILENAME_BYTES) -> str:
    """
    Reduce a client-supplied filename to a safe basename.

    Directory components are dropped and every run of whitespace becomes a
    single underscore. Names longer than max_bytes (UTF-8) lose the end of
    their stem; the extension is kept.

    Example:
        sanitize_filename("my holiday  clip.mp4")  # "my_holiday_clip.mp4"
        sanitize_filename("../../etc/passwd")      # "passwd"
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _WHITESPACE.sub("_", name)
    if name in ("", ".", ".."):
        return DEFAULT_FILENAME

    if len(name.encode("utf-8")) <= max_bytes:
        return name

    stem, dot, extension = name.rpartition(".")
    suffix = dot + extension
    if not stem or len(suffix.encode("utf-8")) >= max_bytes // 2:
        # No usable extension to keep
        return _truncate_utf8(name, max_bytes)
    return _truncate_utf8(stem, max_bytes - len(suffix.encode("utf-8"))) + suffix


def epoch_millis() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def build_stored_filename(original: str | None, now_ms: int | None = None) -> str:
    """
    Name an upload on disk as "{epoch_millis}-{sanitized original name}".

    The name is kept short enough that its temporary ".{name}.part" form
    still fits in MAX_FILENAME_BYTES. Two uploads of the same name in the
    same millisecond get the same name.
    """
    stamp = epoch_millis() if now_ms is None else now_ms
    prefix = f"{stamp}-"
    budget = MAX_FILENAME_BYTES - len(TEMP_PREFIX + prefix + TEMP_SUFFIX)
    return prefix + sanitize_filename(original, max_bytes=budget)
