"""
Error sanitization.

Reduces exceptions from the node transport to a short message that is safe
to log and to return to a caller: no stack traces, credential material or
filesystem paths.
"""
import re

MAX_MESSAGE_LENGTH = 300
REDACTED = "[REDACTED]"

_PEM_BLOCK = re.compile(r"-----BEGIN [^-]+-----.*?-----END [^-]+-----", re.DOTALL)
_CREDENTIAL_PAIR = re.compile(
    r"(?i)\b(macaroon|password|passwd|secret|token|api[_-]?key|rune|authorization)\b(\s*[=:]\s*)\S+"
)
# Macaroons and similar blobs; 66-char node pubkeys are left readable
_LONG_HEX = re.compile(r"\b[0-9a-fA-F]{100,}\b")
_POSIX_PATH = re.compile(r"(?<![\w:/.])/(?:[\w.\-]+/)+[\w.\-]*")
_WINDOWS_PATH = re.compile(r"\b[A-Za-z]:\\(?:[^\\\s'\"]+\\)*[^\\\s'\"]*")


def sanitize_error(error) -> str:
    """
    Turn an exception (or any value) into a safe, human-readable message.

    :param error: Exception or arbitrary error value
    :return: Sanitized single-line message
    """
    if isinstance(error, BaseException):
        message = str(error)
        fallback = type(error).__name__
    else:
        message = "" if error is None else str(error)
        fallback = "Unknown error"

    message = _PEM_BLOCK.sub(REDACTED, message)

    lines = [line.strip() for line in message.splitlines() if line.strip()]
    message = lines[0] if lines else ""

    message = _CREDENTIAL_PAIR.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", message)
    message = _LONG_HEX.sub(REDACTED, message)
    message = _POSIX_PATH.sub("<path>", message)
    message = _WINDOWS_PATH.sub("<path>", message)
    message = message.strip()

    if not message:
        return fallback

    if len(message) > MAX_MESSAGE_LENGTH:
        message = message[:MAX_MESSAGE_LENGTH - 3].rstrip() + "..."

    return message
