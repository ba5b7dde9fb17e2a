"""Key normalization helpers."""

import re
from typing import Optional

_SEPARATORS = re.compile(r"[\\./]+")


def normalize_key(key: Optional[str]) -> str:
    """Return the canonical form of a module key.

    Keys are case-insensitive and treat ``\\``, ``.`` and ``/`` as the same
    namespace separator.

    Examples:
        >>> normalize_key("Services.Mail\\\\Sender")
        'services/mail/sender'
        >>> normalize_key("/a//b/")
        'a/b'
        >>> normalize_key(None)
        ''
    """
    return _SEPARATORS.sub("/", (key or "").lower()).strip("/")


def in_namespace(key: str, prefix: str) -> bool:
    """Tell whether *key* lives beneath the normalized namespace *prefix*.

    An empty prefix selects top-level keys only.
    """
    if not prefix:
        return "/" not in key
    return key == prefix or key.startswith(prefix + "/")
