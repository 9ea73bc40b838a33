import secrets
import string
import time
from typing import Protocol


class _ExistsFunc(Protocol):
    def __call__(self, code: str) -> bool:
        ...


_ALPHABET = string.ascii_uppercase + string.digits


def _random_code(length: int = 8) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_unique_code(
    *,
    length: int = 8,
    exists: _ExistsFunc,
    max_attempts: int = 12,
) -> str:
    """Return a random uppercase+digits code that is unique under the provided exists() check."""
    for _ in range(max_attempts):
        code = _random_code(length)
        if not exists(code):
            return code
    raise RuntimeError("unable to generate unique code")


def order_code(*, exists: _ExistsFunc, prefix: str = "ORD", now_ms: int | None = None) -> str:
    """ORD-<last 8 digits of the ms clock>-<4 random chars>, unique under exists()."""
    stamp = str(now_ms if now_ms is not None else int(time.time() * 1000))[-8:]
    suffix = generate_unique_code(length=4, exists=lambda c: exists(f"{prefix}-{stamp}-{c}"))
    return f"{prefix}-{stamp}-{suffix}"
