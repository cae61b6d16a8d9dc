"""Child-process environment sanitizer.

Policy is allow-by-default, deny-by-prefix: every parent variable is passed
through unless its name starts with a credential-provider prefix. Prefixes
not listed here are NOT filtered. The worker gets the one credential it needs
explicitly in its payload.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

DENIED_ENV_PREFIXES: tuple[str, ...] = ("AWS_", "GOOGLE_", "ANTHROPIC_", "OPENAI_")


def denied_prefixes(extra_prefixes: Iterable[str] = ()) -> tuple[str, ...]:
    """Default prefixes plus any non-empty extras, order-preserving and de-duplicated."""
    merged = [*DENIED_ENV_PREFIXES, *(p.strip() for p in extra_prefixes if p and p.strip())]
    return tuple(dict.fromkeys(merged))


def sanitize_env(
    parent_env: Mapping[str, str] | None = None,
    extra_prefixes: Iterable[str] = (),
) -> dict[str, str]:
    """Copy ``parent_env`` (default: ``os.environ``) minus denied-prefix names."""
    source = os.environ if parent_env is None else parent_env
    prefixes = denied_prefixes(extra_prefixes)
    return {name: value for name, value in source.items() if not name.startswith(prefixes)}
