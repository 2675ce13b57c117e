"""Stylesheet assembly.

Concatenates cached fragments into final documents. Headers are deterministic
by default (no timestamp) so regenerating with unchanged inputs yields
byte-identical files; pass ``timestamp`` to stamp a generation time.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

__all__ = [
    "comment_header",
    "tint_modification",
    "assemble_shell_css",
]


def comment_header(
    title: str, fields: Iterable[Tuple[str, str]] = (), *, timestamp: Optional[str] = None
) -> str:
    """Block comment header: title line followed by ``Key: value`` lines."""
    lines = ["/*", f" * {title}"]
    if timestamp:
        lines.append(f" * Generated: {timestamp}")
    lines.extend(f" * {key}: {value}" for key, value in fields if value)
    lines.append(" */")
    return "\n".join(lines) + "\n\n"


def tint_modification(strength: int) -> str:
    if strength <= 0:
        return "Tint removed"
    if strength >= 100:
        return "Original tint preserved"
    return f"Tint reduced to {strength}%"


def assemble_shell_css(
    extension_name: str,
    header: str,
    panel: str,
    popup: str,
    accent_region: str,
    quick_settings: str = "",
) -> str:
    """Shell overlay document importing ``base-theme.css``.

    ``quick_settings`` is appended after the closing marker; it depends only on
    the border radius and is not part of the component cache.
    """
    body = (
        f"{header}"
        '@import url("base-theme.css");\n\n'
        f"/*** {extension_name} Dynamic Overrides ***/\n"
        f"{panel}\n{popup}\n{accent_region}\n"
        f"/*** End {extension_name} ***/\n"
    )
    return body + quick_settings
