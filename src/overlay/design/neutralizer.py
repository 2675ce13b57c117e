"""Context-aware stylesheet tint neutralization.

Two passes operate on base stylesheets of tinted theme families:

``replace_tint_literals``
    Replaces the detected foreground/background tint colors everywhere
    (``@define-color`` values, same-channel ``rgb()``/``rgba()`` and hex
    literals) with a blend toward a neutral target.

``neutralize_tinted_css``
    Rewrites background-related color literals whose dominant channel matches
    the tint, blending them toward a grey of equal average brightness.
    Blocks whose selector names a semantic status class (errors, destructive
    actions, progress indicators...) are never touched.

Both functions are pure: input text in, rewritten text plus counters out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from config.settings import PRESERVE_SELECTORS

from .color_mixing import RGB, blend_tint, to_hex
from .css_blocks import iter_declarations, mask_comments_and_strings, scan_blocks
from .tint_detection import DominantChannel, TintDescriptor, determine_dominant_channel

__all__ = [
    "NeutralizeResult",
    "TintReplacementResult",
    "is_preserved_selector",
    "neutralize_tinted_css",
    "replace_tint_literals",
]

BlendFn = Callable[[Sequence[int], Sequence[int], float], Sequence[int]]

_BACKGROUND_PROPS = {"background", "background-color", "background-image"}

_LITERAL_RE = re.compile(
    r"#(?P<hex>[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{4}|[0-9a-fA-F]{3})(?![0-9a-zA-Z_-])"
    r"|(?P<func>rgba?)\(\s*(?P<r>\d+)\s*,\s*(?P<g>\d+)\s*,\s*(?P<b>\d+)\s*"
    r"(?:,\s*(?P<a>[\d.]+)\s*)?\)",
    re.IGNORECASE,
)
_DEFINE_COLOR_RE = re.compile(r"@define-color\s+[\w-]+\s+([^;{}]+);")

_PRESERVE_RE = re.compile(
    r"(?<![\w-])\.?(?:"
    + "|".join(re.escape(s) for s in sorted(PRESERVE_SELECTORS, key=len, reverse=True))
    + r")(?![\w-])",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class NeutralizeResult:
    css: str
    replacement_count: int
    preserved_block_count: int


@dataclass(frozen=True)
class TintReplacementResult:
    css: str
    define_color_count: int
    rgba_count: int
    hex_count: int

    @property
    def total(self) -> int:
        return self.define_color_count + self.rgba_count + self.hex_count


def is_preserved_selector(selector: str) -> bool:
    return bool(_PRESERVE_RE.search(selector))


def _literal_rgb(m: re.Match[str]) -> Optional[Tuple[RGB, Optional[str]]]:
    """Channels and raw alpha text of a literal; None when malformed."""
    digits = m.group("hex")
    if digits is not None:
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        rgb = (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        return rgb, digits[6:8] or None
    channels = tuple(int(m.group(k)) for k in ("r", "g", "b"))
    if any(c > 255 for c in channels):
        return None
    alpha = m.group("a")
    if alpha is not None:
        try:
            if not 0.0 <= float(alpha) <= 1.0:
                return None
        except ValueError:
            return None
    return channels, alpha  # type: ignore[return-value]


def _format_literal(m: re.Match[str], rgb: Sequence[int], alpha: Optional[str]) -> str:
    if m.group("hex") is not None:
        text = to_hex(*rgb)
        if alpha is not None:
            text += alpha.lower()
        return text
    func = m.group("func")
    r, g, b = (int(c) for c in rgb)
    if alpha is not None:
        return f"{func}({r}, {g}, {b}, {alpha})"
    return f"{func}({r}, {g}, {b})"


def _rewrite_span(
    text: str,
    channel: DominantChannel,
    threshold: int,
    strength: float,
    blend_fn: BlendFn,
) -> Tuple[str, int]:
    count = 0

    def repl(m: re.Match[str]) -> str:
        nonlocal count
        parsed = _literal_rgb(m)
        if parsed is None:
            return m.group(0)
        rgb, alpha = parsed
        if determine_dominant_channel(rgb, threshold) is not channel:
            return m.group(0)
        avg = round(sum(rgb) / 3)
        blended = blend_fn(rgb, (avg, avg, avg), strength)
        if tuple(blended) == tuple(rgb):
            return m.group(0)
        count += 1
        return _format_literal(m, blended, alpha)

    return _LITERAL_RE.sub(repl, text), count


def neutralize_tinted_css(
    css: str,
    dominant_channel: DominantChannel,
    threshold: int,
    blend_strength: float,
    blend_fn: BlendFn = blend_tint,
) -> NeutralizeResult:
    """Blend background colors carrying the dominant tint toward equal-brightness grey.

    Literals inside preserve-list blocks are never rewritten. ``@define-color``
    declarations are processed regardless of block context.
    """
    if dominant_channel is DominantChannel.NONE or not css:
        return NeutralizeResult(css, 0, 0)

    masked = mask_comments_and_strings(css)
    blocks = scan_blocks(css, masked)
    protected = [(b.start, b.end) for b in blocks if is_preserved_selector(b.selector)]

    def is_protected(pos: int) -> bool:
        return any(start <= pos < end for start, end in protected)

    # (start, end) value spans to rewrite, collected on the untouched text
    spans: List[Tuple[int, int]] = []
    for block in blocks:
        if not block.leaf or is_protected(block.start):
            continue
        for decl in iter_declarations(masked, block.body_start, block.body_end):
            if decl.prop in _BACKGROUND_PROPS:
                spans.append((decl.value_start, decl.value_end))
    for m in _DEFINE_COLOR_RE.finditer(masked):
        spans.append((m.start(1), m.end(1)))
    spans.sort()

    out: List[str] = []
    cursor = 0
    total = 0
    for start, end in spans:
        if start < cursor:
            continue
        rewritten, count = _rewrite_span(
            css[start:end], dominant_channel, threshold, blend_strength, blend_fn
        )
        out.append(css[cursor:start])
        out.append(rewritten)
        cursor = end
        total += count
    out.append(css[cursor:])
    return NeutralizeResult("".join(out), total, len(protected))


def _replace_one_tint(
    css: str, tint_hex: str, tint_rgb: RGB, target: RGB
) -> Tuple[str, int, int, int]:
    target_hex = to_hex(*target)
    define_re = re.compile(
        r"(@define-color\s+[\w-]+\s+)" + re.escape(tint_hex) + r"(\s*;)", re.IGNORECASE
    )
    css, n_define = define_re.subn(lambda m: f"{m.group(1)}{target_hex}{m.group(2)}", css)

    r, g, b = tint_rgb
    rgba_re = re.compile(
        rf"rgba?\(\s*{r}\s*,\s*{g}\s*,\s*{b}\s*,\s*([\d.]+)\s*\)", re.IGNORECASE
    )
    css, n_rgba = rgba_re.subn(
        lambda m: f"rgba({target[0]}, {target[1]}, {target[2]}, {m.group(1)})", css
    )

    hex_re = re.compile(re.escape(tint_hex) + r"(?![0-9a-fA-F])", re.IGNORECASE)
    css, n_hex = hex_re.subn(target_hex, css)
    return css, n_define, n_rgba, n_hex


def replace_tint_literals(
    css: str,
    tint: TintDescriptor,
    strength: float,
    neutral_fg: Sequence[int],
    neutral_bg: Sequence[int],
    blend_fn: BlendFn = blend_tint,
) -> TintReplacementResult:
    """Swap detected tint colors for their blend toward the neutral targets."""
    counts = [0, 0, 0]
    sides = (
        (tint.foreground_hex, tint.foreground_rgb, neutral_fg),
        (tint.background_hex, tint.background_rgb, neutral_bg),
    )
    for tint_hex, tint_rgb, neutral in sides:
        if not tint_hex or tint_rgb is None:
            continue
        target = tuple(int(c) for c in blend_fn(tint_rgb, neutral, strength))
        if target == tuple(tint_rgb):
            continue
        css, n_define, n_rgba, n_hex = _replace_one_tint(css, tint_hex, tint_rgb, target)  # type: ignore[arg-type]
        counts[0] += n_define
        counts[1] += n_rgba
        counts[2] += n_hex
    return TintReplacementResult(css, counts[0], counts[1], counts[2])
