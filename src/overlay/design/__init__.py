"""Stylesheet design layer.

Color math, tint/accent analysis, the neutralizer and component templates.
Everything here is pure: text and numbers in, text and numbers out.
"""

from .color_mixing import (  # noqa: F401
    Color,
    parse_hex,
    parse_css,
    parse_color,
    to_hex,
    rgba_to_css,
    color_mix,
    color_shade,
    blend_tint,
)
from .contrast import (  # noqa: F401
    hsp_brightness,
    is_dark_background,
    contrast_ratio,
    auto_foreground,
    auto_highlight,
)
from .dynamic_accent import (  # noqa: F401
    AccentVerdict,
    DepastelizeResult,
    is_valid_accent,
    depastelize_accent,
    enhance_pastel_color,
)
from .tint_detection import (  # noqa: F401
    DominantChannel,
    TintDescriptor,
    detect_tint,
    calculate_adaptive_threshold,
    determine_dominant_channel,
    is_tinted_theme_family,
)
from .neutralizer import (  # noqa: F401
    NeutralizeResult,
    TintReplacementResult,
    neutralize_tinted_css,
    replace_tint_literals,
)
from .accent_detection import (  # noqa: F401
    AccentSource,
    AccentColor,
    ThemeStylesheets,
    detect_accent_color,
)
from .assembler import assemble_shell_css, comment_header  # noqa: F401
