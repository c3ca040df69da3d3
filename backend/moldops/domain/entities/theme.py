"""Theme palettes for the dashboard — presentation data only."""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ThemePalette:
    name: str
    primary: str
    secondary: str
    accent: str
    bg: str
    surface: str
    text: str
    text_secondary: str
    border: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


# key -> (name, secondary, (light values), (dark values))
# value order: primary, accent, bg, surface, text, text_secondary, border
_PALETTES: dict[str, tuple[str, str, tuple[str, ...], tuple[str, ...]]] = {
    "neon-blue": (
        "Neon Blue", "#0a0a0a",
        ("#00a8cc", "#e65c2e", "#f0f4f8", "#ffffff", "#1f2937", "#4b5563", "#e5e7eb"),
        ("#00d4ff", "#ff6b35", "#121212", "#1e1e1e", "#e0e0e0", "#a0a0a0", "#333333"),
    ),
    "cyber-purple": (
        "Cyber Purple", "#240046",
        ("#7b2cbf", "#d90467", "#faf5ff", "#ffffff", "#4c1d95", "#a78bfa", "#ddd6fe"),
        ("#9d4edd", "#f72585", "#1a002b", "#2a0040", "#e0e0e0", "#b9a6e0", "#3c096c"),
    ),
    "matrix-green": (
        "Matrix Green", "#001100",
        ("#28b40e", "#cc062e", "#f0fff4", "#ffffff", "#14532d", "#16a34a", "#bbf7d0"),
        ("#39ff14", "#ff073a", "#000000", "#001100", "#bbf7d0", "#86efac", "#003300"),
    ),
    "sunset-orange": (
        "Sunset Orange", "#2d1b69",
        ("#e65c2e", "#d90467", "#fff7ed", "#ffffff", "#9a3412", "#ea580c", "#fed7aa"),
        ("#ff6b35", "#f72585", "#1a0033", "#2d1b69", "#fed7aa", "#fbcfe8", "#533483"),
    ),
}

DEFAULT_THEME = "neon-blue"


def theme_keys() -> list[str]:
    return list(_PALETTES)


def get_palette(key: str, light_mode: bool = False) -> ThemePalette:
    """Resolve a palette, falling back to the default theme for unknown keys."""
    name, secondary, light, dark = _PALETTES.get(key, _PALETTES[DEFAULT_THEME])
    primary, accent, bg, surface, text, text_secondary, border = light if light_mode else dark
    return ThemePalette(
        name=name,
        primary=primary,
        secondary=secondary,
        accent=accent,
        bg=bg,
        surface=surface,
        text=text,
        text_secondary=text_secondary,
        border=border,
    )
