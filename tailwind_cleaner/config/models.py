"""Configuration model for a cleanup run."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_COLOR_API_URL = "https://api.color.pizza/v1/"

DEFAULT_CATEGORIES: dict[str, list[str]] = {
    "width": ["w", "min-w", "max-w"],
    "height": ["h", "min-h", "max-h"],
    "spacing": [
        "m", "mt", "mr", "mb", "ml", "mx", "my",
        "p", "pt", "pr", "pb", "pl", "px", "py",
        "gap",
    ],
    "fontSize": ["text"],
    "lineHeight": ["leading"],
    "letterSpacing": ["tracking"],
    "borderWidth": ["border", "border-t", "border-r", "border-b", "border-l"],
    "borderRadius": [
        "rounded", "rounded-t", "rounded-r", "rounded-b", "rounded-l",
        "rounded-tl", "rounded-tr", "rounded-bl", "rounded-br",
    ],
    "scale": ["scale", "scale-x", "scale-y"],
    "translate": ["translate-x", "translate-y"],
    "rotate": ["rotate"],
}

DEFAULT_COLOR_UTILITIES: list[str] = [
    "bg", "text", "border", "ring", "ring-offset", "shadow", "fill", "stroke",
    "accent", "decoration", "divide", "outline", "caret", "placeholder",
    "from", "via", "to",
]

# Pixel names are bare numbers so that p-[16px] becomes p-16.
DEFAULT_UNIT_PREFIXES: dict[str, str] = {
    "px": "",
    "rem": "r",
    "em": "e",
    "%": "pc",
    "calc": "calc",
}


class CleanerConfig(BaseModel):
    """Settings for one cleanup run, validated on construction."""

    # File discovery
    extensions: list[str] = Field(
        default_factory=lambda: [
            ".js", ".jsx", ".ts", ".tsx", ".html", ".vue", ".css", ".scss", ".less",
        ]
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build", ".next", ".nuxt"]
    )
    tailwind_config: str = Field(default="tailwind.config.js")

    # Color naming service
    color_api_url: str = Field(default=DEFAULT_COLOR_API_URL)
    color_api_timeout: float = Field(default=30.0, gt=0)
    use_color_api: bool = Field(default=True)
    offline_fallback: bool = Field(default=True)

    # Naming
    name_prefix: str | None = Field(default=None)  # Prefix for generated color names
    class_prefix: str | None = Field(default=None)  # Tailwind `prefix` option, e.g. "tw-"
    unit_prefixes: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_UNIT_PREFIXES))

    # What to rewrite
    handle_colors: bool = Field(default=True)
    handle_dimensions: bool = Field(default=True)
    categories: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORIES.items()}
    )
    color_utilities: list[str] = Field(default_factory=lambda: list(DEFAULT_COLOR_UTILITIES))

    # Output
    config_write_mode: Literal["auto", "splice", "rewrite"] = Field(default="auto")
    dry_run: bool = Field(default=False)

    @field_validator("extensions")
    @classmethod
    def _dotted_extensions(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @field_validator("name_prefix", "class_prefix")
    @classmethod
    def _empty_prefix_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("tailwind_config")
    @classmethod
    def _config_name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tailwind_config must not be empty")
        return value

    def unit_prefix(self, unit: str) -> str:
        """Name prefix for a unit; unknown units use the unit itself."""
        return self.unit_prefixes.get(unit, unit)
