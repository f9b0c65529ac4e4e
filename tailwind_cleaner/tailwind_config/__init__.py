"""Reading and merging tailwind.config.js."""

from .js_object import (
    ConfigSyntaxError,
    format_js_value,
    parse_exported_object,
    parse_js_object,
    render_config_module,
)
from .loader import LoadedConfig, extract_tokens, load_tailwind_config, parse_config_text
from .merge import (
    ConfigMergeError,
    MergeContext,
    MergeResult,
    MergeStrategy,
    MergeStrategyChain,
    TailwindConfigMerger,
    default_chain,
    synthesize_config,
)

__all__ = [
    "ConfigMergeError",
    "ConfigSyntaxError",
    "LoadedConfig",
    "MergeContext",
    "MergeResult",
    "MergeStrategy",
    "MergeStrategyChain",
    "TailwindConfigMerger",
    "default_chain",
    "extract_tokens",
    "format_js_value",
    "load_tailwind_config",
    "parse_config_text",
    "parse_exported_object",
    "parse_js_object",
    "render_config_module",
    "synthesize_config",
]
