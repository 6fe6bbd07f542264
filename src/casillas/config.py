"""ContextVar-based render configuration for casillas.

Config is set once per Markdown instance and read by the renderers and
list-item transforms running inside that context.

Thread Safety:
    ContextVars are per-thread. Each thread has independent storage,
    so no locks are needed.

Usage:
    from casillas.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(default_code_language="python")):
        html = HtmlRenderer().render(doc)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        default_code_language: Language label applied to code blocks and code
            spans that do not name one (None leaves them unlabelled)
        checkbox_label: Label attached to list items rewritten as checkboxes
        hspace_em: Width, in em, of the gap between a checkbox glyph and its text

    """

    default_code_language: str | None = None
    checkbox_label: str = "checkbox"
    hspace_em: float = 0.5

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from a dictionary.

        Unknown keys are silently ignored, so a larger settings mapping
        (e.g. loaded from YAML) can be passed straight in.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "default_code_language": "typ",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.default_code_language
            'typ'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get the active RenderConfig for this thread/context."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for the current context.

    Only affects the current thread's context.
    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the module-level default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(default_code_language="sh")):
        ...     get_render_config().default_code_language
        'sh'

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
