import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PROMPT = "$ "
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ShellConfig:
    """Interpreter settings, read once at startup."""

    prompt: str = DEFAULT_PROMPT
    use_colors: bool = False
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ShellConfig":
        env = env if env is not None else os.environ

        use_colors = env.get("MINISHELL_COLORS", "").lower() in _TRUE_VALUES
        if "NO_COLOR" in env:
            use_colors = False

        level_name = env.get("MINISHELL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            log_level = logging.WARNING

        return cls(
            prompt=env.get("MINISHELL_PROMPT", DEFAULT_PROMPT),
            use_colors=use_colors,
            log_level=log_level,
        )
