import os
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class ShellState:
    """
    Mutable interpreter state handed to every command.

    ``cwd`` only changes through ``cd``. ``last_return_code`` keeps the status
    of the last command and ``exit_code`` stays None until ``exit`` runs.
    """

    cwd: str = field(default_factory=os.getcwd)
    env: Dict[str, str] = field(default_factory=lambda: os.environ.copy())
    last_return_code: int = 0
    exit_code: Optional[int] = None

    @property
    def home(self) -> Optional[str]:
        return self.env.get("HOME")

    @property
    def stopped(self) -> bool:
        return self.exit_code is not None

    def resolve(self, path: str) -> str:
        """Makes a user supplied path absolute against ``cwd``."""
        return os.path.normpath(os.path.join(self.cwd, path))
