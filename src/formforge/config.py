"""Runtime configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class FormforgeConfig:
    """Where forms live and how loudly to log."""

    forms_path: Path
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> FormforgeConfig:
        """Create config from environment variables.

        Resolution order for ``forms_path``:
        1. FORMFORGE_FORMS_PATH env var
        2. {base_path}/forms
        3. ./forms
        """
        forms_path = os.environ.get("FORMFORGE_FORMS_PATH")
        if forms_path:
            path = Path(forms_path)
        elif base_path:
            path = Path(base_path) / "forms"
        else:
            path = Path.cwd() / "forms"

        return cls(
            forms_path=path,
            log_level=os.environ.get("FORMFORGE_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING

    def configure_logging(self) -> None:
        """Apply ``log_level`` to stdlib logging."""
        logging.basicConfig(
            level=self.log_level_number,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("formforge").setLevel(self.log_level_number)
