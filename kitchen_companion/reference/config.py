from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_BUNDLED_DIR = Path(__file__).resolve().parent.parent / "data" / "reference"


@dataclass(frozen=True)
class ReferenceConfig:
    """
    Location of the category catalogue and code-value tables.
    """

    data_dir: Path = Path(os.getenv("REFERENCE_DATA_DIR", str(_BUNDLED_DIR)))
    categories_filename: str = "categories.csv"
    code_values_filename: str = "code_values.csv"

    @property
    def categories_path(self) -> Path:
        return self.data_dir / self.categories_filename

    @property
    def code_values_path(self) -> Path:
        return self.data_dir / self.code_values_filename


DEFAULT_REFERENCE_CONFIG = ReferenceConfig()
