"""Runtime settings, read from the environment.

``STOREFRONT_DATA_DIR``        where the JSON files live
``STOREFRONT_CATALOG_TIMEOUT`` seconds a catalog read may take
``STOREFRONT_LOG_LEVEL``       stdlib level name for the CLI's logging
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    catalog_timeout: float = 5.0
    log_level: str = "WARNING"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def carts_file(self) -> Path:
        return self.data_dir / "carts.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        raw_timeout = env.get("STOREFRONT_CATALOG_TIMEOUT", "5")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"STOREFRONT_CATALOG_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ValueError(f"STOREFRONT_CATALOG_TIMEOUT must be positive, got {raw_timeout!r}")

        data_dir = env.get("STOREFRONT_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            catalog_timeout=timeout,
            log_level=env.get("STOREFRONT_LOG_LEVEL", "WARNING").upper(),
        )
