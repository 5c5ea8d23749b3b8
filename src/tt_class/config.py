"""YAML configuration loader for the classification catalog."""

import functools
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from tt_class.catalog import Catalog

logger = logging.getLogger(__name__)

CATALOG_PATH_ENV = "TT_CLASS_CATALOG_PATH"


def _get_default_config_path() -> Path:
    """Get the default catalog path, honouring TT_CLASS_CATALOG_PATH."""
    env_path = os.environ.get(CATALOG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / "config" / "catalog.yaml"


def _load_raw_config(path: Path | None = None) -> dict[str, Any]:
    """Load raw YAML config from path.

    Args:
        path: Path to YAML config file. If None, uses the default catalog path.

    Returns:
        Raw config dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
    """
    if path is None:
        path = _get_default_config_path()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    return raw_config if raw_config is not None else {}


def load_catalog(path: Path | None = None) -> Catalog:
    """Load and validate the catalog from YAML.

    Expected layout::

        classes: [TTS, TTE, ...]
        models:
          <make>:
            <model>: <raw base class>
        score_table:
          <category>:
            <item label>: <points>

    Args:
        path: Path to YAML config file. If None, uses config/catalog.yaml.

    Returns:
        Validated Catalog instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        pydantic.ValidationError: If config doesn't match expected schema.
        CatalogIntegrityError: If vehicles, categories or ladder are inconsistent.
    """
    raw_config = _load_raw_config(path)

    # Base classes are class codes; YAML could read a bare code as another scalar type
    models = {
        str(make): {str(model): str(raw) for model, raw in (models or {}).items()}
        for make, models in (raw_config.get("models") or {}).items()
    }

    catalog = Catalog(
        classes=[str(c) for c in raw_config.get("classes") or []],
        models=models,
        score_table=raw_config.get("score_table") or {},
    )

    logger.info(
        "Loaded catalog: %d classes, %d makes, %d vehicles, %d categories",
        len(catalog.classes),
        len(catalog.models),
        sum(len(m) for m in catalog.models.values()),
        len(catalog.score_table),
    )
    return catalog


@functools.lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Return the default catalog, loading it once per process."""
    return load_catalog()
