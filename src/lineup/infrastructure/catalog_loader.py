"""Load template catalogs from YAML.

The packaged ``lineup/templates/catalog.yaml`` holds the default
templates; a user file listed under ``[catalog] path`` overlays it.

File shape::

    margherita:
      - {label: Tomato, discriminator: tomato}
      - {label: Mozzarella, discriminator: mozzarella}
    captain-ten:
      label: Captain
      discriminator: 10
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from lineup.domain.catalog import Template, TemplateCatalog
from lineup.domain.policies import Part

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = "catalog.yaml"


class CatalogFileError(ValueError):
    """Raised when a catalog file does not match the expected shape."""


def _parse_part(key: str, raw: Any) -> Part:
    if not isinstance(raw, dict) or "label" not in raw or "discriminator" not in raw:
        msg = f"Template {key!r}: each part needs 'label' and 'discriminator'"
        raise CatalogFileError(msg)
    discriminator = raw["discriminator"]
    if not isinstance(discriminator, (int, str)) or isinstance(discriminator, bool):
        msg = f"Template {key!r}: discriminator must be an int or a string"
        raise CatalogFileError(msg)
    return Part(label=str(raw["label"]), discriminator=discriminator)


def parse_templates(data: Any) -> dict[str, Template]:
    """Convert a loaded YAML mapping into catalog templates."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "Catalog file must contain a mapping of template keys"
        raise CatalogFileError(msg)

    templates: dict[str, Template] = {}
    for key, raw in data.items():
        name = str(key)
        if isinstance(raw, list):
            templates[name] = [_parse_part(name, item) for item in raw]
        else:
            templates[name] = _parse_part(name, raw)
    return templates


def _load_yaml(text: str) -> Any:
    return YAML(typ="safe").load(text)


def load_catalog(extra_path: Path | None = None) -> TemplateCatalog:
    """Build a catalog from the packaged defaults plus an optional user file.

    User templates replace packaged ones with the same key.
    """
    catalog = TemplateCatalog()

    packaged = resources.files("lineup").joinpath("templates", DEFAULT_CATALOG)
    for key, template in parse_templates(_load_yaml(packaged.read_text(encoding="utf-8"))).items():
        catalog.store(key, template)

    if extra_path is not None:
        if not extra_path.is_file():
            msg = f"Catalog file not found: {extra_path}"
            raise CatalogFileError(msg)
        user = parse_templates(_load_yaml(extra_path.read_text(encoding="utf-8")))
        for key, template in user.items():
            catalog.store(key, template)
        logger.debug("Loaded %d templates from %s", len(user), extra_path)

    return catalog
