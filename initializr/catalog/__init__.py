"""Option catalog: the closed sets of selectable options."""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from initializr.core.errors import CatalogMalformed, CatalogMissing
from initializr.schemas.options import Option, OptionCatalog

log = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "options.json"


def load_catalog(path: Union[str, Path, None] = None) -> OptionCatalog:
    """Load and validate the catalog descriptor.

    Raises CatalogMissing when the file cannot be read and CatalogMalformed
    when it is not valid JSON, does not match the schema or repeats an id
    within one list.
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogMissing(f"failed to read {catalog_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogMalformed(f"failed to parse {catalog_path}: {e}") from e

    try:
        catalog = OptionCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogMalformed(f"invalid catalog {catalog_path}: {e}") from e

    if not catalog.language_versions:
        raise CatalogMalformed(f"invalid catalog {catalog_path}: no language versions")

    for label, options in catalog.labeled_lists().items():
        seen = set()
        for option in options:
            if option.id in seen:
                raise CatalogMalformed(f"duplicate id '{option.id}' in {label}")
            seen.add(option.id)

    log.info("Loaded option catalog from %s", catalog_path)
    return catalog


def find_option(options: Iterable[Option], option_id: str) -> Optional[Option]:
    for option in options:
        if option.id == option_id:
            return option
    return None


def find_options(options: List[Option], ids: Iterable[str]) -> List[Option]:
    """Resolve ids in input order, silently dropping unknown ones."""
    result = []
    for option_id in ids:
        option = find_option(options, option_id)
        if option is not None:
            result.append(option)
    return result
