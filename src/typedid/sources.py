"""Record sources feeding identifier maps into field mappings."""

import logging
from pathlib import Path
from typing import Any

import bibtexparser
import msgspec
from bibtexparser.library import Library

from .exceptions import SourceError
from .types import Record

logger = logging.getLogger(__name__)

# Biblatex fields that carry identifiers
DEFAULT_IDENTIFIER_FIELDS = frozenset({"doi", "isbn", "eprint", "url", "mrnumber", "zbl"})

# Record property holding the source key (citekey or JSON object key)
RECORD_KEY = "_key"


def load_json_records(records_path: Path) -> list[Record]:
    """Load source records from a JSON file.

    The file holds either an array of record objects or an object whose values
    are records. In the latter case each record gets its object key under
    ``_key``.

    Args:
        records_path: Path to the JSON records file

    Returns:
        List of records in file order

    Raises:
        FileNotFoundError: If the records file doesn't exist
        SourceError: If the file is not valid JSON or has an unexpected shape
    """
    if not records_path.exists():
        raise FileNotFoundError(f"Records file not found: {records_path}")

    try:
        data: Any = msgspec.json.decode(records_path.read_bytes())
    except OSError as e:
        raise SourceError(f"Failed to read {records_path}: {e}") from e
    except msgspec.DecodeError as e:
        raise SourceError(f"Invalid JSON in {records_path}: {e}") from e

    try:
        if isinstance(data, dict):
            keyed = msgspec.convert(data, type=dict[str, Record])
            records = [{RECORD_KEY: key, **record} for key, record in keyed.items()]
        else:
            records = msgspec.convert(data, type=list[Record])
    except msgspec.ValidationError as e:
        raise SourceError(f"Unexpected record layout in {records_path}: {e}") from e

    logger.debug("Loaded %d records from %s", len(records), records_path)
    return records


def load_bib_records(
    bib_path: Path,
    fields: frozenset[str] = DEFAULT_IDENTIFIER_FIELDS,
    *,
    property_name: str = "ids",
) -> list[Record]:
    """Load identifier records from a biblatex library.

    Each entry becomes ``{"_key": citekey, property_name: {field: value}}``
    holding the identifier fields present on the entry, in entry field order.

    Args:
        bib_path: Path to the ``.bib`` file
        fields: Names of the fields treated as identifiers
        property_name: Record property receiving the identifier map

    Returns:
        List of records in library order

    Raises:
        FileNotFoundError: If the bib file doesn't exist
        SourceError: If bibtex parsing fails
    """
    if not bib_path.exists():
        raise FileNotFoundError(f"Bibliography file not found: {bib_path}")

    try:
        library: Library = bibtexparser.parse_file(str(bib_path))
    except Exception as e:  # pragma: no cover - parser raises many custom errors
        raise SourceError(f"Failed to parse {bib_path}: {e}") from e

    if library.failed_blocks:
        logger.warning("Skipped %d unparseable blocks in %s", len(library.failed_blocks), bib_path)

    records: list[Record] = []
    for entry in library.entries:
        identifiers = {
            field.key.lower(): str(field.value)
            for field in entry.fields
            if field.key.lower() in fields
        }
        records.append({RECORD_KEY: entry.key, property_name: identifiers})

    logger.debug("Loaded %d bib entries from %s", len(records), bib_path)
    return records
