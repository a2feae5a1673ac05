"""Apply typed identifier field mappings to source records."""

import logging
from collections.abc import Iterable, Mapping

from .config import TransformConfig
from .sources import RECORD_KEY
from .transform import TypedIdentifierTransform
from .types import Record

logger = logging.getLogger(__name__)


def run_mappings(
    records: Iterable[Record],
    mappings: Mapping[str, TransformConfig],
    transformer: TypedIdentifierTransform,
) -> list[Record]:
    """Run every field mapping against every record.

    The raw value of a mapping is read from ``record[config.source]``, or from
    the property named like the destination field when no source is set.

    Args:
        records: Source records
        mappings: Destination field names mapped to their configuration
        transformer: Transform used for every mapping

    Returns:
        One output record per source record, keyed by destination field name
        and carrying the source ``_key`` when present
    """
    results: list[Record] = []

    for record in records:
        row: Record = {}
        if RECORD_KEY in record:
            row[RECORD_KEY] = record[RECORD_KEY]

        for destination, config in mappings.items():
            value = record.get(config.source or destination)
            row[destination] = transformer.transform(value, config)

        results.append(row)

    logger.info("Processed %d records with %d field mappings", len(results), len(mappings))
    return results
