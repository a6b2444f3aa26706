# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

import pandas as pd

if TYPE_CHECKING:
    from ..models.store import MetadataStore

SUMMARY_COLUMNS = [
    "entity_type",
    "property",
    "data_type",
    "is_nullable",
    "is_part_of_key",
    "max_length",
    "validators",
]


def store_to_dataframe(store: MetadataStore) -> pd.DataFrame:
    """Build one row per data property of every type in the store.

    Complex properties report their complex type name in ``data_type``.
    ``validators`` is a comma-separated list of validator names.
    """
    rows: List[Dict[str, Any]] = []
    for structural_type in store.get_entity_types():
        for prop in structural_type.data_properties:
            if prop.is_complex_property:
                data_type = prop.complex_type_name
            else:
                data_type = prop.data_type.value if prop.data_type is not None else None
            rows.append(
                {
                    "entity_type": structural_type.name,
                    "property": prop.name,
                    "data_type": data_type,
                    "is_nullable": prop.is_nullable,
                    "is_part_of_key": prop.is_part_of_key,
                    "max_length": prop.max_length,
                    "validators": ", ".join(v.name for v in prop.validators),
                }
            )
    # object dtype keeps missing lengths as None instead of NaN
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS, dtype=object)
