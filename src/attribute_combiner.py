"""
D2 Catalog - Attribute Combiner
Folds four identical primary-attribute bonuses into one "all-stats" property.
"""

import logging
from typing import List, Optional

from config import ALL_STATS_CODE
from property_translator import Property, PropertyTranslator
from stat_codes import PRIMARY_ATTRIBUTE_CODES

logger = logging.getLogger(__name__)


def combine_all_attributes(props: List[Property],
                           translator: Optional[PropertyTranslator] = None) -> List[Property]:
    """
    Replace str/dex/vit/enr with a single all-stats property.

    Only applies when each of the four codes appears exactly once and all
    four share the same min/max. The all-stats property takes the position
    of the earliest of the four; everything else keeps its relative order.
    Otherwise the input list is returned unchanged.
    """
    positions = {code: [] for code in PRIMARY_ATTRIBUTE_CODES}
    for i, p in enumerate(props):
        if p.code in positions:
            positions[p.code].append(i)

    if any(len(idx) != 1 for idx in positions.values()):
        return props

    indices = {code: idx[0] for code, idx in positions.items()}
    ref = props[indices[PRIMARY_ATTRIBUTE_CODES[0]]]
    for code in PRIMARY_ATTRIBUTE_CODES[1:]:
        p = props[indices[code]]
        if p.min != ref.min or p.max != ref.max:
            return props

    all_stats = Property(code=ALL_STATS_CODE, min=ref.min, max=ref.max)
    (translator or PropertyTranslator()).enrich_property(all_stats)

    first = min(indices.values())
    removed = set(indices.values())
    result = []
    for i, p in enumerate(props):
        if i == first:
            result.append(all_stats)
        elif i not in removed:
            result.append(p)

    logger.debug(f"Combined primary attributes into {all_stats.display_text!r}")
    return result
