"""Taxonomy Resolver

Replaces each farm's soil, terrain and water-source IDs with display names
from the reference tables. A missing entry is fatal for the whole run.
"""

import logging
from typing import Dict, Iterable, List

from ..exceptions import LookupFailure
from ..models import Farm, ResolvedFarm, TaxonomyEntry, normalize_id

logger = logging.getLogger(__name__)


def _index_by_id(entries: Iterable[TaxonomyEntry]) -> Dict[str, str]:
    # First entry wins when a table repeats an ID.
    index: Dict[str, str] = {}
    for entry in entries:
        index.setdefault(normalize_id(entry.entry_id), entry.name)
    return index


class TaxonomyResolver:
    """Resolves categorical farm attributes to human-readable names.
    
    The three lookup tables are indexed once by normalized ID, so resolving
    many farms costs one dictionary lookup per category.
    """
    
    def __init__(self, soil_types: Iterable[TaxonomyEntry],
                 terrain_types: Iterable[TaxonomyEntry],
                 water_sources: Iterable[TaxonomyEntry]):
        """Initialize resolver with the three taxonomy tables.
        
        Args:
            soil_types: Soil type reference entries
            terrain_types: Terrain type reference entries
            water_sources: Water source reference entries
        """
        self._soil_types = _index_by_id(soil_types)
        self._terrain_types = _index_by_id(terrain_types)
        self._water_sources = _index_by_id(water_sources)
        
        logger.debug(
            f"TaxonomyResolver initialized with {len(self._soil_types)} soil types, "
            f"{len(self._terrain_types)} terrain types, {len(self._water_sources)} water sources"
        )
    
    def resolve_farm(self, farm: Farm) -> ResolvedFarm:
        """Resolve one farm's categorical IDs.
        
        Args:
            farm: Farm with soil/terrain/water-source IDs
            
        Returns:
            ResolvedFarm carrying the original fields plus the three names
            
        Raises:
            LookupFailure: If any of the three IDs has no taxonomy entry
        """
        return ResolvedFarm(
            **farm.model_dump(),
            soil_type=self._lookup(self._soil_types, "soil type", farm.soil_type_id, farm.farm_id),
            terrain_type=self._lookup(self._terrain_types, "terrain type", farm.terrain_type_id, farm.farm_id),
            water_source=self._lookup(self._water_sources, "water source", farm.water_source_id, farm.farm_id),
        )
    
    def resolve_farms(self, farms: Iterable[Farm]) -> List[ResolvedFarm]:
        """Resolve every farm, stopping at the first unresolvable ID."""
        resolved = [self.resolve_farm(farm) for farm in farms]
        logger.info(f"Resolved taxonomy names for {len(resolved)} farms")
        return resolved
    
    @staticmethod
    def _lookup(index: Dict[str, str], category: str, category_id: str, farm_id: str) -> str:
        key = normalize_id(category_id)
        if key not in index:
            logger.error(f"Farm {farm_id} references unknown {category} id {key}")
            raise LookupFailure(category, key, farm_id=farm_id)
        return index[key]
