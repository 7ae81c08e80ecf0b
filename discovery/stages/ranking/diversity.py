"""
Category/location diversity — greedy post-sort pass over a ranked list.

Keeps the head of the list from being dominated by one category or one place:
the first slots go to items whose primary category and location are both new,
then the rest is backfilled by score regardless of repetition.
"""

from typing import List, Set

from ...models.config import DEFAULT_CONFIG, DiscoveryConfig
from ...models.scoring import ScoredItem


def diversify(
    scored_list: List[ScoredItem],
    config: DiscoveryConfig = DEFAULT_CONFIG,
) -> List[ScoredItem]:
    """
    Select a diversified ordering from candidates sorted by final_score (desc).

    Pass 1 walks the list and admits an item when neither its primary category
    nor its location has been used by an admitted item (a missing category or
    location never conflicts), until diversity_slots are filled.
    Pass 2 backfills with the highest-scoring remaining items up to
    diversity_max_results. Lists at or below diversity_min_items are returned
    as-is. The input list is not mutated.

    Returns:
        Ordered list of at most diversity_max_results ScoredItems, no id repeated.
    """
    if len(scored_list) <= config.diversity_min_items:
        return list(scored_list)

    selected: List[ScoredItem] = []
    selected_ids: Set[str] = set()
    used_categories: Set[str] = set()
    used_locations: Set[str] = set()

    for scored in scored_list:
        if len(selected) >= config.diversity_slots:
            break
        item = scored.item
        if item.id in selected_ids:
            continue
        category = item.primary_category or ""
        location = item.location or ""
        if category and category in used_categories:
            continue
        if location and location in used_locations:
            continue
        selected.append(scored)
        selected_ids.add(item.id)
        if category:
            used_categories.add(category)
        if location:
            used_locations.add(location)

    for scored in scored_list:
        if len(selected) >= config.diversity_max_results:
            break
        if scored.item.id in selected_ids:
            continue
        selected.append(scored)
        selected_ids.add(scored.item.id)

    return selected
