"""
Engine configuration — factor weights, decay constants, reason points, feed limits.

DiscoveryConfig defaults are defined here. The host may pass a dict
(e.g. from a discovery_config.json); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator


class DiscoveryConfig(BaseModel):
    """Configuration for the discovery ranking engine."""

    # -------------------------------------------------------------------------
    # Factor Weights (must sum to 1.0)
    # final = w_rel * relevance + w_pop * popularity + w_fresh * freshness
    #         + w_qual * quality + w_prox * proximity
    # -------------------------------------------------------------------------

    weight_relevance: float = 0.40
    weight_popularity: float = 0.25
    weight_freshness: float = 0.15
    weight_quality: float = 0.15
    weight_proximity: float = 0.05

    # -------------------------------------------------------------------------
    # Relevance
    # 0.5 base, + destination match, + category overlap fraction, + style match
    # -------------------------------------------------------------------------

    relevance_base: float = 0.5
    relevance_destination_bonus: float = 0.2
    relevance_category_bonus: float = 0.2
    relevance_style_bonus: float = 0.1

    # -------------------------------------------------------------------------
    # Popularity
    # min(log10(weighted_engagement + 1) / popularity_log_divisor, 1)
    # -------------------------------------------------------------------------

    popularity_default: float = 0.3
    popularity_log_divisor: float = 4.0
    engagement_weight_view: float = 1.0
    engagement_weight_save: float = 5.0
    engagement_weight_like: float = 3.0
    engagement_weight_comment: float = 4.0
    engagement_weight_share: float = 7.0

    # -------------------------------------------------------------------------
    # Freshness: exp(-days / freshness_decay_days)
    # -------------------------------------------------------------------------

    freshness_decay_days: float = 30.0

    # -------------------------------------------------------------------------
    # Quality: completeness * w_completeness + rating_score * w_rating
    # -------------------------------------------------------------------------

    quality_weight_completeness: float = 0.6
    quality_weight_rating: float = 0.4
    quality_default_rating_score: float = 0.5
    completeness_title: float = 0.1
    completeness_description: float = 0.2
    completeness_location: float = 0.1
    completeness_dates: float = 0.1
    completeness_activities: float = 0.2
    completeness_image: float = 0.1
    # Descriptions must be longer than this to count as present.
    min_description_length: int = 10

    # -------------------------------------------------------------------------
    # Proximity
    # -------------------------------------------------------------------------

    proximity_match: float = 1.0
    proximity_neutral: float = 0.5
    # Great-circle radius shared by proximity scoring and the location reason.
    nearby_radius_km: float = 50.0

    # -------------------------------------------------------------------------
    # Trending: blend_wilson * wilson + blend_recency * exp(-days / decay_days)
    # -------------------------------------------------------------------------

    trending_z: float = 1.96
    trending_weight_wilson: float = 0.7
    trending_weight_recency: float = 0.3
    trending_recency_decay_days: float = 7.0

    # -------------------------------------------------------------------------
    # Reasons (additive "why this" score)
    # score = sum(weight * base_points[source]) + recency * decay * 10 + popularity * 5
    # -------------------------------------------------------------------------

    reason_base_points: Dict[str, float] = Field(
        default_factory=lambda: {
            "liked": 10.0,
            "searched": 8.0,
            "viewed": 5.0,
            "friend": 7.0,
            "followed": 6.0,
            "trending": 4.0,
            "location": 6.0,
            "seasonal": 3.0,
        }
    )
    reason_time_decay: float = 0.8
    reason_recency_scale: float = 10.0
    reason_popularity_scale: float = 5.0
    # Items starting within this many days earn a seasonal reason.
    seasonal_window_days: int = 90

    # -------------------------------------------------------------------------
    # Diversity (greedy pass over the sorted list)
    # -------------------------------------------------------------------------

    # Lists at or below this size are returned unchanged.
    diversity_min_items: int = 5
    # Head slots reserved for unique category/location.
    diversity_slots: int = 10
    # Total size after backfill.
    diversity_max_results: int = 20

    # -------------------------------------------------------------------------
    # Feed sections
    # -------------------------------------------------------------------------

    personal_section_limit: int = 5
    section_limit: int = 10
    similar_top_categories: int = 3
    similar_items_per_category: int = 6
    default_page_size: int = 20

    # -------------------------------------------------------------------------
    # Similar items: base + location + category share + style + budget, capped at 1
    # -------------------------------------------------------------------------

    similar_base: float = 0.5
    similar_location_bonus: float = 0.3
    similar_category_bonus: float = 0.2
    similar_style_bonus: float = 0.15
    similar_budget_bonus: float = 0.1

    # -------------------------------------------------------------------------
    # Placement boost (tier -> multiplier, applied after combination)
    # -------------------------------------------------------------------------

    placement_boosts: Dict[str, float] = Field(
        default_factory=lambda: {"basic": 1.0, "premium": 1.4, "enterprise": 1.8}
    )

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        total = (
            self.weight_relevance
            + self.weight_popularity
            + self.weight_freshness
            + self.weight_quality
            + self.weight_proximity
        )
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Factor weights must sum to 1.0, got {total}")
        trending_total = self.trending_weight_wilson + self.trending_weight_recency
        if abs(trending_total - 1.0) > 0.01:
            raise ValueError(f"Trending weights must sum to 1.0, got {trending_total}")
        quality_total = self.quality_weight_completeness + self.quality_weight_rating
        if abs(quality_total - 1.0) > 0.01:
            raise ValueError(f"Quality weights must sum to 1.0, got {quality_total}")
        return self

    @property
    def factor_weights(self) -> Dict[str, float]:
        """Factor name -> weight, in combination order."""
        return {
            "relevance": self.weight_relevance,
            "popularity": self.weight_popularity,
            "freshness": self.weight_freshness,
            "quality": self.weight_quality,
            "proximity": self.weight_proximity,
        }

    def boost_for_tier(self, tier: Optional[str]) -> float:
        """Placement multiplier for a tier; 1.0 for no tier or an unknown one."""
        if not tier:
            return 1.0
        return self.placement_boosts.get(tier, 1.0)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "DiscoveryConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "factor_weights" in config_dict:
            for name, value in config_dict["factor_weights"].items():
                flat[f"weight_{name}"] = value
        for section, prefix in (
            ("relevance", "relevance_"),
            ("popularity", "popularity_"),
            ("trending", "trending_"),
            ("similar", "similar_"),
        ):
            for key, value in config_dict.get(section, {}).items():
                flat[key if key.startswith(prefix) else prefix + key] = value
        if "engagement_weights" in config_dict:
            for name, value in config_dict["engagement_weights"].items():
                flat[f"engagement_weight_{name}"] = value
        if "freshness" in config_dict:
            fr = config_dict["freshness"]
            if "decay_days" in fr:
                flat["freshness_decay_days"] = fr["decay_days"]
        if "quality" in config_dict:
            q = config_dict["quality"]
            if "weight_completeness" in q:
                flat["quality_weight_completeness"] = q["weight_completeness"]
            if "weight_rating" in q:
                flat["quality_weight_rating"] = q["weight_rating"]
            for name, value in q.get("completeness", {}).items():
                flat[f"completeness_{name}"] = value
        if "proximity" in config_dict:
            p = config_dict["proximity"]
            if "radius_km" in p:
                flat["nearby_radius_km"] = p["radius_km"]
        if "reasons" in config_dict:
            r = config_dict["reasons"]
            if "base_points" in r:
                flat["reason_base_points"] = {**cls().reason_base_points, **r["base_points"]}
            if "time_decay" in r:
                flat["reason_time_decay"] = r["time_decay"]
            if "seasonal_window_days" in r:
                flat["seasonal_window_days"] = r["seasonal_window_days"]
        if "diversity" in config_dict:
            d = config_dict["diversity"]
            flat["diversity_min_items"] = d.get("min_items", 5)
            flat["diversity_slots"] = d.get("slots", 10)
            flat["diversity_max_results"] = d.get("max_results", 20)
        if "feed" in config_dict:
            flat.update(config_dict["feed"])
        if "placement" in config_dict:
            flat["placement_boosts"] = dict(config_dict["placement"])
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = DiscoveryConfig()


def resolve_config(config: Optional["DiscoveryConfig"]) -> "DiscoveryConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
