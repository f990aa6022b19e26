"""
Data models for the Ranker module.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class HeuristicFactors:
    """The four multiplicative adjustments applied on top of a base score."""
    recency: float
    source: float
    keyword: float
    geo: float

    @property
    def multiplier(self) -> float:
        return self.recency * self.source * self.keyword * self.geo

    def describe(self) -> str:
        return (
            f"recency x{self.recency:.2f}, source x{self.source:.2f}, "
            f"keywords x{self.keyword:.2f}, region x{self.geo:.2f}"
        )

    def to_dict(self) -> dict:
        return {
            "recency": self.recency,
            "source": self.source,
            "keyword": self.keyword,
            "geo": self.geo,
            "multiplier": round(self.multiplier, 4),
        }
