"""
Product data models.

Plain data classes for the facts extracted from a product page.
Every instance lives for a single extraction call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

GROUP_SEPARATOR = " · "
MATERIAL_SEPARATOR = ", "


class SiteVariant(Enum):
    """Retailer family; decides which extractor runs."""
    COS = "cos"
    ARKET = "arket"
    PEEK = "peek"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ProductReference:
    """
    Identity of a product parsed from its URL.

    Only `url` and `variant` are always set. The locale and id fields are
    filled by sites that need them for the stock API request.
    """
    url: str
    variant: SiteVariant
    country: str = ""
    language: str = ""
    product_id: str = ""
    price_group: str = ""

    @property
    def locale(self) -> str:
        """Locale key such as "de-DE"."""
        return f"{self.language}-{self.country.upper()}"


@dataclass
class MaterialGroup:
    """One labelled part of a garment (e.g. shell, lining)."""
    label: str = ""
    materials: List[Tuple[str, str]] = field(default_factory=list)  # (material, percentage)

    def render(self, with_label: bool = False) -> str:
        parts = MATERIAL_SEPARATOR.join(
            f"{percentage}% {material}" for material, percentage in self.materials
        )
        if with_label and self.label:
            return f"{self.label}: {parts}"
        return parts


@dataclass
class MaterialComposition:
    """
    Ordered material breakdown.

    Percentages are kept exactly as the source wrote them and are never
    checked to add up to 100; split or partial data is common.
    """
    groups: List[MaterialGroup] = field(default_factory=list)

    def render(self) -> str:
        """Display string; group labels only appear when there are several groups."""
        with_label = len(self.groups) > 1
        return GROUP_SEPARATOR.join(group.render(with_label) for group in self.groups)


@dataclass(frozen=True)
class SizeEntry:
    """Stock availability of a single size."""
    name: str
    in_stock: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "inStock": self.in_stock}


@dataclass
class ExtractionResult:
    """
    Uniform outcome of one extraction.

    A missing `material` or `sizes` is a normal outcome: the page simply
    did not carry that fact. `error` is only set for fatal failures, in
    which case both data fields stay empty.
    """
    material: Optional[str] = None
    sizes: Optional[List[SizeEntry]] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "ExtractionResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Flat record handed to callers (and safe to cache verbatim)."""
        record: Dict[str, Any] = {
            "material": self.material,
            "sizes": [entry.to_dict() for entry in self.sizes] if self.sizes is not None else None,
        }
        if self.error is not None:
            record["error"] = self.error
        return record
