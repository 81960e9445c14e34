"""
Image Brief Service

Templated image briefs built from a fixed, ordered catalog of visual themes.
Each brief states the theme in the image format required by the policy spec
(aspect, recommended size, formats, size cap). Briefs do not depend on item
content.
"""

from typing import List, Optional, Tuple

from creative_analysis.models.schemas import ImageBrief, ImagePolicy


IMAGE_THEMES: Tuple[str, ...] = (
    "face with clear eye contact",
    "close-up product + price tag",
    "retailer/logo near product",
    "before/after composition",
    "number badge overlay",
    "human + product in frame",
    "indoor storefront",
    "high contrast background",
)

DEFAULT_BRIEF_LIMIT = 12

# jpeg and jpg describe the same format
_FORMAT_ALIASES = {"jpeg": "jpg"}


def format_label(formats: List[str]) -> str:
    """'JPG/PNG' style label from a list of file formats, aliases collapsed."""
    labels: List[str] = []
    for fmt in formats:
        label = _FORMAT_ALIASES.get(fmt.lower(), fmt.lower()).upper()
        if label not in labels:
            labels.append(label)
    return "/".join(labels)


def image_briefs(
    limit: int = DEFAULT_BRIEF_LIMIT,
    image_policy: Optional[ImagePolicy] = None,
) -> List[ImageBrief]:
    """
    One brief per theme, in catalog order, until themes or `limit` run out.

    Args:
        limit: Maximum number of briefs
        image_policy: Image rules to state in the prompt; defaults to
            16:9, ~1200x674, JPG/PNG, under 5MB

    Returns:
        List of ImageBrief
    """
    policy = image_policy or ImagePolicy()
    formats = format_label(policy.formats)
    briefs: List[ImageBrief] = []
    for theme in IMAGE_THEMES[:max(limit, 0)]:
        briefs.append(ImageBrief(
            prompt=(
                f"{theme} in {policy.aspect} at ~{policy.recommended}, {formats}, "
                f"minimal text, under {policy.maxSizeMB:g}MB"
            ),
            why=f"Derived from top items; theme emphasizes {theme}",
        ))
    return briefs
