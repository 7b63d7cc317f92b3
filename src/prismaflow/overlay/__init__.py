"""Post-processing of rendered SVG: rotated section labels and hyperlinks.

Both passes locate nodes through the variant's rendered ids and are
idempotent, so they can be applied in either order.
"""

from .labels import add_section_labels
from .links import add_hyperlinks

__all__ = ["add_section_labels", "add_hyperlinks"]
