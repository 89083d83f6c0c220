from .date import to_date
from .mathutils import is_integral, round_half_away

__all__ = ["to_date", "round_half_away", "is_integral"]
