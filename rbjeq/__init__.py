# rbjeq/__init__.py
from .coefficients import FilterKind, Coefficients
from .filters import (
    Filter,
    new_low_pass, new_high_pass, new_all_pass, new_band_pass,
    new_band_reject, new_low_shelf, new_high_shelf, new_peaking,
)
from .design import design, FilterParameterError
from .utils import PI, get_pi, set_pi, unset_pi, override_pi, db_to_lin, lin_to_db

__all__ = [
    "FilterKind", "Coefficients", "Filter",
    "new_low_pass", "new_high_pass", "new_all_pass", "new_band_pass",
    "new_band_reject", "new_low_shelf", "new_high_shelf", "new_peaking",
    "design", "FilterParameterError",
    "PI", "get_pi", "set_pi", "unset_pi", "override_pi",
    "db_to_lin", "lin_to_db",
]
