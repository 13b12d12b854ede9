"""calpick: date / range / time selection engine for calendar widgets.

Public API:
  - import from `calpick.api` (preferred) or `import calpick` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
