"""Test configuration.

Puts `api/` on sys.path so `from core import db` style imports resolve the
same way they do when the service runs from inside `api/`.
"""
from __future__ import annotations

import pathlib
import sys

API = pathlib.Path(__file__).resolve().parent / "api"

if str(API) not in sys.path:
    sys.path.insert(0, str(API))
