"""
Utility functions for VMC message processing.

This module provides:
    - quat_utils: Quaternion math utilities (x, y, z, w order)
    - logging: Console logging setup
"""

from .quat_utils import (
    quat_identity,
    quat_normalize,
    quat_mul,
    quat_conj,
    quat_slerp,
    quat_angle,
    rotate_vec_by_quat,
)
from .logging import setup_logging

__all__ = [
    "quat_identity",
    "quat_normalize",
    "quat_mul",
    "quat_conj",
    "quat_slerp",
    "quat_angle",
    "rotate_vec_by_quat",
    "setup_logging",
]
