"""
Humanoid skeleton definitions and in-memory pose targets.
"""

from .humanoid import (
    HumanBodyBones,
    BoneNameCache,
    FINGER_BONES,
    EYE_BONES,
    UNRESOLVED,
)
from .targets import Transform, HumanoidModel, BlendShapeProxy, Camera

__all__ = [
    "HumanBodyBones",
    "BoneNameCache",
    "FINGER_BONES",
    "EYE_BONES",
    "UNRESOLVED",
    "Transform",
    "HumanoidModel",
    "BlendShapeProxy",
    "Camera",
]
