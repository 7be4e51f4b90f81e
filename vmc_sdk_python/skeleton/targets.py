"""
In-memory pose targets.

These classes provide the capabilities the receiver writes to: a Transform
per bone, a humanoid model that maps bone slots to transforms, a blendshape
proxy and a camera. Applications embedding the receiver in a scene graph can
provide their own objects with the same attributes instead.
"""

import numpy as np

from ..utils.quat_utils import (
    quat_identity,
    quat_mul,
    quat_conj,
    quat_normalize,
    rotate_vec_by_quat,
)
from .humanoid import HumanBodyBones


class Transform:
    """
    Position/rotation/scale node with an optional parent.

    local_* attributes are relative to the parent; position and rotation are
    world space. Rotations are (x, y, z, w) quaternions.
    """

    def __init__(self, name: str = "", parent=None):
        self.name = name
        self.parent = parent
        self.local_position = np.zeros(3)
        self.local_rotation = quat_identity()
        self.local_scale = np.ones(3)

    def __repr__(self):
        return (f"Transform({self.name!r}, pos={self.local_position.tolist()}, "
                f"rot={self.local_rotation.tolist()})")

    @property
    def lossy_scale(self):
        if self.parent is None:
            return np.array(self.local_scale, dtype=float)
        return self.parent.lossy_scale * self.local_scale

    @property
    def position(self):
        if self.parent is None:
            return np.array(self.local_position, dtype=float)
        p = self.parent
        return p.position + rotate_vec_by_quat(p.lossy_scale * self.local_position, p.rotation)

    @position.setter
    def position(self, value):
        value = np.asarray(value, dtype=float)
        if self.parent is None:
            self.local_position = value
            return
        p = self.parent
        local = rotate_vec_by_quat(value - p.position, quat_conj(p.rotation))
        self.local_position = local / p.lossy_scale

    @property
    def rotation(self):
        if self.parent is None:
            return np.array(self.local_rotation, dtype=float)
        return quat_normalize(quat_mul(self.parent.rotation, self.local_rotation))

    @rotation.setter
    def rotation(self, value):
        value = np.asarray(value, dtype=float)
        if self.parent is None:
            self.local_rotation = value
            return
        self.local_rotation = quat_normalize(quat_mul(quat_conj(self.parent.rotation), value))


class BlendShapeProxy:
    """
    Accumulate-then-apply blendshape weights.

    Values accumulated between two apply() calls become visible together.
    Accumulating the same key twice before apply() adds the weights.
    """

    def __init__(self):
        self.accumulated = {}
        self.values = {}
        self.apply_count = 0

    def accumulate_value(self, name: str, value: float):
        self.accumulated[name] = self.accumulated.get(name, 0.0) + value

    def apply(self):
        self.values.update(self.accumulated)
        self.accumulated.clear()
        self.apply_count += 1

    def get_value(self, name: str) -> float:
        return self.values.get(name, 0.0)


class Camera:
    """Camera with a transform and a vertical field of view in degrees."""

    def __init__(self, name: str = "Camera", field_of_view: float = 60.0):
        self.transform = Transform(name)
        self.field_of_view = field_of_view


class HumanoidModel:
    """
    Humanoid pose target with one Transform per bone slot.

    Bones are parented flat under the model root transform. Bones listed in
    missing_bones have no transform, as on rigs without optional slots
    (UpperChest, Jaw, toes, ...).

    Example usage:
        model = HumanoidModel(blend_shape_proxy=BlendShapeProxy())
        receiver = ExternalReceiver(model=model)
        ...
        model.get_bone_transform(HumanBodyBones.Head).local_rotation
    """

    def __init__(self, name: str = "Model", blend_shape_proxy=None, missing_bones=()):
        self.name = name
        self.transform = Transform(name)
        self.blend_shape_proxy = blend_shape_proxy
        missing = set(missing_bones)
        self.bones = {
            bone: Transform(bone.name, parent=self.transform)
            for bone in HumanBodyBones
            if bone not in missing
        }

    def get_bone_transform(self, bone):
        return self.bones.get(bone)
