"""
Lowpass filters for bone and camera transforms.

Position: accum = accum * k + new * (1 - k)
Rotation: accum = slerp(accum, new, 1 - k)

An accumulator only changes when its filter is used; while a filter is
disabled the raw value is written and the accumulator keeps its last
filtered value.
"""

import numpy as np

from ..skeleton.humanoid import HumanBodyBones
from ..utils.quat_utils import quat_identity, quat_slerp


def lowpass_position(accum, new, k):
    return accum * k + np.asarray(new, dtype=float) * (1.0 - k)


def lowpass_rotation(accum, new, k):
    return quat_slerp(accum, new, 1.0 - k)


class TransformFilter:
    """Position and rotation accumulators for a single transform (camera)."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.position = np.zeros(3)
        self.rotation = quat_identity()

    def filter_position(self, pos, k):
        self.position = lowpass_position(self.position, pos, k)
        return self.position.copy()

    def filter_rotation(self, rot, k):
        self.rotation = lowpass_rotation(self.rotation, rot, k)
        return self.rotation.copy()


class BoneFilterBank:
    """
    Per-bone accumulators indexed by HumanBodyBones.

    positions: (N, 3) array, zero initialized
    rotations: (N, 4) array of (x, y, z, w), identity initialized
    """

    def __init__(self):
        self.reset()

    def reset(self):
        n = len(HumanBodyBones)
        self.positions = np.zeros((n, 3))
        self.rotations = np.tile(quat_identity(), (n, 1))

    def filter_position(self, bone, pos, k):
        i = int(bone)
        self.positions[i] = lowpass_position(self.positions[i], pos, k)
        return self.positions[i].copy()

    def filter_rotation(self, bone, rot, k):
        i = int(bone)
        self.rotations[i] = lowpass_rotation(self.rotations[i], rot, k)
        return self.rotations[i].copy()
