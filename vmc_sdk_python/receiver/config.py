"""
Receiver configuration.
"""

import json
from dataclasses import dataclass, fields, asdict


@dataclass
class ReceiverConfig:
    """
    Synchronize, cutoff and filter options for an ExternalReceiver.

    Options can be changed at any time through receiver.config; the next
    message uses the new values.
    """

    # Root synchronize
    root_position_synchronize: bool = True
    root_rotation_synchronize: bool = True
    root_scale_offset_synchronize: bool = False  # MR scale (v2.1 root packets)

    # Other synchronize
    blend_shape_synchronize: bool = True
    bone_position_synchronize: bool = True  # rotation is always applied

    # Cutoff
    hand_pose_synchronize_cutoff: bool = False
    eye_bone_synchronize_cutoff: bool = False

    # Protocol check: shut down on any unknown or malformed message
    strict_mode: bool = False

    # Lowpass filters
    bone_position_filter_enable: bool = False
    bone_rotation_filter_enable: bool = False
    bone_filter: float = 0.7

    camera_position_filter_enable: bool = False
    camera_rotation_filter_enable: bool = False
    camera_filter: float = 0.95

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Raises:
            ValueError: If a filter coefficient is outside (0, 1)
        """
        for name in ("bone_filter", "camera_filter"):
            k = getattr(self, name)
            if not 0.0 < k < 1.0:
                raise ValueError(f"{name} must be in (0, 1), got {k}")

    @classmethod
    def from_dict(cls, data: dict):
        """
        Build a config from a dict, e.g. parsed JSON.

        Raises:
            ValueError: If data contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown receiver config keys: {unknown}. "
                             f"Supported: {sorted(known)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path):
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self):
        return asdict(self)
