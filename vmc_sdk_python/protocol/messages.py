"""
VMC message and command types.

A Message is what the transport delivers: an OSC address and its argument
list. Commands are the decoded, typed form of a Message, one class per VMC
address.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Message:
    """
    One OSC message.

    Attributes:
        address: OSC address, e.g. "/VMC/Ext/Bone/Pos" (None if missing)
        values: Arguments as int, float or str (None if missing)
    """

    address: Optional[str]
    values: Optional[tuple]

    def __init__(self, address, values=()):
        object.__setattr__(self, "address", address)
        object.__setattr__(self, "values", tuple(values) if values is not None else None)


class Rejection(enum.Enum):
    """Why a Message did not decode to a command."""

    NULL_MESSAGE = "null message"
    UNRECOGNIZED = "unrecognized"


class TrackingKind(enum.Enum):
    HMD = "hmd"
    CONTROLLER = "controller"
    TRACKER = "tracker"


Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]  # (x, y, z, w)


@dataclass(frozen=True)
class Available:
    available: int


@dataclass(frozen=True)
class RemoteTime:
    time: float


@dataclass(frozen=True)
class ScaleOffset:
    scale: Vector3
    offset: Vector3


@dataclass(frozen=True)
class RootPose:
    name: str
    position: Vector3
    rotation: Quaternion
    scale_offset: Optional[ScaleOffset] = None


@dataclass(frozen=True)
class BonePose:
    name: str
    position: Vector3
    rotation: Quaternion


@dataclass(frozen=True)
class BlendShapeValue:
    name: str
    value: float


@dataclass(frozen=True)
class BlendShapeApply:
    pass


@dataclass(frozen=True)
class CameraPose:
    name: str
    position: Vector3
    rotation: Quaternion
    fov: float


@dataclass(frozen=True)
class ControllerInput:
    """Controller button or axis event from /VMC/Ext/Con."""

    active: int
    name: str
    is_left: int
    is_touch: int
    is_axis: int
    axis: Vector3


@dataclass(frozen=True)
class KeyInput:
    """Keyboard event from /VMC/Ext/Key."""

    active: int
    name: str
    keycode: int


@dataclass(frozen=True)
class MidiNote:
    active: int
    channel: int
    note: int
    velocity: float


@dataclass(frozen=True)
class MidiCCValue:
    knob: int
    value: float


@dataclass(frozen=True)
class MidiCCBit:
    knob: int
    active: int


@dataclass(frozen=True)
class TrackingPose:
    """Raw device pose (HMD, controller or tracker) in world space."""

    kind: TrackingKind
    serial: str
    position: Vector3
    rotation: Quaternion
