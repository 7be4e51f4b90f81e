"""
VMC protocol: OSC packet parsing, message and command types, and the
address-table decoder.
"""

from .messages import (
    Message,
    Rejection,
    TrackingKind,
    Available,
    RemoteTime,
    ScaleOffset,
    RootPose,
    BonePose,
    BlendShapeValue,
    BlendShapeApply,
    CameraPose,
    ControllerInput,
    KeyInput,
    MidiNote,
    MidiCCValue,
    MidiCCBit,
    TrackingPose,
)
from .decoder import decode, matches_signature, ADDRESS_TABLE
from .osc_reader import OscReader

__all__ = [
    "Message",
    "Rejection",
    "TrackingKind",
    "Available",
    "RemoteTime",
    "ScaleOffset",
    "RootPose",
    "BonePose",
    "BlendShapeValue",
    "BlendShapeApply",
    "CameraPose",
    "ControllerInput",
    "KeyInput",
    "MidiNote",
    "MidiCCValue",
    "MidiCCBit",
    "TrackingPose",
    "decode",
    "matches_signature",
    "ADDRESS_TABLE",
    "OscReader",
]
