"""
VMC message decoder.

Matches a Message against the table of known VMC addresses and turns it into
a typed command. A message matches only if its address is known and every
required argument is present with the exact type ('i' int, 'f' float,
's' string). A known address with bad arguments is reported the same way as
an unknown address.
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


# Root packets longer than this carry scale (3) and offset (3) fields (v2.1)
ROOT_PACKET_LENGTH_OF_SCALE_AND_OFFSET = 8
ROOT_SCALE_OFFSET_SIGNATURE = "ffffff"


def _is_int(v):
    return isinstance(v, int) and not isinstance(v, bool)


def _is_float(v):
    return isinstance(v, float)


def _is_str(v):
    return isinstance(v, str)


_TYPE_CHECKS = {"i": _is_int, "f": _is_float, "s": _is_str}


def matches_signature(values, signature, start=0):
    """
    Check that values[start:] begins with arguments of the given type tags.

    Args:
        values: Argument sequence
        signature: Type tags, e.g. "sfffffff"
        start: Index of the first argument to check

    Returns:
        True if every tagged position exists and has the exact type
    """
    if len(values) < start + len(signature):
        return False
    for i, tag in enumerate(signature):
        if not _TYPE_CHECKS[tag](values[start + i]):
            return False
    return True


def _vec3(v, k):
    return (v[k], v[k+1], v[k+2])


def _quat(v, k):
    return (v[k], v[k+1], v[k+2], v[k+3])


def _decode_root(v):
    scale_offset = None
    if (len(v) > ROOT_PACKET_LENGTH_OF_SCALE_AND_OFFSET
            and matches_signature(v, ROOT_SCALE_OFFSET_SIGNATURE,
                                  ROOT_PACKET_LENGTH_OF_SCALE_AND_OFFSET)):
        scale_offset = ScaleOffset(scale=_vec3(v, 8), offset=_vec3(v, 11))
    return RootPose(v[0], _vec3(v, 1), _quat(v, 4), scale_offset)


def _tracking(kind):
    def build(v):
        return TrackingPose(kind, v[0], _vec3(v, 1), _quat(v, 4))
    return build


# address -> (required signature, builder)
ADDRESS_TABLE = {
    "/VMC/Ext/OK": ("i", lambda v: Available(v[0])),
    "/VMC/Ext/T": ("f", lambda v: RemoteTime(v[0])),
    "/VMC/Ext/Root/Pos": ("sfffffff", _decode_root),
    "/VMC/Ext/Bone/Pos": ("sfffffff", lambda v: BonePose(v[0], _vec3(v, 1), _quat(v, 4))),
    "/VMC/Ext/Blend/Val": ("sf", lambda v: BlendShapeValue(v[0], v[1])),
    "/VMC/Ext/Blend/Apply": ("", lambda v: BlendShapeApply()),
    "/VMC/Ext/Cam": ("sffffffff", lambda v: CameraPose(v[0], _vec3(v, 1), _quat(v, 4), v[8])),
    "/VMC/Ext/Con": ("isiiifff", lambda v: ControllerInput(v[0], v[1], v[2], v[3], v[4], _vec3(v, 5))),
    "/VMC/Ext/Key": ("isi", lambda v: KeyInput(v[0], v[1], v[2])),
    "/VMC/Ext/Midi/Note": ("iiif", lambda v: MidiNote(v[0], v[1], v[2], v[3])),
    "/VMC/Ext/Midi/CC/Val": ("if", lambda v: MidiCCValue(v[0], v[1])),
    "/VMC/Ext/Midi/CC/Bit": ("ii", lambda v: MidiCCBit(v[0], v[1])),
    "/VMC/Ext/Hmd/Pos": ("sfffffff", _tracking(TrackingKind.HMD)),
    "/VMC/Ext/Con/Pos": ("sfffffff", _tracking(TrackingKind.CONTROLLER)),
    "/VMC/Ext/Tra/Pos": ("sfffffff", _tracking(TrackingKind.TRACKER)),
}


def decode(message: Message):
    """
    Decode one message.

    Never raises for message content.

    Args:
        message: Message to decode

    Returns:
        A command instance, or a Rejection:
            - Rejection.NULL_MESSAGE if address or values is None
            - Rejection.UNRECOGNIZED if the address is unknown or its
              arguments do not match the required types
    """
    if message is None or message.address is None or message.values is None:
        return Rejection.NULL_MESSAGE

    entry = ADDRESS_TABLE.get(message.address)
    if entry is None:
        return Rejection.UNRECOGNIZED

    signature, build = entry
    if not matches_signature(message.values, signature):
        return Rejection.UNRECOGNIZED
    return build(message.values)
