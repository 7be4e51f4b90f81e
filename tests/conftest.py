import struct

import numpy as np
import pytest

from vmc_sdk_python.protocol import Message
from vmc_sdk_python.receiver import ExternalReceiver, ReceiverConfig
from vmc_sdk_python.skeleton import BlendShapeProxy, Camera, HumanoidModel

IDENTITY = (0.0, 0.0, 0.0, 1.0)
# 90 degrees about +Y, (x, y, z, w)
QUARTER_TURN_Y = (0.0, float(np.sin(np.pi / 4)), 0.0, float(np.cos(np.pi / 4)))


def bone_pos(name, pos=(0.0, 0.0, 0.0), rot=IDENTITY):
    return Message("/VMC/Ext/Bone/Pos", (name, *pos, *rot))


def root_pos(pos=(0.0, 0.0, 0.0), rot=IDENTITY, scale=None, offset=None):
    values = ("root", *pos, *rot)
    if scale is not None:
        values += (*scale, *offset)
    return Message("/VMC/Ext/Root/Pos", values)


def key_msg(name="a", keycode=65, active=1):
    return Message("/VMC/Ext/Key", (active, name, keycode))


def _osc_string(s):
    b = s.encode("utf-8") + b"\x00"
    return b + b"\x00" * (-len(b) % 4)


def encode_osc_message(address, args):
    """Encode an OSC message with i/f/s arguments."""
    tags = ","
    payload = b""
    for a in args:
        if isinstance(a, str):
            tags += "s"
            payload += _osc_string(a)
        elif isinstance(a, float):
            tags += "f"
            payload += struct.pack(">f", a)
        else:
            tags += "i"
            payload += struct.pack(">i", a)
    return _osc_string(address) + _osc_string(tags) + payload


def encode_osc_bundle(elements):
    data = _osc_string("#bundle") + struct.pack(">II", 0, 1)
    for element in elements:
        data += struct.pack(">i", len(element)) + element
    return data


@pytest.fixture
def model():
    return HumanoidModel(blend_shape_proxy=BlendShapeProxy())


@pytest.fixture
def camera():
    return Camera()


@pytest.fixture
def config():
    return ReceiverConfig()


@pytest.fixture
def receiver(model, camera, config):
    return ExternalReceiver(model=model, config=config, camera=camera)


class CountingReceiver:
    """Chain member that records every message it sees."""

    def __init__(self):
        self.calls = []

    def message_daisy_chain(self, message, call_count):
        self.calls.append((message, call_count))


def nested_bundle(levels, message=None):
    """A message wrapped in `levels` nested bundles."""
    data = message if message is not None else encode_osc_message("/VMC/Ext/OK", [1])
    for _ in range(levels):
        data = encode_osc_bundle([data])
    return data
