"""
VMC SDK Python - VMC protocol receiver for humanoid avatars.

This package receives avatar motion sent over the VMC protocol (OSC over UDP)
and applies it to a humanoid model: root and bone transforms with optional
lowpass filters, blendshapes, a camera, and keyboard / controller / MIDI
input events. Receivers can be daisy-chained so one stream drives several
avatars.

Main classes:
    - ExternalReceiver: Decodes and applies VMC messages, forwards down a chain
    - OscServer: Receives OSC packets via UDP and feeds a receiver chain
    - ReceiverConfig: Synchronize, cutoff and filter options
    - HumanoidModel: In-memory pose target with one transform per bone

Example usage:
    from vmc_sdk_python import ExternalReceiver, OscServer, HumanoidModel, BlendShapeProxy

    model = HumanoidModel(blend_shape_proxy=BlendShapeProxy())
    receiver = ExternalReceiver(model=model)
    server = OscServer(receiver, port=39539)
    server.start()

    while running:
        head = model.get_bone_transform(HumanBodyBones.Head)
        print(receiver.status_message, head.local_rotation)

    server.stop()
"""

from .protocol import Message, OscReader, decode
from .receiver import ExternalReceiver, OscServer, ReceiverConfig
from .skeleton import HumanBodyBones, HumanoidModel, BlendShapeProxy, Camera, Transform

__version__ = "0.1.0"
__all__ = [
    "Message",
    "OscReader",
    "decode",
    "ExternalReceiver",
    "OscServer",
    "ReceiverConfig",
    "HumanBodyBones",
    "HumanoidModel",
    "BlendShapeProxy",
    "Camera",
    "Transform",
]
