"""
ExternalReceiver - applies VMC protocol messages to a humanoid avatar.

This package provides the receiver chain and a UDP server feeding it.

Example usage:
    from vmc_sdk_python.receiver import ExternalReceiver, OscServer
    from vmc_sdk_python.skeleton import HumanoidModel, BlendShapeProxy

    model = HumanoidModel(blend_shape_proxy=BlendShapeProxy())
    receiver = ExternalReceiver(model=model)
    server = OscServer(receiver, port=39539)
    server.start()

    while running:
        print(receiver.status_message, receiver.get_available())

    server.stop()
"""

from .config import ReceiverConfig
from .events import InputEvent
from .filters import BoneFilterBank, TransformFilter
from .external_receiver import ExternalReceiver, MAX_CHAIN_CALL_COUNT, is_daisy_chain_receiver
from .osc_server import OscServer, DEFAULT_VMC_PORT

__all__ = [
    "ReceiverConfig",
    "InputEvent",
    "BoneFilterBank",
    "TransformFilter",
    "ExternalReceiver",
    "MAX_CHAIN_CALL_COUNT",
    "is_daisy_chain_receiver",
    "OscServer",
    "DEFAULT_VMC_PORT",
]
