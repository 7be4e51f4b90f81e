"""
ExternalReceiver - applies VMC protocol messages to an avatar.

This module provides the ExternalReceiver class. Each message delivered to a
receiver is decoded, applied to the receiver's model (root, bones,
blendshapes), camera and input listeners, and then forwarded to the next
receiver of the daisy chain.

A receiver shuts down permanently (until reset()) when the chain runs away
or, in strict mode, on any message that does not follow the protocol.
"""

import logging

import numpy as np

from ..protocol.decoder import decode
from ..protocol.messages import (
    Rejection,
    TrackingKind,
    Available,
    RemoteTime,
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
from ..skeleton.humanoid import BoneNameCache, FINGER_BONES, EYE_BONES
from .config import ReceiverConfig
from .events import InputEvent
from .filters import BoneFilterBank, TransformFilter

logger = logging.getLogger(__name__)


# Chains deeper than this are treated as an infinite loop
MAX_CHAIN_CALL_COUNT = 100

STATUS_WAITING_FOR_VMC = "Waiting for VMC..."
STATUS_WAITING_FOR_MASTER = "Waiting for Master..."
STATUS_WAITING_FOR_LOAD = "Waiting for [Load VRM]"
STATUS_MODEL_NOT_FOUND = "Model not found."
STATUS_BAD_MESSAGE = "Bad message."
STATUS_COMMUNICATION_ERROR = "Communication error."
STATUS_INFINITE_LOOP = "Infinite loop detected!"
STATUS_OK = "OK"


def is_daisy_chain_receiver(obj):
    """True if obj can take part in a daisy chain."""
    return callable(getattr(obj, "message_daisy_chain", None))


class ExternalReceiver:
    """
    Applies VMC messages to a humanoid model and forwards them down a chain.

    The data flow for every message:
    1. message_daisy_chain(message, call_count) drops it if shut down
    2. The message is decoded against the VMC address table
    3. The command is applied to the model, camera or listeners
    4. The message is forwarded to next_receiver with call_count + 1

    Example usage:
        model = HumanoidModel(blend_shape_proxy=BlendShapeProxy())
        receiver = ExternalReceiver(model=model)
        receiver.key_input_action.add_listener(on_key)

        server = OscServer(receiver, port=39539)
        server.start()
        ...
        server.stop()

    Chaining:
        first = ExternalReceiver(model=avatar)
        second = ExternalReceiver(model=mirror_avatar)
        first.next_receiver = second
    """

    def __init__(
        self,
        model=None,
        config: ReceiverConfig = None,
        root_transform=None,
        camera=None,
        next_receiver=None,
        hmd_debug_transform=None,
        controller_debug_transform=None,
        tracker_debug_transform=None,
    ):
        """
        Initialize the receiver.

        Args:
            model: Pose target with get_bone_transform(bone), transform and an
                optional blend_shape_proxy attribute
            config: Synchronize and filter options (default: ReceiverConfig())
            root_transform: Transform driven by /VMC/Ext/Root/Pos
                (default: model.transform)
            camera: Camera driven by /VMC/Ext/Cam (transform, field_of_view)
            next_receiver: Next receiver of the daisy chain
            hmd_debug_transform: Transform showing /VMC/Ext/Hmd/Pos
            controller_debug_transform: Transform showing /VMC/Ext/Con/Pos
            tracker_debug_transform: Transform showing /VMC/Ext/Tra/Pos
        """
        self.config = config if config is not None else ReceiverConfig()
        self.root_transform = root_transform
        self.camera = camera
        self.next_receiver = next_receiver
        self.debug_transforms = {
            TrackingKind.HMD: hmd_debug_transform,
            TrackingKind.CONTROLLER: controller_debug_transform,
            TrackingKind.TRACKER: tracker_debug_transform,
        }

        self.key_input_action = InputEvent("key_input_action")
        self.controller_input_action = InputEvent("controller_input_action")
        self.midi_note_action = InputEvent("midi_note_action")
        self.midi_cc_value_action = InputEvent("midi_cc_value_action")
        self.midi_cc_bit_action = InputEvent("midi_cc_bit_action")

        self.server = None
        self._model = None
        self.blend_shape_proxy = None
        self.model = model

        self.reset()

    def reset(self):
        """Reinitialize filters, bone cache, communication state and the shutdown latch."""
        self.bone_filters = BoneFilterBank()
        self.camera_filter = TransformFilter()
        self.bone_name_cache = BoneNameCache()
        self.available = 0
        self.remote_time = 0.0
        self.shutdown = False
        self.status_message = (STATUS_WAITING_FOR_VMC if self.server is not None
                               else STATUS_WAITING_FOR_MASTER)

    def attach_server(self, server):
        """Mark this receiver as the chain head fed by an OscServer."""
        self.server = server
        if not self.shutdown:
            self.status_message = STATUS_WAITING_FOR_VMC

    @property
    def model(self):
        return self._model

    @model.setter
    def model(self, model):
        if model is self._model:
            return
        self._model = model
        self.blend_shape_proxy = getattr(model, "blend_shape_proxy", None)
        if model is not None:
            logger.info(f"[ExternalReceiver] New model detected: {getattr(model, 'name', model)}")

    def get_available(self):
        return self.available

    def get_remote_time(self):
        return self.remote_time

    def _get_blend_shape_proxy(self):
        # the proxy may be attached to the model after assignment
        if self.blend_shape_proxy is None:
            self.blend_shape_proxy = getattr(self._model, "blend_shape_proxy", None)
        return self.blend_shape_proxy

    def _get_root_transform(self):
        if self.root_transform is not None:
            return self.root_transform
        return getattr(self._model, "transform", None)

    # ------------------------------------------------------------------
    # Daisy chain
    # ------------------------------------------------------------------

    def on_data_received(self, message):
        """Entry point for the transport: start a chain at call count 0."""
        self.message_daisy_chain(message, 0)

    def message_daisy_chain(self, message, call_count: int):
        """
        Process a message and pass it to the next receiver.

        Args:
            message: Message to process
            call_count: Number of receivers this message already went through
        """
        if self.shutdown:
            return

        self.process_message(message)

        if self.next_receiver is None:
            return

        if call_count > MAX_CHAIN_CALL_COUNT:
            logger.error("[ExternalReceiver] Too many call(maybe infinite loop).")
            self.status_message = STATUS_INFINITE_LOOP
            self.shutdown = True
        elif is_daisy_chain_receiver(self.next_receiver):
            self.next_receiver.message_daisy_chain(message, call_count + 1)
        else:
            logger.error(f"[ExternalReceiver] NextReceiver {type(self.next_receiver).__name__} "
                         f"does not implement message_daisy_chain. set None")
            self.next_receiver = None

    # ------------------------------------------------------------------
    # Message processing
    # ------------------------------------------------------------------

    def process_message(self, message):
        """Decode one message and apply it. Never raises for bad messages."""
        command = decode(message)

        if command is Rejection.NULL_MESSAGE:
            self.status_message = STATUS_BAD_MESSAGE
            if self.config.strict_mode:
                logger.error("[ExternalReceiver] null message received")
                self.shutdown = True
            return

        if self._model is None or self._get_root_transform() is None:
            self.status_message = STATUS_MODEL_NOT_FOUND
            return

        if command is Rejection.UNRECOGNIZED:
            if self.config.strict_mode:
                logger.error(f"[ExternalReceiver] {message.address} is not valid")
                self.status_message = STATUS_COMMUNICATION_ERROR
                self.shutdown = True
            return

        self._apply(command)

    def _apply(self, command):
        if isinstance(command, Available):
            self.available = command.available
            if self.available == 0:
                self.status_message = STATUS_WAITING_FOR_LOAD
        elif isinstance(command, RemoteTime):
            self.remote_time = command.time
        elif isinstance(command, RootPose):
            self._root_synchronize(command)
        elif isinstance(command, BonePose):
            self._bone_synchronize(command)
        elif isinstance(command, BlendShapeValue):
            proxy = self._get_blend_shape_proxy()
            if self.config.blend_shape_synchronize and proxy is not None:
                proxy.accumulate_value(command.name, command.value)
        elif isinstance(command, BlendShapeApply):
            proxy = self._get_blend_shape_proxy()
            if self.config.blend_shape_synchronize and proxy is not None:
                proxy.apply()
        elif isinstance(command, CameraPose):
            self._camera_synchronize(command)
        elif isinstance(command, ControllerInput):
            self.controller_input_action.invoke(command)
        elif isinstance(command, KeyInput):
            self.key_input_action.invoke(command)
        elif isinstance(command, MidiNote):
            logger.info(f"[ExternalReceiver] Note {command.active}/{command.channel}/"
                        f"{command.note}/{command.velocity}")
            self.midi_note_action.invoke(command)
        elif isinstance(command, MidiCCValue):
            logger.info(f"[ExternalReceiver] CC Val {command.knob}/{command.value}")
            self.midi_cc_value_action.invoke(command)
        elif isinstance(command, MidiCCBit):
            logger.info(f"[ExternalReceiver] CC Bit {command.knob}/{command.active}")
            self.midi_cc_bit_action.invoke(command)
        elif isinstance(command, TrackingPose):
            self._tracking_debug(command)

    def _root_synchronize(self, pose):
        self.status_message = STATUS_OK
        root = self._get_root_transform()

        if self.config.root_position_synchronize:
            root.local_position = np.array(pose.position, dtype=float)
        if self.config.root_rotation_synchronize:
            root.local_rotation = np.array(pose.rotation, dtype=float)

        # MR scale and offset (v2.1 extended root packet only)
        if self.config.root_scale_offset_synchronize and pose.scale_offset is not None:
            with np.errstate(divide="ignore"):
                root.local_scale = 1.0 / np.array(pose.scale_offset.scale, dtype=float)
            root.position = root.position - np.array(pose.scale_offset.offset, dtype=float)

    def _bone_synchronize(self, pose):
        bone = self.bone_name_cache.resolve(pose.name)
        if bone is None:
            return
        t = self._model.get_bone_transform(bone)
        if t is None:
            return

        cfg = self.config
        if bone in FINGER_BONES:
            if not cfg.hand_pose_synchronize_cutoff:
                self._bone_synchronize_single(t, bone, pose, False, False)
        elif bone in EYE_BONES:
            if not cfg.eye_bone_synchronize_cutoff:
                self._bone_synchronize_single(t, bone, pose, False, False)
        else:
            self._bone_synchronize_single(t, bone, pose,
                                          cfg.bone_position_filter_enable,
                                          cfg.bone_rotation_filter_enable)

    def _bone_synchronize_single(self, t, bone, pose, pos_filter, rot_filter):
        k = self.config.bone_filter

        if self.config.bone_position_synchronize:
            if pos_filter:
                t.local_position = self.bone_filters.filter_position(bone, pose.position, k)
            else:
                t.local_position = np.array(pose.position, dtype=float)

        if rot_filter:
            t.local_rotation = self.bone_filters.filter_rotation(bone, pose.rotation, k)
        else:
            t.local_rotation = np.array(pose.rotation, dtype=float)

    def _camera_synchronize(self, pose):
        camera = self.camera
        if camera is None or getattr(camera, "transform", None) is None:
            return

        cfg = self.config
        k = cfg.camera_filter
        if cfg.camera_position_filter_enable:
            camera.transform.local_position = self.camera_filter.filter_position(pose.position, k)
        else:
            camera.transform.local_position = np.array(pose.position, dtype=float)

        if cfg.camera_rotation_filter_enable:
            camera.transform.local_rotation = self.camera_filter.filter_rotation(pose.rotation, k)
        else:
            camera.transform.local_rotation = np.array(pose.rotation, dtype=float)

        camera.field_of_view = pose.fov

    def _tracking_debug(self, pose):
        target = self.debug_transforms.get(pose.kind)
        if target is not None:
            target.position = np.array(pose.position, dtype=float)
            target.rotation = np.array(pose.rotation, dtype=float)
        logger.debug(f"[ExternalReceiver] {pose.kind.value} pos {pose.serial} : "
                     f"{pose.position}/{pose.rotation}")
