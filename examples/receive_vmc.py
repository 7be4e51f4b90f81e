#!/usr/bin/env python3
"""
Example: Receive VMC protocol data and apply it to an in-memory avatar.

This script starts an OscServer feeding an ExternalReceiver and periodically
prints the receiver status and a few bone transforms.

Usage:
    python receive_vmc.py --port 39539
    python receive_vmc.py --port 39539 --config receiver.json --verbose
    python receive_vmc.py --port 39539 --chain 2 --print_rate
"""

import argparse
import os
import sys
import time

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from vmc_sdk_python import (
    BlendShapeProxy,
    ExternalReceiver,
    HumanBodyBones,
    HumanoidModel,
    OscServer,
    ReceiverConfig,
)
from vmc_sdk_python.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Receive VMC protocol data via OSC")

    parser.add_argument(
        "--port",
        type=int,
        default=39539,
        help="UDP port to listen for VMC data (default: 39539)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with receiver options",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Shut down on any message outside the VMC protocol",
    )

    parser.add_argument(
        "--chain",
        type=int,
        default=1,
        help="Number of daisy-chained receivers (avatars) to drive (default: 1)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )

    parser.add_argument(
        "--print_rate",
        action="store_true",
        default=False,
        help="Print receive rate statistics",
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    config = ReceiverConfig.from_json(args.config) if args.config else ReceiverConfig()
    if args.strict:
        config.strict_mode = True

    # Build the chain: head <- fed by server, then followers
    receivers = []
    for i in range(max(args.chain, 1)):
        model = HumanoidModel(name=f"Avatar{i}", blend_shape_proxy=BlendShapeProxy())
        receiver = ExternalReceiver(model=model, config=config)
        if receivers:
            receivers[-1].next_receiver = receiver
        receivers.append(receiver)
    head = receivers[0]

    head.key_input_action.add_listener(
        lambda key: print(f"[Main] Key {key.name} ({key.keycode}) active={key.active}"))
    head.controller_input_action.add_listener(
        lambda con: print(f"[Main] Controller {con.name} active={con.active} axis={con.axis}"))

    print(f"[Main] Initializing OscServer on port {args.port}...")
    server = OscServer(head, port=args.port)
    server.start()

    print(f"[Main] Waiting for VMC data on port {args.port}...")
    print("[Main] Press Ctrl+C to stop")

    try:
        while True:
            time.sleep(1.0)
            for i, receiver in enumerate(receivers):
                hips = receiver.model.get_bone_transform(HumanBodyBones.Hips)
                pos = hips.local_position
                print(f"[Main] Receiver {i}: {receiver.status_message} "
                      f"Available: {receiver.get_available()} "
                      f"Time: {receiver.get_remote_time():.3f} "
                      f"Hips=({pos[0]:7.3f}, {pos[1]:7.3f}, {pos[2]:7.3f})"
                      f"{' [SHUTDOWN]' if receiver.shutdown else ''}")
            if args.print_rate:
                print(f"[Main] OSC receive rate: {server.get_receive_rate():.1f} Hz")

    except KeyboardInterrupt:
        print("\n[Main] Stopping...")
    finally:
        server.stop()
        print("[Main] Done")


if __name__ == "__main__":
    main()
