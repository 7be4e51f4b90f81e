"""
OscServer - UDP transport feeding VMC messages into a receiver chain.

Receives OSC packets on a background thread, unpacks bundles and delivers
each message to the head receiver of a daisy chain. Delivery is serialized
so one message goes through the whole chain before the next one starts.
"""

import logging
import socket
import threading
import time

from ..protocol.osc_reader import OscReader

logger = logging.getLogger(__name__)


# Default port of VMC performers (VirtualMotionCapture "send" port)
DEFAULT_VMC_PORT = 39539


class OscServer:
    """
    Manages OSC reception in a background thread.

    The data flow:
    1. UDP datagrams arrive containing OSC messages or bundles
    2. Each datagram is parsed into Messages (bundles are flattened)
    3. Each Message is delivered to receiver.on_data_received under a lock

    Example usage:
        receiver = ExternalReceiver(model=HumanoidModel())
        server = OscServer(receiver, port=39539)
        server.start()

        while running:
            print(receiver.status_message, server.get_receive_rate())

        server.stop()
    """

    def __init__(self, receiver, port: int = DEFAULT_VMC_PORT, host: str = "0.0.0.0"):
        """
        Initialize the OscServer.

        Args:
            receiver: Head of the receiver chain (needs on_data_received)
            port: UDP port to listen on (default: 39539)
            host: Interface to bind (default: all interfaces)
        """
        self.receiver = receiver
        self.port = port
        self.host = host
        self.thread = None
        self.sock = None
        self.running = False
        self.lock = threading.Lock()
        self.recv_count = 0
        self.parse_errors = 0
        self.last_rate_time = time.time()
        self.recv_rate_hz = 0.0

        attach = getattr(receiver, "attach_server", None)
        if attach is not None:
            attach(self)

    def reset(self):
        """Reset receive statistics."""
        with self.lock:
            self.recv_count = 0
            self.parse_errors = 0
            self.recv_rate_hz = 0.0
            self.last_rate_time = time.time()

    def start(self):
        """Bind the socket and start the UDP server thread."""
        self.reset()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, 8 * 1024 * 1024)
        except OSError:
            logger.debug("[OscServer] Could not enlarge receive buffer")
        try:
            sock.bind((self.host, self.port))
        except OSError:
            sock.close()
            raise
        sock.settimeout(0.5)
        self.sock = sock
        self.port = sock.getsockname()[1]

        self.running = True
        self.thread = threading.Thread(target=self._udp_server_loop, daemon=True)
        self.thread.start()
        logger.info(f"[OscServer] Listening on UDP port {self.port}")

    def stop(self):
        """Stop the UDP server thread."""
        self.running = False
        if self.thread is not None:
            self.thread.join(timeout=1.0)
        self.thread = None
        self.sock = None
        logger.info("[OscServer] Stopped")

    def get_receive_rate(self):
        """
        Get the current packet receive rate.

        Returns:
            Receive rate in Hz (packets per second)
        """
        return self.recv_rate_hz

    def handle_datagram(self, data: bytes):
        """
        Parse one datagram and deliver its messages to the receiver.

        Returns:
            Number of messages delivered (0 if the packet was malformed)
        """
        try:
            messages = OscReader(data).read_packet()
        except ValueError as e:
            logger.warning(f"[OscServer] OSC parse error: {e}")
            with self.lock:
                self.parse_errors += 1
            return 0

        with self.lock:
            for message in messages:
                self.receiver.on_data_received(message)

            self.recv_count += 1
            now = time.time()
            dt = now - self.last_rate_time
            if dt >= 1.0:
                self.recv_rate_hz = self.recv_count / dt
                self.recv_count = 0
                self.last_rate_time = now
        return len(messages)

    def _udp_server_loop(self):
        """Background thread that receives OSC packets."""
        sock = self.sock
        try:
            while self.running:
                try:
                    data, _addr = sock.recvfrom(65535)
                except socket.timeout:
                    continue
                except OSError:
                    break
                try:
                    self.handle_datagram(data)
                except Exception:
                    logger.exception("[OscServer] Error while delivering packet, skipped")
        finally:
            sock.close()
