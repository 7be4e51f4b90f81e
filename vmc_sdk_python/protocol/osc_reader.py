"""
OscReader - Minimal OSC (Open Sound Control) packet parser.

Parses the binary OSC packets sent by VMC performers (VirtualMotionCapture and
compatible senders). Senders pack a frame's messages into #bundle packets, so
bundles are unpacked recursively into a flat list of messages.
"""

import struct

from .messages import Message


BUNDLE_TAG = "#bundle"
MAX_BUNDLE_DEPTH = 32


class OscReader:
    """
    Tiny OSC reader for parsing one OSC packet (message or bundle).

    Supports int32 ('i'), float32 ('f') and string ('s') arguments, which
    covers every VMC address.

    Example usage:
        data = sock.recvfrom(65535)[0]
        for message in OscReader(data).read_packet():
            receiver.on_data_received(message)
    """

    def __init__(self, data: bytes, start: int = 0, end: int = None):
        """
        Initialize the OSC reader with raw packet data.

        Args:
            data: Raw bytes from a UDP datagram
            start: Offset of the packet in data
            end: End offset of the packet in data (default: len(data))
        """
        self.data = data
        self.i = start
        self.n = len(data) if end is None else end

    def _read_padded_string(self):
        """Read a null-terminated, 4-byte padded string."""
        start = self.i
        end = self.data.find(b'\x00', start, self.n)
        if end < 0:
            raise ValueError("OSC string not null-terminated")
        s = self.data[start:end].decode('utf-8', errors='replace')
        self.i = (end + 4) & ~0x03
        if self.i > self.n:
            raise ValueError("OSC string padding overflow")
        return s

    def _read_int32(self):
        """Read a big-endian 32-bit integer."""
        if self.i + 4 > self.n:
            raise ValueError("OSC int32 truncated")
        val = struct.unpack(">i", self.data[self.i:self.i+4])[0]
        self.i += 4
        return val

    def _read_float32(self):
        """Read a big-endian 32-bit float."""
        if self.i + 4 > self.n:
            raise ValueError("OSC float32 truncated")
        val = struct.unpack(">f", self.data[self.i:self.i+4])[0]
        self.i += 4
        return val

    def read_message(self):
        """
        Parse one OSC message.

        Returns:
            Message with the address and parsed arguments (int, float or str)

        Raises:
            ValueError: If the message is malformed
        """
        address = self._read_padded_string()
        if not address:
            raise ValueError("Empty OSC address")
        if self.i >= self.n:
            return Message(address, ())
        typetags = self._read_padded_string()
        if not typetags.startswith(','):
            raise ValueError("OSC typetags missing ',' prefix")
        args = []
        for t in typetags[1:]:
            if t == 'i':
                args.append(self._read_int32())
            elif t == 'f':
                args.append(self._read_float32())
            elif t == 's':
                args.append(self._read_padded_string())
            else:
                raise ValueError(f"Unsupported OSC arg type: {t}")
        return Message(address, args)

    def read_packet(self, depth: int = 0):
        """
        Parse the packet as a message or a bundle.

        Args:
            depth: Bundle nesting level of this packet

        Returns:
            List of Message in packet order

        Raises:
            ValueError: If the packet or any nested element is malformed,
                or bundles nest deeper than MAX_BUNDLE_DEPTH
        """
        if self.data.startswith(b'#bundle\x00', self.i):
            if depth >= MAX_BUNDLE_DEPTH:
                raise ValueError(f"OSC bundles nested deeper than {MAX_BUNDLE_DEPTH}")
            return self._read_bundle(depth)
        return [self.read_message()]

    def _read_bundle(self, depth):
        if self._read_padded_string() != BUNDLE_TAG:
            raise ValueError("OSC bundle tag missing")
        if self.i + 8 > self.n:
            raise ValueError("OSC bundle timetag truncated")
        self.i += 8  # timetag; elements are applied on arrival
        messages = []
        while self.i < self.n:
            size = self._read_int32()
            if size < 0 or self.i + size > self.n:
                raise ValueError("OSC bundle element size out of range")
            element = OscReader(self.data, self.i, self.i + size)
            messages.extend(element.read_packet(depth + 1))
            self.i += size
        return messages
