# explorer_harness/net/ports.py
# Local port allocation for spawned services.

from __future__ import annotations

import socket


def get_available_port(host: str = "127.0.0.1") -> int:
    """Ask the OS for a free TCP port on `host`.

    The socket is closed before returning, so another process could grab the
    port in between; acceptable for a test fixture bound to loopback.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]
