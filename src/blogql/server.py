"""
HTTP listener bootstrap with sequential port fallback
"""

import errno
import socket
from collections.abc import Iterable

import uvicorn
from fastapi import FastAPI

from .logging import get_logger

logger = get_logger(__name__)


class PortsExhaustedError(RuntimeError):
    """Raised when every candidate port is already in use."""

    def __init__(self, ports: list[int]):
        self.ports = ports
        super().__init__(
            f"All ports are busy ({', '.join(str(p) for p in ports)}); unable to start the server"
        )


def bind_first_available(host: str, ports: Iterable[int]) -> tuple[socket.socket, int]:
    """
    Bind a listening socket to the first free port, in the given order.

    A port already in use moves on to the next candidate; any other bind
    error is raised immediately.

    Returns:
        The bound socket and the port it holds

    Raises:
        PortsExhaustedError: If every port is in use
    """
    candidates = list(ports)
    family = socket.AF_INET6 if ":" in host else socket.AF_INET

    for port in candidates:
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError as e:
            sock.close()
            if e.errno == errno.EADDRINUSE:
                logger.warning("Port already in use, trying the next one", port=port)
                continue
            logger.error("Unable to bind server socket", host=host, port=port, error=str(e))
            raise
        sock.listen(socket.SOMAXCONN)
        return sock, port

    logger.error("All ports are busy, unable to start the server", ports=candidates)
    raise PortsExhaustedError(candidates)


def display_url(host: str, port: int, path: str) -> str:
    shown = "localhost" if host in ("0.0.0.0", "::", "") else host
    return f"http://{shown}:{port}{path}"


def run_server(
    app: FastAPI,
    host: str,
    ports: Iterable[int],
    graphql_path: str = "/graphql",
    log_level: str = "info",
) -> None:
    """Serve ``app`` with uvicorn on the first free port."""
    sock, port = bind_first_available(host, ports)
    logger.info("GraphQL server ready", url=display_url(host, port, graphql_path))

    server = uvicorn.Server(uvicorn.Config(app, log_level=log_level, access_log=True))
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
