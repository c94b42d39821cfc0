"""Metrics server bootstrap.

Starts the Prometheus HTTP endpoint for a CollectorRegistry in a daemon
thread. Unlike prometheus_client.start_http_server, the exposition is served
on the configured path only; every other path answers 404.

Public API:
  parse_listen(listen) -> (host, port)
  setup_metrics_server(listen, path, registry) -> (server, shutdown_callable)
"""
from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable
from wsgiref.simple_server import WSGIRequestHandler, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer

from ..utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


class _QuietHandler(WSGIRequestHandler):
    """Route per-request access lines to debug logging instead of stderr."""

    def log_message(self, format, *args):  # noqa: A002
        logger.debug("scrape %s - %s", self.address_string(), format % args)


def parse_listen(listen: str) -> tuple[str, int]:
    """Split ``host:port`` (``:9000``, ``0.0.0.0:9000``, ``[::1]:9000``)."""
    host, sep, port_s = listen.strip().rpartition(':')
    if not sep:
        raise ConfigError(f"listen address {listen!r} must be host:port")
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    try:
        port = int(port_s)
    except ValueError as e:
        raise ConfigError(f"listen address {listen!r} has a non-numeric port") from e
    if not 0 <= port <= 65535:
        raise ConfigError(f"listen address {listen!r} port out of range")
    return host or "0.0.0.0", port


def _address_family(host: str, port: int) -> socket.AddressFamily:
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except socket.gaierror as e:
        raise ConfigError(f"cannot resolve listen host {host!r}: {e}") from e
    return infos[0][0]


def make_metrics_app(path: str, registry: CollectorRegistry):
    metrics_app = make_wsgi_app(registry)

    def app(environ, start_response):
        if environ.get('PATH_INFO', '') != path:
            start_response('404 Not Found', [('Content-Type', 'text/plain; charset=utf-8')])
            return [b'Not Found\n']
        return metrics_app(environ, start_response)

    return app


def setup_metrics_server(listen: str, path: str, registry: CollectorRegistry
                         ) -> tuple[ThreadingWSGIServer, Callable[[], None]]:
    """Start the metrics endpoint and return the server plus a shutdown callable."""
    host, port = parse_listen(listen)

    class _Server(ThreadingWSGIServer):
        pass

    _Server.address_family = _address_family(host, port)
    try:
        httpd = make_server(host, port, make_metrics_app(path, registry), _Server, handler_class=_QuietHandler)
    except OSError as e:
        raise ConfigError(f"cannot listen on {listen!r}: {e}") from e
    thread = threading.Thread(target=httpd.serve_forever, name="metrics-http", daemon=True)
    thread.start()
    logger.info("Metrics available at http://%s:%s%s", host, httpd.server_port, path)

    def shutdown() -> None:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)

    return httpd, shutdown


__all__ = ["parse_listen", "make_metrics_app", "setup_metrics_server"]
