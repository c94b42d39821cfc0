import urllib.error
import urllib.request

import pytest
from prometheus_client import Counter

from stdout2prom.metrics.server import parse_listen, setup_metrics_server
from stdout2prom.utils.exceptions import ConfigError


@pytest.mark.parametrize("listen,expected", [
    (":9000", ("0.0.0.0", 9000)),
    ("127.0.0.1:9100", ("127.0.0.1", 9100)),
    ("[::1]:9000", ("::1", 9000)),
    ("localhost:0", ("localhost", 0)),
])
def test_parse_listen(listen, expected):
    assert parse_listen(listen) == expected


@pytest.mark.parametrize("listen", ["9000", "host:http", "host:70000"])
def test_parse_listen_rejects(listen):
    with pytest.raises(ConfigError):
        parse_listen(listen)


def test_serves_registry_on_configured_path_only(registry):
    Counter("scraped_things", "Things", registry=registry).inc(3)
    server, shutdown = setup_metrics_server("127.0.0.1:0", "/prom", registry)
    try:
        base = f"http://127.0.0.1:{server.server_port}"
        with urllib.request.urlopen(base + "/prom", timeout=5) as resp:  # noqa: S310 - test-only local URL
            body = resp.read().decode("utf-8")
            assert resp.status == 200
        assert "scraped_things_total 3.0" in body
        with pytest.raises(urllib.error.HTTPError) as ei:
            urllib.request.urlopen(base + "/metrics", timeout=5)  # noqa: S310
        assert ei.value.code == 404
        ei.value.close()
    finally:
        shutdown()
