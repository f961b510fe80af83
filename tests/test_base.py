import logging
import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from admiral.errors import TransportFailure  # noqa: E402
from admiral.resources.base import Resource  # noqa: E402


class RecordingClient:
    """Admiral stand-in that records requests and replays canned responses."""

    def __init__(self, responses=None) -> None:
        self._logger = logging.getLogger("admiral.tests.base")
        self.responses = dict(responses or {})
        self.calls: list[dict] = []

    def request(self, method, path, params=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "path": path, "params": params, "json": json, "timeout": timeout}
        )
        response = self.responses.get((method, path))
        if isinstance(response, Exception):
            raise response
        return response


class Pools(Resource):
    """Minimal resource built on the shared helpers."""

    def names(self):
        response = self._get("/resources/pools", params={"expand": "true"})
        self._logger.debug("Fetched %d pools", len(response["documentLinks"]))
        return [response["documents"][link]["name"] for link in response["documentLinks"]]

    def rename(self, link, name):
        return self._patch(link, json={"name": name}, timeout=10)


class ResourceHelperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = RecordingClient()
        self.resource = Resource(self.client)  # type: ignore[arg-type]

    def test_logger_comes_from_client(self):
        self.assertIs(self.resource._logger, self.client._logger)

    def test_verb_helpers_forward_to_client(self):
        link = "/resources/pools/0001-id"
        cases = [
            ("GET", lambda: self.resource._get(link, params={"expand": "true"}, timeout=2),
             {"expand": "true"}, None, 2),
            ("POST", lambda: self.resource._post("/resources/tags", json={"key": "env"}, timeout=3),
             None, {"key": "env"}, 3),
            ("PATCH", lambda: self.resource._patch(link, json={"name": "renamed"}),
             None, {"name": "renamed"}, None),
            ("DELETE", lambda: self.resource._delete(link, timeout=6), None, None, 6),
        ]
        for method, call, params, payload, timeout in cases:
            with self.subTest(method=method):
                call()
                sent = self.client.calls[-1]
                self.assertEqual(sent["method"], method)
                self.assertEqual(sent["params"], params)
                self.assertEqual(sent["json"], payload)
                self.assertEqual(sent["timeout"], timeout)

    def test_delete_sends_no_query_or_body(self):
        self.resource._delete("/resources/pools/0001-id")
        self.assertEqual(
            self.client.calls,
            [{"method": "DELETE", "path": "/resources/pools/0001-id", "params": None, "json": None, "timeout": None}],
        )


class ResourceSubclassTests(unittest.TestCase):
    def test_subclass_reads_documents(self):
        client = RecordingClient(
            {
                ("GET", "/resources/pools"): {
                    "documentLinks": ["/resources/pools/b", "/resources/pools/a"],
                    "documents": {
                        "/resources/pools/a": {"name": "alpha"},
                        "/resources/pools/b": {"name": "beta"},
                    },
                }
            }
        )
        pools = Pools(client)  # type: ignore[arg-type]
        with self.assertLogs("admiral.tests.base", level="DEBUG") as logs:
            self.assertEqual(pools.names(), ["beta", "alpha"])
        self.assertIn("Fetched 2 pools", logs.output[0])

    def test_subclass_write_returns_response(self):
        client = RecordingClient({("PATCH", "/resources/pools/a"): {"name": "renamed"}})
        pools = Pools(client)  # type: ignore[arg-type]
        self.assertEqual(pools.rename("/resources/pools/a", "renamed"), {"name": "renamed"})
        self.assertEqual(client.calls[-1]["timeout"], 10)

    def test_client_errors_propagate(self):
        client = RecordingClient(
            {("PATCH", "/resources/pools/a"): TransportFailure("PATCH failed", status_code=503)}
        )
        pools = Pools(client)  # type: ignore[arg-type]
        with self.assertRaises(TransportFailure) as ctx:
            pools.rename("/resources/pools/a", "renamed")
        self.assertEqual(ctx.exception.status_code, 503)


if __name__ == "__main__":
    unittest.main()
