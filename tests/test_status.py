"""Unit tests for node status polling."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from cosmwasm_xtask.errors import ResultParseError
from cosmwasm_xtask.status import latest_block_height, rpc_http_url, wait_for_blocks


def status_body(height: int) -> dict:
    return {"jsonrpc": "2.0", "id": -1, "result": {"sync_info": {"latest_block_height": str(height)}}}


def client_for(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestRpcHttpUrl:
    def test_tcp_endpoint(self) -> None:
        assert rpc_http_url("tcp://127.0.0.1:26657") == "http://127.0.0.1:26657"

    def test_http_endpoint_untouched(self) -> None:
        assert rpc_http_url("https://rpc.example.com:443/") == "https://rpc.example.com:443"


class TestLatestBlockHeight:
    def test_reads_height(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/status"
            return httpx.Response(200, json=status_body(12))

        with client_for(handler) as client:
            assert latest_block_height("tcp://127.0.0.1:26657", client) == 12

    def test_connection_refused(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with client_for(handler) as client:
            assert latest_block_height("http://localhost:26657", client) is None

    @pytest.mark.parametrize("error", [httpx.ConnectTimeout, httpx.ReadTimeout, httpx.ReadError])
    def test_transport_errors_mean_not_ready(self, error) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error("timed out", request=request)

        with client_for(handler) as client:
            assert latest_block_height("http://localhost:26657", client) is None

    def test_not_ready(self) -> None:
        with client_for(lambda request: httpx.Response(503)) as client:
            assert latest_block_height("http://localhost:26657", client) is None

    def test_unexpected_body(self) -> None:
        with client_for(lambda request: httpx.Response(200, json={"result": {}})) as client:
            with pytest.raises(ResultParseError):
                latest_block_height("http://localhost:26657", client)


class TestWaitForBlocks:
    def test_returns_next_height(self, network) -> None:
        heights = iter([None, 5, 5, 6])

        def handler(request: httpx.Request) -> httpx.Response:
            height = next(heights)
            if height is None:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json=status_body(height))

        with client_for(handler) as client:
            assert wait_for_blocks(network, timeout=5, poll_interval=0, client=client) == 6

    def test_timeout(self, network) -> None:
        with client_for(lambda request: httpx.Response(200, json=status_body(5))) as client:
            with patch("cosmwasm_xtask.status.time.sleep"):
                with pytest.raises(TimeoutError):
                    wait_for_blocks(network, timeout=0.05, poll_interval=0, client=client)
