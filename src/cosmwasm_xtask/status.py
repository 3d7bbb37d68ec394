"""
Node status over the CometBFT RPC HTTP endpoint.

Used to tell when a freshly started local chain is producing blocks.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from .errors import ResultParseError
from .network.base import Network

logger = logging.getLogger(__name__)


def rpc_http_url(endpoint: str) -> str:
    """Map a ``tcp://`` node address onto the equivalent HTTP URL."""
    if endpoint.startswith("tcp://"):
        endpoint = "http://" + endpoint[len("tcp://"):]
    return endpoint.rstrip("/")


def latest_block_height(endpoint: str, client: Optional[httpx.Client] = None) -> Optional[int]:
    """
    Read the latest block height from ``<endpoint>/status``.

    Returns:
        The height, or None if the node is not accepting connections yet

    Raises:
        ResultParseError: If the node answers with something unexpected
    """
    url = rpc_http_url(endpoint) + "/status"
    owned = client is None
    http = client or httpx.Client(timeout=10)
    try:
        response = http.get(url)
    except httpx.TransportError:
        return None
    finally:
        if owned:
            http.close()

    if response.status_code != 200:
        return None

    try:
        data = response.json()
        result = data.get("result", data)
        return int(result["sync_info"]["latest_block_height"])
    except (ValueError, KeyError, TypeError, AttributeError):
        raise ResultParseError("latest block height", response.text) from None


def wait_for_blocks(
    network: Network,
    timeout: float = 120,
    poll_interval: float = 0.5,
    client: Optional[httpx.Client] = None,
) -> int:
    """
    Block until ``network`` produces a new block.

    Returns:
        The first height greater than the one initially observed

    Raises:
        TimeoutError: If no new block appears within ``timeout`` seconds
    """
    endpoint = network.rpc_endpoint()
    start = time.monotonic()
    first: Optional[int] = None
    while time.monotonic() - start < timeout:
        height = latest_block_height(endpoint, client)
        if height is not None:
            if first is None:
                first = height
                logger.info("%s is at height %d, waiting for the next block", endpoint, height)
            elif height > first:
                return height
        time.sleep(poll_interval)

    raise TimeoutError(f"No new blocks from {endpoint} within {timeout}s")
