"""Factory functions for constructing Polymarket API clients.

Single place for client construction in CLI commands, which also makes testing
easier via factory function patching.
"""

from polymarket_alerts.api import ClobClient, GammaClient
from polymarket_alerts.constants import DEFAULT_HTTP_TIMEOUT_SECONDS


def clob_client(
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    max_retries: int = 5,
) -> ClobClient:
    """Create a ClobClient with consistent defaults.

    Example:
        ```python
        async with clob_client() as client:
            market = await client.get_market("0xabc...")
        ```
    """
    return ClobClient(timeout=timeout, max_retries=max_retries)


def gamma_client(
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    max_retries: int = 5,
) -> GammaClient:
    """Create a GammaClient with consistent defaults."""
    return GammaClient(timeout=timeout, max_retries=max_retries)
