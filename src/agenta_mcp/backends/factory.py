"""Backend factory selecting the execution backend for a configuration.

The choice between live and simulated execution is made here, once, from
``AgentaConfig.test_mode``. Nothing else in the server inspects the mode.
"""

import logging
from typing import TYPE_CHECKING, Optional

import requests

from agenta_mcp.config import AgentaConfig

if TYPE_CHECKING:
    from agenta_mcp.backends.protocol import AgentaBackend

logger = logging.getLogger(__name__)


def create_backend(config: AgentaConfig, session: Optional[requests.Session] = None) -> "AgentaBackend":
    """Create the backend matching the configuration.

    Args:
        config: Connection settings; ``test_mode`` selects the simulated backend
        session: Optional pre-built ``requests.Session`` for the live backend

    Returns:
        Backend instance implementing the AgentaBackend protocol

    Example:
        >>> backend = create_backend(AgentaConfig(test_mode=True))
        >>> backend.mode
        'simulated'
    """
    if config.test_mode:
        from agenta_mcp.backends.simulated import SimulatedBackend

        logger.info("Selecting aB-Agenta backend: simulated (test mode)")
        return SimulatedBackend()

    from agenta_mcp.backends.live import LiveBackend

    logger.info(f"Selecting aB-Agenta backend: live ({config.api_url})")
    return LiveBackend(config, session=session)
