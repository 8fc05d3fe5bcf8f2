"""
Process entry point::

    python -m paymaster_signer

Loads configuration, derives the signing identity and serves the API with
uvicorn. Any configuration problem stops the process before the port is bound.
"""

import sys

import uvicorn

from .config import Settings
from .engine.exceptions import StartupConfigurationMissing
from .engine.logs import get_logger, setup_logging
from .servers.apps import PaymasterServer

logger = get_logger("paymaster_signer")


def main() -> int:
    setup_logging()
    try:
        settings = Settings.from_env()
        setup_logging(settings.log_level, settings.log_format)
        app = PaymasterServer.from_settings(settings)
    except StartupConfigurationMissing as e:
        logger.error("startup_failed", error=e.kind, message=e.message)
        return 1

    logger.info(
        "paymaster_signer_ready",
        signer_address=app.identity.address,
        protocol=settings.protocol_version.value,
        signature_scheme=settings.signature_scheme.value,
        chain_mode=settings.chain_mode.value,
        chains=[chain.alias for chain in app.resolver.registry.chains()],
        default_chain=settings.default_chain,
    )
    logger.info("Make sure this address is added as authorized signer on Paymaster.")
    logger.info(
        "endpoints",
        routes=["GET /health", "GET /signer", "GET /chains", "POST /sign",
                "GET /swap/quote", "POST /swap/build"],
    )

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
