"""
Paymaster Signer Server - FastAPI application.

Exposes the signing identity, the paymaster signature engine and the
StableSwap quote/calldata helpers over a small JSON API. Every per-request
failure is converted at the handler boundary into
``{"error": <kind>, "message": <detail>}``.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic_core import from_json

from ..adapters.evm.signatures import PaymasterSignatureEngine, SignDefaults, SigningIdentity
from ..adapters.evm.swaps import StableSwapQuoteReader, build_swap_calldata
from ..adapters.registry import ChainRegistry
from ..adapters.resolvers import (
    ChainResolver,
    FixedChainResolver,
    HintChainResolver,
    RequestChainHints,
)
from ..config import Settings
from ..engine.exceptions import BuildFailed, InvalidInput, PaymasterError, QuoteFailed, SigningFailed
from ..engine.logs import get_logger
from ..schemas.https import (
    ChainsResponse,
    ChainSummary,
    ErrorResponse,
    HealthResponse,
    PaymasterSignRequest,
    PaymasterSignResponse,
    SignerResponse,
    SwapBuildRequest,
    SwapBuildResponse,
    SwapQuoteResponse,
)
from ..schemas.versions import ChainMode

logger = get_logger(__name__)

#: Upper bound on JSON request bodies; every accepted body is a handful of fields.
MAX_BODY_BYTES = 16 * 1024


class PaymasterServer(FastAPI):
    """FastAPI server for paymaster signatures and StableSwap calldata."""

    def __init__(
        self,
        identity: SigningIdentity,
        resolver: ChainResolver,
        *,
        signature_engine: Optional[PaymasterSignatureEngine] = None,
        quote_reader: Optional[StableSwapQuoteReader] = None,
        cors_origins: Iterable[str] = ("*",),
        rpc_timeout: float = 10,
        **fastapi_kwargs,
    ):
        """Initialize the server.

        Args:
            identity: Signing identity derived at startup.
            resolver: Chain resolver (multichain or fixed single chain).
            signature_engine: Engine bound to the deployment's protocol
                version (default: v1 engine over ``identity``).
            quote_reader: StableSwap reader (default: one reader over the
                resolver's registry).
            cors_origins: Allowed CORS origins.
            rpc_timeout: Bound on each quote read in seconds.
            **fastapi_kwargs: FastAPI arguments (title, version, etc.)
        """
        self.identity = identity
        self.resolver = resolver
        self.signature_engine = signature_engine or PaymasterSignatureEngine(identity)
        self.quote_reader = quote_reader or StableSwapQuoteReader(
            resolver.registry.chains(), request_timeout=rpc_timeout
        )

        fastapi_kwargs.setdefault("title", "Paymaster Signer API")
        super().__init__(**fastapi_kwargs)

        self.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_origins),
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self._setup_exception_handlers()
        self._setup_identity_endpoints()
        self._setup_sign_endpoint()
        self._setup_swap_endpoints()

    @classmethod
    def from_settings(cls, settings: Settings, **fastapi_kwargs) -> "PaymasterServer":
        """Build the identity, registry, resolver and engine from ``settings``.

        Raises:
            StartupConfigurationMissing: Invalid key or chain configuration.
        """
        identity = SigningIdentity.from_private_key(settings.signer_private_key)
        registry = ChainRegistry(settings.chains, default_alias=settings.default_chain)
        if settings.chain_mode is ChainMode.SINGLE:
            resolver: ChainResolver = FixedChainResolver(registry)
        else:
            resolver = HintChainResolver(registry)
        engine = PaymasterSignatureEngine(
            identity,
            protocol=settings.protocol_version,
            scheme=settings.signature_scheme,
            defaults=SignDefaults(validity_seconds=settings.validity_seconds),
        )
        return cls(
            identity,
            resolver,
            signature_engine=engine,
            cors_origins=settings.cors_origins,
            rpc_timeout=settings.rpc_timeout,
            **fastapi_kwargs,
        )

    # =========================================================================
    # Error conversion
    # =========================================================================

    def _setup_exception_handlers(self) -> None:
        @self.exception_handler(PaymasterError)
        async def paymaster_error_handler(request: Request, exc: PaymasterError):
            if exc.status_code >= 500:
                logger.error("request_failed", path=request.url.path, error=exc.kind, message=exc.message)
            else:
                logger.warning("request_rejected", path=request.url.path, error=exc.kind, message=exc.message)
            return _error_response(exc)

        @self.exception_handler(RequestValidationError)
        async def validation_error_handler(request: Request, exc: RequestValidationError):
            error = InvalidInput(f"Invalid request: {exc.errors()}")
            logger.warning("request_rejected", path=request.url.path, error=error.kind)
            return _error_response(error)

    # =========================================================================
    # Routes
    # =========================================================================

    def _setup_identity_endpoints(self) -> None:
        @self.get("/health")
        async def health():
            return JSONResponse(
                content=HealthResponse(signer_address=self.identity.address).to_dict()
            )

        @self.get("/signer")
        async def signer():
            return JSONResponse(
                content=SignerResponse(signer_address=self.identity.address).to_dict()
            )

        @self.get("/chains")
        async def chains():
            registry = self.resolver.registry
            return JSONResponse(content=ChainsResponse(
                default_chain=registry.default.alias,
                chains=[
                    ChainSummary(
                        alias=chain.alias,
                        chain_id=chain.chain_id,
                        swap_contract=chain.swap_contract_address,
                    )
                    for chain in registry.chains()
                ],
            ).to_dict())

    def _setup_sign_endpoint(self) -> None:
        @self.post("/sign")
        async def sign(request: Request):
            """Sign paymaster data: keccak256(abi.encode(payer, token, validUntil, validAfter[, isActivation]))."""
            body = await _read_json_object(request)
            with _unexpected_errors_as(SigningFailed, "Signing failed"):
                sign_request = PaymasterSignRequest.model_validate(body)
                chain = self.resolver.resolve(_chain_hints(request, body))
                authorization = self.signature_engine.authorize(
                    payer_address=sign_request.payer_address,
                    token_address=sign_request.token_address,
                    valid_until=sign_request.valid_until,
                    valid_after=sign_request.valid_after,
                    is_activation=sign_request.is_activation,
                )

                logger.info(
                    "sign_request",
                    payer=authorization.payer,
                    token=authorization.token,
                    valid_until=authorization.valid_until,
                    valid_after=authorization.valid_after,
                    is_activation=authorization.is_activation,
                    chain=chain.alias,
                )
                signature = self.signature_engine.sign(authorization)
                logger.info("sign_completed", payer=authorization.payer, chain=chain.alias)

            return JSONResponse(content=PaymasterSignResponse(signature=signature).to_dict())

    def _setup_swap_endpoints(self) -> None:
        @self.get("/swap/quote")
        async def swap_quote(request: Request):
            """Read getQuote(tokenIn, tokenOut, amountIn) on the resolved chain."""
            params = request.query_params
            with _unexpected_errors_as(QuoteFailed, "Quote failed"):
                chain = self.resolver.resolve(_chain_hints(request))
                logger.info(
                    "swap_quote_request",
                    chain=chain.alias,
                    token_in=params.get("tokenIn"),
                    token_out=params.get("tokenOut"),
                    amount_in=params.get("amountIn"),
                )
                quote = await self.quote_reader.get_quote(
                    params.get("tokenIn"),
                    params.get("tokenOut"),
                    params.get("amountIn"),
                    chain,
                )
            return JSONResponse(content=SwapQuoteResponse(
                token_in=quote.token_in,
                token_out=quote.token_out,
                amount_in=str(quote.amount_in),
                amount_out=str(quote.amount_out),
                fee=str(quote.fee),
                total_user_pays=str(quote.total_user_pays),
            ).to_dict())

        @self.post("/swap/build")
        async def swap_build(request: Request):
            """Encode swap(amountIn, tokenIn, tokenOut, minAmountOut) without executing it."""
            body = await _read_json_object(request)
            with _unexpected_errors_as(BuildFailed, "Build failed"):
                build_request = SwapBuildRequest.model_validate(body)
                chain = self.resolver.resolve(_chain_hints(request, body))
                calldata = build_swap_calldata(
                    build_request.token_in,
                    build_request.token_out,
                    build_request.amount_in,
                    build_request.min_amount_out,
                    chain,
                )
            logger.info(
                "swap_build_request",
                chain=chain.alias,
                amount_in=calldata.amount_in,
                min_amount_out=calldata.min_amount_out,
            )
            return JSONResponse(content=SwapBuildResponse(
                to=calldata.to,
                data=calldata.data,
                value=str(calldata.value),
                amount_in=str(calldata.amount_in),
                min_amount_out=str(calldata.min_amount_out),
                chain_id=calldata.chain_id,
            ).to_dict())


def _error_response(error: PaymasterError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.kind, message=error.message).to_dict(),
    )


@contextmanager
def _unexpected_errors_as(error_cls: Type[PaymasterError], prefix: str) -> Iterator[None]:
    """Re-raise anything outside the error taxonomy as ``error_cls``."""
    try:
        yield
    except PaymasterError:
        raise
    except Exception as e:
        logger.exception("request_crashed", error=error_cls.kind)
        raise error_cls(f"{prefix}: {e}") from e


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object; an empty body reads as ``{}``.

    Bodies over ``MAX_BODY_BYTES`` are refused before parsing, and the
    parser enforces its own nesting limit, so hostile input always ends in
    ``InvalidInput``.
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        raise InvalidInput(f"Request body exceeds {MAX_BODY_BYTES} bytes")
    raw = await request.body()
    if len(raw) > MAX_BODY_BYTES:
        raise InvalidInput(f"Request body exceeds {MAX_BODY_BYTES} bytes")
    if not raw.strip():
        return {}
    try:
        payload = from_json(raw)
    except ValueError as e:
        raise InvalidInput(f"Request body must be valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    return payload


def _chain_hints(request: Request, body: Optional[Dict[str, Any]] = None) -> RequestChainHints:
    return RequestChainHints(
        query=request.query_params,
        body=body or {},
        headers=request.headers,
    )
