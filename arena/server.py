"""FastAPI application: debate endpoint and health probes."""

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config.config_loader import AppConfig
from arena.debate import run_debate
from arena.errors import OrchestrationError, ValidationError
from arena.healthcheck import run_health_checks
from arena.models import ProviderKind
from arena.providers.base import AIProvider
from arena.providers.registry import build_alias_map, resolve_agents
from arena.schemas import DebateRequest, DebateResponse, ErrorResponse, ProviderHealth

logger = logging.getLogger(__name__)

DEBATE_PATH = "/api/debate"
_FAILURE_MESSAGE = "Debate failed"

router = APIRouter()


def _failure_response() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": _FAILURE_MESSAGE})


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_providers(request: Request) -> dict[ProviderKind, AIProvider]:
    return request.app.state.providers


def get_alias_map(request: Request) -> dict[str, ProviderKind]:
    return request.app.state.alias_map


@router.post(
    DEBATE_PATH,
    response_model=DebateResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Run a multi-agent debate",
)
async def debate(
    body: DebateRequest,
    config: AppConfig = Depends(get_config),
    providers: dict[ProviderKind, AIProvider] = Depends(get_providers),
    alias_map: dict[str, ProviderKind] = Depends(get_alias_map),
):
    """Run every round for the given roster and return the full transcript.

    Any failure, whether a bad roster or a provider error mid-debate, yields
    the same generic 500 body. Details are logged, never returned.
    """
    logger.info("Debate request: %s", body.model_dump(mode="json"))
    rounds = body.rounds if body.rounds is not None else config.defaults.rounds

    try:
        if rounds > config.defaults.max_rounds:
            raise ValidationError(
                f"Requested {rounds} rounds, maximum is {config.defaults.max_rounds}"
            )
        agents = resolve_agents(body.agents, providers, alias_map)
        transcript = await run_debate(
            topic=body.topic,
            agents=agents,
            prompts=config.prompts,
            num_rounds=rounds,
            include_history=config.defaults.include_history,
        )
    except ValidationError as exc:
        logger.warning("Debate rejected: %s", exc)
        return _failure_response()
    except OrchestrationError as exc:
        logger.error("Debate failed: %s", exc)
        return _failure_response()
    except Exception:
        logger.exception("Debate failed with unexpected error")
        return _failure_response()

    return DebateResponse(debate_log=transcript.render())


@router.get("/health", response_class=PlainTextResponse, tags=["health"])
async def health() -> str:
    return "Server is running"


@router.get("/health/providers", response_model=dict[str, ProviderHealth], tags=["health"])
async def provider_health(
    providers: dict[ProviderKind, AIProvider] = Depends(get_providers),
) -> dict[str, ProviderHealth]:
    """Ping each configured provider. Always 200; failures are reported per provider."""
    results = await run_health_checks({kind.value: p for kind, p in providers.items()})
    return {name: ProviderHealth(ok=ok, error=err) for name, (ok, err) in results.items()}


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Malformed request to %s: %s", request.url.path, exc.errors())
    return _failure_response()


def create_app(config: AppConfig, providers: dict[ProviderKind, AIProvider]) -> FastAPI:
    """Build the FastAPI app around an already-loaded config and provider set."""
    app = FastAPI(
        title="LLM Debate Arena",
        description="Sequential multi-provider debates over HTTP",
        version="0.1.0",
    )
    app.state.config = config
    app.state.providers = providers
    app.state.alias_map = build_alias_map(config.aliases)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.include_router(router)

    logger.info(
        "App ready with providers: %s",
        ", ".join(sorted(k.value for k in providers)) or "none",
    )
    return app
