"""
Test Service for the Split OpenFeature provider

This HTTP server wraps a SplitProvider and exposes a standard interface
for the test harness to interact with.

Protocol:
- GET /  -> Health check
- POST / -> Execute command
- DELETE / -> Cleanup/shutdown
"""

import os
from typing import Any, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from openfeature.evaluation_context import EvaluationContext
from openfeature.track import TrackingEventDetails
import uvicorn

from split_openfeature import SplitProvider

provider: Optional[SplitProvider] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cleanup on shutdown
    close_provider()


app = FastAPI(lifespan=lifespan)


def close_provider() -> None:
    global provider
    if provider:
        provider.shutdown()
        provider = None


def build_provider(config_data: dict) -> SplitProvider:
    return SplitProvider(
        {
            "SdkKey": config_data.get("sdkKey"),
            "ConfigOptions": config_data.get("configOptions") or {},
            "ReadyBlockTime": config_data.get("readyBlockTime", 10000),
        }
    )


def make_response(
    value: Optional[Any] = None,
    variant: Optional[str] = None,
    reason: Optional[str] = None,
    error_code: Optional[str] = None,
    flag_metadata: Optional[dict] = None,
    is_ready: Optional[bool] = None,
    success: Optional[bool] = None,
    error: Optional[str] = None,
    message: Optional[str] = None,
) -> dict:
    resp = {}
    if value is not None:
        resp["value"] = value
    if variant is not None:
        resp["variant"] = variant
    if reason is not None:
        resp["reason"] = reason
    if error_code is not None:
        resp["errorCode"] = error_code
    if flag_metadata is not None:
        resp["flagMetadata"] = flag_metadata
    if is_ready is not None:
        resp["isReady"] = is_ready
    if success is not None:
        resp["success"] = success
    if error is not None:
        resp["error"] = error
    if message is not None:
        resp["message"] = message
    return resp


def make_context(context_data: Optional[dict]) -> Optional[EvaluationContext]:
    if context_data is None:
        return None
    return EvaluationContext(
        targeting_key=context_data.get("targetingKey"),
        attributes=context_data.get("attributes") or {},
    )


def _label(enum_value: Any) -> Optional[str]:
    if enum_value is None:
        return None
    return str(getattr(enum_value, "value", enum_value))


EVALUATION_COMMANDS = {
    "getBoolean": "resolve_boolean_details",
    "getString": "resolve_string_details",
    "getInteger": "resolve_integer_details",
    "getDouble": "resolve_float_details",
    "getObject": "resolve_object_details",
}


async def handle_command(cmd: dict) -> dict:
    global provider
    command = cmd.get("command")

    if command == "init":
        config_data = cmd.get("config")
        if not config_data:
            return make_response(error="ValidationError", message="config is required")

        # Cleanup previous instance
        close_provider()

        try:
            provider = build_provider(config_data)
            return make_response(success=True, is_ready=provider.is_ready())
        except Exception as e:
            return make_response(error=type(e).__name__, message=str(e))

    elif command in EVALUATION_COMMANDS:
        if not provider:
            return make_response(error="NotInitializedError", message="Provider not initialized")

        flag_key = cmd.get("flagKey")
        if not flag_key:
            return make_response(error="ValidationError", message="flagKey is required")

        resolve = getattr(provider, EVALUATION_COMMANDS[command])
        details = resolve(flag_key, cmd.get("defaultValue"), make_context(cmd.get("context")))
        return make_response(
            value=details.value,
            variant=details.variant,
            reason=_label(details.reason),
            error_code=_label(details.error_code),
            flag_metadata=dict(details.flag_metadata or {}),
        )

    elif command == "track":
        if not provider:
            return make_response(error="NotInitializedError", message="Provider not initialized")

        details = None
        details_data = cmd.get("details")
        if details_data is not None:
            details = TrackingEventDetails(
                value=details_data.get("value"),
                attributes=details_data.get("properties") or {},
            )

        provider.track(cmd.get("eventName", ""), make_context(cmd.get("context")), details)
        return make_response(success=True)

    elif command == "getState":
        if not provider:
            return make_response(is_ready=False)
        return make_response(is_ready=provider.is_ready())

    elif command == "close":
        close_provider()
        return make_response(success=True)

    else:
        return make_response(error="UnknownCommand", message=f"Unknown command: {command}")


@app.get("/")
async def health_check():
    return {"success": True}


@app.post("/")
async def execute_command(request: Request):
    try:
        cmd = await request.json()
    except ValueError as e:
        return JSONResponse(
            content=make_response(error="ParseError", message=str(e)),
            status_code=400,
        )
    result = await handle_command(cmd)
    return JSONResponse(content=result)


@app.delete("/")
async def cleanup():
    close_provider()
    return {"success": True}


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8008"))
    print(f"[split-openfeature test-service] Listening on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")
