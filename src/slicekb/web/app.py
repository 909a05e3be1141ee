"""FastAPI application hosting the knowledge tools."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from slicekb import __version__
from slicekb.config import AppConfig
from slicekb.errors import KnowledgeError
from slicekb.tools import RESOURCE_SCHEME, ToolSurface

LOGGER = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_INFO = {"name": "slicekb", "version": __version__}

app = FastAPI(title="slicekb", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_surface: Optional[ToolSurface] = None
_surface_lock = threading.Lock()


class JSONRPCRequest(BaseModel):
    jsonrpc: str = "2.0"
    id: Union[str, int, None] = None
    method: str
    params: Dict[str, Any] = Field(default_factory=dict)


def get_surface() -> ToolSurface:
    """Build the tool surface once and share it across requests."""
    global _surface
    if _surface is None:
        with _surface_lock:
            if _surface is None:
                _surface = ToolSurface.from_config(AppConfig(), base_dir=Path.cwd())
    return _surface


@app.exception_handler(KnowledgeError)
async def knowledge_error_handler(request: Request, exc: KnowledgeError) -> JSONResponse:
    LOGGER.error("[%s] %s (%s)", exc.code.value, exc.message, request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_dict()})


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/tools")
async def list_tools(surface: ToolSurface = Depends(get_surface)) -> dict[str, List[dict[str, Any]]]:
    return {"tools": surface.descriptors()}


@app.post("/tools/{name}")
async def call_tool(
    name: str,
    arguments: Optional[Dict[str, Any]] = None,
    surface: ToolSurface = Depends(get_surface),
) -> dict[str, Any]:
    return surface.invoke(name, arguments or {})


@app.post("/index/rebuild")
async def rebuild_index(surface: ToolSurface = Depends(get_surface)) -> dict[str, Any]:
    stats = surface.index.rebuild()
    return {
        "status": "ok",
        "indexed": stats.indexed,
        "failed": stats.failed,
        "processed_files": [str(path) for path in stats.processed_files],
    }


def _rpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _rpc_error(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def _list_resources(surface: ToolSurface) -> dict[str, Any]:
    return {
        "resources": [
            {
                "uri": RESOURCE_SCHEME + doc.path,
                "name": doc.name,
                "description": doc.description,
                "mimeType": "text/markdown",
            }
            for doc in surface.index.all()
        ]
    }


@app.post("/mcp")
async def mcp_endpoint(request: JSONRPCRequest, surface: ToolSurface = Depends(get_surface)) -> dict[str, Any]:
    """Minimal JSON-RPC 2.0 entry point for MCP clients."""
    params = request.params
    if request.method == "initialize":
        client_info = params.get("clientInfo", {})
        if not isinstance(client_info, dict):
            return _rpc_error(request.id, -32602, "clientInfo must be an object")
        client = client_info.get("name", "unknown")
        LOGGER.info("Initializing MCP session with client: %s", client)
        return _rpc_result(
            request.id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}, "resources": {"listChanged": False}},
                "serverInfo": SERVER_INFO,
            },
        )
    if request.method == "tools/list":
        return _rpc_result(request.id, {"tools": surface.descriptors()})
    if request.method == "tools/call":
        name = params.get("name")
        if not isinstance(name, str):
            return _rpc_error(request.id, -32602, "Tool name is required")
        return _rpc_result(request.id, surface.call(name, params.get("arguments") or {}))
    if request.method == "resources/list":
        return _rpc_result(request.id, _list_resources(surface))
    if request.method == "resources/read":
        uri = params.get("uri", "")
        if not isinstance(uri, str) or not uri.startswith(RESOURCE_SCHEME):
            return _rpc_error(request.id, -32602, f"Invalid URI scheme: {uri}")
        try:
            payload = surface.invoke("read-doc", {"path": uri[len(RESOURCE_SCHEME) :], "as_resource": True})
        except KnowledgeError as exc:
            return _rpc_error(request.id, -32002, exc.message, exc.to_dict())
        return _rpc_result(request.id, payload)
    return _rpc_error(request.id, -32601, f"Method not found: {request.method}")
