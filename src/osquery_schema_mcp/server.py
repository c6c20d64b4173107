"""FastMCP server implementation for osquery-schema-mcp."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import dotenv
from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger
from starlette.requests import Request
from starlette.responses import JSONResponse

from osquery_schema_mcp.catalog.exceptions import SchemaLoadError
from osquery_schema_mcp.catalog.mcp_tools import register_catalog_tools
from osquery_schema_mcp.services.catalog_service_manager import CatalogServiceManager

# Load environment variables
dotenv.load_dotenv()

# Configure a module-level logger for local server logs.
_logger = get_logger(__name__)


# -- Context Manager for catalog loading ------------------------------------
@asynccontextmanager
async def lifespan(_mcp_instance: FastMCP) -> AsyncGenerator[None]:
    """FastMCP lifespan context manager that loads the catalog at startup."""
    manager = CatalogServiceManager.get_instance()
    try:
        manager.get_catalog_service()
    except SchemaLoadError:
        # Recorded by the manager; every tool call reports it until restart.
        _logger.exception("Schema catalog failed to load during startup")
    yield
    _logger.info("Shutting down osquery schema server")


# Create the main MCP server instance with lifespan
mcp = FastMCP(
    instructions=(
        "Look up osquery tables and columns by platform, category and free text, "
        "and generate or check osquery SELECT statements, including the WHERE "
        "constraints some tables require."
    ),
    lifespan=lifespan,
)

# -- Tool Registration -------------------------------------------------------
register_catalog_tools(mcp)


# -- Health Check ----------------------------------------------------------
@mcp.custom_route("/health", methods=["GET"])
async def health_check(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": "osquery-schema-mcp"})
