"""
MCP server module for Spaceship-DNS.

This module registers the DNS tools on a FastMCP server.
"""

import logging
from typing import Annotated, Any, Awaitable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from spaceship_dns.models.errors import SpaceshipError
from spaceship_dns.provider.spaceship import SpaceshipClient
from spaceship_dns.server import tools

SERVER_NAME = "spaceship-mcp-server"

logger = logging.getLogger("spaceship-dns.server")

Domain = Annotated[str, Field(description="The domain name")]
Name = Annotated[str, Field(description="The record name (subdomain), '@' for the apex")]
Ttl = Annotated[Optional[int], Field(description="Time to live in seconds (optional)")]
Records = Annotated[
    List[Dict[str, Any]],
    Field(
        description=(
            "DNS records. Each has 'name', 'type' (A, AAAA, CNAME, MX, SRV, TXT, ...), "
            "optional 'ttl', and either a 'value' string or type-specific fields "
            "(address; target; priority/exchange; priority/weight/port/target)"
        )
    ),
]


async def _run(tool_name: str, call: Awaitable[str]) -> str:
    try:
        return await call
    except SpaceshipError as e:
        logger.warning(f"Tool {tool_name} failed: {e}")
        raise ToolError(f"Tool execution failed: {e}") from e


def build_server(client: SpaceshipClient) -> FastMCP:
    """
    Build a FastMCP server exposing the DNS tools.

    Args:
        client: Spaceship API client used by every tool

    Returns:
        FastMCP: Configured server
    """
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool()
    async def list_dns_records(domain: Domain) -> str:
        """List all DNS records for a domain"""
        return await _run("list_dns_records", tools.list_dns_records(client, domain))

    @mcp.tool()
    async def create_dns_record(domain: Domain, records: Records) -> str:
        """Create new DNS records for a domain"""
        return await _run(
            "create_dns_record", tools.create_dns_records(client, domain, records)
        )

    @mcp.tool()
    async def update_dns_records(domain: Domain, records: Records) -> str:
        """Update DNS records for a domain"""
        return await _run(
            "update_dns_records", tools.update_dns_records(client, domain, records)
        )

    @mcp.tool()
    async def delete_dns_records(domain: Domain, records: Records) -> str:
        """Delete DNS records for a domain. Only name and type are used."""
        return await _run(
            "delete_dns_records", tools.delete_dns_records(client, domain, records)
        )

    @mcp.tool()
    async def delete_dns_record(
        domain: Domain,
        name: Name,
        type: Annotated[str, Field(description="The record type")],
    ) -> str:
        """Delete all DNS records of one type at one name"""
        record = {"name": name, "type": type}
        return await _run(
            "delete_dns_record", tools.delete_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_a_record(
        domain: Domain,
        name: Name,
        address: Annotated[str, Field(description="IPv4 address")],
        ttl: Ttl = None,
    ) -> str:
        """Create an A record"""
        record = tools.address_record("A", name, address, ttl)
        return await _run(
            "create_a_record", tools.create_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_aaaa_record(
        domain: Domain,
        name: Name,
        address: Annotated[str, Field(description="IPv6 address")],
        ttl: Ttl = None,
    ) -> str:
        """Create an AAAA record"""
        record = tools.address_record("AAAA", name, address, ttl)
        return await _run(
            "create_aaaa_record", tools.create_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_cname_record(
        domain: Domain,
        name: Name,
        target: Annotated[str, Field(description="Canonical name, without trailing dot")],
        ttl: Ttl = None,
    ) -> str:
        """Create a CNAME record"""
        record = tools.cname_record(name, target, ttl)
        return await _run(
            "create_cname_record", tools.create_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_mx_record(
        domain: Domain,
        name: Name,
        priority: Annotated[int, Field(ge=0, description="Mail server preference")],
        exchange: Annotated[str, Field(description="Mail server hostname")],
        ttl: Ttl = None,
    ) -> str:
        """Create an MX record"""
        record = tools.mx_record(name, priority, exchange, ttl)
        return await _run(
            "create_mx_record", tools.create_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_srv_record(
        domain: Domain,
        name: Annotated[
            str, Field(description="Record name, e.g. '_autodiscover._tcp'")
        ],
        priority: Annotated[int, Field(ge=0)],
        weight: Annotated[int, Field(ge=0)],
        port: Annotated[int, Field(ge=0, le=65535)],
        target: Annotated[str, Field(description="Target hostname")],
        service: Annotated[
            Optional[str], Field(description="Service label, e.g. '_autodiscover'")
        ] = None,
        protocol: Annotated[
            Optional[str], Field(description="Protocol label, e.g. '_tcp'")
        ] = None,
        ttl: Ttl = None,
    ) -> str:
        """Create an SRV record"""
        record = tools.srv_record(
            name, priority, weight, port, target, service, protocol, ttl
        )
        return await _run(
            "create_srv_record", tools.create_dns_records(client, domain, [record])
        )

    @mcp.tool()
    async def create_txt_record(
        domain: Domain,
        name: Name,
        value: Annotated[str, Field(description="Text value")],
        ttl: Ttl = None,
    ) -> str:
        """Create a TXT record"""
        record = tools.txt_record(name, value, ttl)
        return await _run(
            "create_txt_record", tools.create_dns_records(client, domain, [record])
        )

    return mcp
