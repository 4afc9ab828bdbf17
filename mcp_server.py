"""
Merchant Center accounts MCP server

Read-only tools over the Content API accounts resource, using the same
configuration and credential lookup as accounts_sample.py.
"""
import logging
import os
from dataclasses import asdict
from typing import Dict, List, Optional

from fastmcp import FastMCP

from merchant.config.settings import config
from merchant.errors import ConfigError
from merchant.services.account_status import resolve_account_role
from merchant.services.content_service import ContentAccountsService
from merchant.services.credentials import load_credentials

logging.basicConfig(level=config.log_level.upper(), format="%(asctime)s %(levelname)s: %(message)s")
logger = logging.getLogger("merchant_mcp")

mcp = FastMCP("Merchant Center Accounts")

_service: Optional[ContentAccountsService] = None


def _get_service() -> ContentAccountsService:
    """Accounts service built once from the global config"""
    global _service
    if _service is None:
        merchant_info = config.content.load_merchant_info()
        credentials = load_credentials(config.content, merchant_info)
        _service = ContentAccountsService(credentials=credentials)
        logger.info("✅ Content API accounts service initialized")
    return _service


def _parse_id(value, what: str) -> int:
    try:
        return int(str(value).replace("-", "").strip())
    except ValueError:
        raise ConfigError(f"{what} must be a numeric Merchant Center id, got {value!r}") from None


def _default_merchant_id(merchant_id: Optional[str], what: str = "merchant_id") -> int:
    if merchant_id:
        return _parse_id(merchant_id, what)
    return config.content.load_merchant_info().merchant_id


# --- Raw tool functions ---
def get_account(account_id: Optional[str] = None, merchant_id: Optional[str] = None) -> Dict:
    """Get a Merchant Center account with its users and AdWords links.

    Args:
      account_id: Account to fetch (defaults to the configured merchantId)
      merchant_id: Aggregator making the call, when account_id is a sub-account
    """
    account_id = _default_merchant_id(account_id, "account_id")
    caller = _parse_id(merchant_id, "merchant_id") if merchant_id else None
    return asdict(_get_service().get(account_id, merchant_id=caller))


def list_subaccounts(aggregator_id: Optional[str] = None, max_results: Optional[int] = None) -> List[Dict]:
    """List every sub-account of a multi-client account.

    Args:
      aggregator_id: MCA id (defaults to the configured merchantId)
      max_results: page size hint
    """
    aggregator_id = _default_merchant_id(aggregator_id, "aggregator_id")
    return [asdict(a) for a in _get_service().list(aggregator_id, max_results=max_results)]


def get_account_role(merchant_id: Optional[str] = None) -> Dict:
    """Tell whether an account is standalone, a multi-client account, or a sub-account."""
    merchant_id = _default_merchant_id(merchant_id)
    role = resolve_account_role(_get_service(), merchant_id)
    return {"merchant_id": merchant_id, "role": role.value, "is_mca": role.is_mca}


TOOL_REGISTRY = {
    "get_account": get_account,
    "list_subaccounts": list_subaccounts,
    "get_account_role": get_account_role,
}

for _fn in TOOL_REGISTRY.values():
    mcp.tool()(_fn)


@mcp.resource("merchant://help")
def help_resource() -> str:
    return (
        "Merchant Center Accounts MCP\n"
        "Tools:\n"
        " • get_account(account_id=None, merchant_id=None)\n"
        " • list_subaccounts(aggregator_id=None, max_results=None)\n"
        " • get_account_role(merchant_id=None)\n"
        "\n"
        "Ids default to merchantId from merchant-info.json.\n"
    )


if __name__ == "__main__":
    port = int(os.getenv("PORT", "7070"))
    host = os.getenv("HOST", "0.0.0.0")
    transport = os.getenv("MCP_TRANSPORT", "stdio")

    if transport == "http":
        logger.info(f"📡 Serving MCP over HTTP at http://{host}:{port}/mcp")
        mcp.run(transport="http", host=host, port=port)
    else:
        mcp.run()
