"""
Works out whether the configured account is a multi-client account (MCA)
"""
import logging
from typing import Iterable, Optional

from merchant.errors import AccessDeniedError, AccountRoleError, ContentApiError
from merchant.models.account import AccountIdentifier, AccountRole

logger = logging.getLogger(__name__)

MCA_MSG = "This operation can only be run on multi-client accounts."


def classify(merchant_id: int, identifiers: Iterable[AccountIdentifier]) -> Optional[AccountRole]:
    """Role of merchant_id according to authinfo alone, or None if it is not listed"""
    for identifier in identifiers:
        if identifier.merchant_id == merchant_id:
            return AccountRole.STANDALONE
        if identifier.aggregator_id == merchant_id:
            return AccountRole.AGGREGATOR
    return None


def resolve_account_role(service, merchant_id: int,
                         identifiers: Optional[Iterable[AccountIdentifier]] = None) -> AccountRole:
    """
    Resolve the role of merchant_id for the authenticated user

    Args:
        service: Accounts service used for authinfo and the access check
        merchant_id: Configured Merchant Center id
        identifiers: Already fetched authinfo pairs; fetched when omitted

    Returns:
        AccountRole of the account

    Raises:
        AccessDeniedError: if the account is neither listed nor readable
    """
    if identifiers is None:
        logger.info("Getting authenticated account information.")
        identifiers = service.authinfo()

    role = classify(merchant_id, identifiers)
    if role is not None:
        return role

    # Not listed: either a sub-account of a listed MCA or an account we cannot reach
    try:
        service.get(merchant_id)
    except ContentApiError as e:
        raise AccessDeniedError(merchant_id, e) from e
    # Sub-accounts cannot be MCAs themselves
    return AccountRole.SUB_ACCOUNT


def must_be_mca(role: AccountRole, msg: str = MCA_MSG) -> None:
    if not role.is_mca:
        raise AccountRoleError(msg)