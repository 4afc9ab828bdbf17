"""
Account demos:
* Getting information about the configured Merchant Center account and
  adding/removing a user and an AdWords link, which works for both
  multi-client and non-multi-client accounts.
* Listing, adding, and removing sub-accounts, which needs a multi-client account.

Any ContentApiError raised by the service aborts the demo as-is; changes
already made on the remote side are not rolled back.
"""
import logging
import uuid
from typing import Callable, List, Optional, TextIO

from merchant.config.settings import MerchantInfo
from merchant.models.account import Account, AccountRole, AccountUser, AdwordsLink
from merchant.services.printer import print_account, print_accounts_page

logger = logging.getLogger(__name__)


def sample_account_name() -> str:
    return f"sampleAccount#{uuid.uuid4().hex}"


def without_user(users: Optional[List[AccountUser]], email_address: str) -> List[AccountUser]:
    """Copy of users minus every entry with the given email address"""
    return [u for u in users or [] if u.email_address != email_address]


def without_adwords_link(links: Optional[List[AdwordsLink]], adwords_id: int) -> List[AdwordsLink]:
    """Copy of links minus every link to the given AdWords account"""
    return [link for link in links or [] if link.adwords_id != adwords_id]


def build_revert_patch(account: Account, sample_user: Optional[str] = None,
                       sample_adwords_id: Optional[int] = None) -> Account:
    """
    Build a patch undoing the sample additions on account.

    Starts from an empty Account so only the collections being reverted are
    sent; everything else on the remote account is left alone.
    """
    patch = Account()
    if sample_user:
        logger.info(f"Removing user {sample_user}.")
        patch.users = without_user(account.users, sample_user)
    if sample_adwords_id:
        logger.info(f"Removing link to Adwords ID {sample_adwords_id}.")
        patch.adwords_links = without_adwords_link(account.adwords_links, sample_adwords_id)
    return patch


def primary_account_demo(service, merchant_info: MerchantInfo, out: TextIO = None) -> Account:
    """
    Show the configured account, add the sample user and/or AdWords link, then
    remove them again with a minimal patch.

    Returns:
        The account as last returned by the API
    """
    merchant_id = merchant_info.merchant_id
    sample_user = merchant_info.account_sample_user
    sample_adwords_id = merchant_info.account_sample_adwords_id

    logger.info("Getting account information.")
    account = service.get(merchant_id)
    print_account(account, out)

    changed = False
    if sample_user:
        logger.info(f"Adding user {sample_user}.")
        account.users = list(account.users or []) + [AccountUser(email_address=sample_user, admin=False)]
        changed = True
    if sample_adwords_id:
        logger.info(f"Linking Adwords ID {sample_adwords_id}.")
        account.adwords_links = list(account.adwords_links or []) + [
            AdwordsLink(adwords_id=sample_adwords_id, status="active")
        ]
        changed = True

    if not changed:
        logger.info("No account changes available in sample configuration.")
        return account

    logger.info("Patching account information.")
    account = service.patch(merchant_id, merchant_id, account)
    print_account(account, out)

    logger.info("Rolling back changes.")
    revert = build_revert_patch(account, sample_user, sample_adwords_id)

    logger.info("Reverting account information.")
    account = service.patch(merchant_id, merchant_id, revert)
    print_account(account, out)
    return account


def _print_subaccounts(service, aggregator_id: int, out: TextIO, max_results: Optional[int]) -> None:
    logger.info(f"Printing subaccounts of {aggregator_id}:")
    service.pages(aggregator_id, lambda page: print_accounts_page(page, out), max_results=max_results)
    print("", file=out)


def multi_client_account_demo(service, merchant_info: MerchantInfo, role: AccountRole,
                              out: TextIO = None,
                              name_factory: Callable[[], str] = sample_account_name,
                              max_results: Optional[int] = None) -> Optional[Account]:
    """
    List the sub-accounts of the configured MCA, add one, then remove it,
    relisting after each step.

    Returns:
        The sub-account that was added and removed, or None when the
        configured account is not an MCA (no API calls are made then)
    """
    if not role.is_mca:
        logger.warning("This demo requires a multi-client account.")
        return None

    aggregator_id = merchant_info.merchant_id
    _print_subaccounts(service, aggregator_id, out, max_results)

    account_name = name_factory()
    logger.info(f"Adding subaccount with name {account_name}.")
    account = service.insert(aggregator_id, Account(name=account_name, website_url=merchant_info.website_url))
    logger.info(f"Subaccount added with ID {account.id}.")

    _print_subaccounts(service, aggregator_id, out, max_results)

    logger.info(f"Removing subaccount with ID {account.id}.")
    service.delete(aggregator_id, account.id)
    logger.info("Subaccount removed.")

    _print_subaccounts(service, aggregator_id, out, max_results)
    return account
