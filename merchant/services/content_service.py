"""
Content API for Shopping accounts service
"""
import logging
from typing import Callable, Iterator, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from merchant.config.settings import config, ContentConfig
from merchant.errors import ContentApiError
from merchant.models.account import Account, AccountIdentifier, AccountsPage

logger = logging.getLogger(__name__)


def _format_content_error(where: str, ex: HttpError) -> ContentApiError:
    status = getattr(ex.resp, "status", None)
    detail = ex.reason or str(ex)
    details = getattr(ex, "error_details", None)
    if details and details != detail:
        detail = f"{detail} {details}"
    return ContentApiError(where, detail, status=int(status) if status is not None else None)


class ContentAccountsService:
    """Thin wrapper over the Accounts resource of the Content API"""

    def __init__(self, credentials=None, content_config: Optional[ContentConfig] = None, client=None):
        """
        Initialize the accounts service

        Args:
            credentials: google.auth credentials scoped for the Content API
            content_config: Optional custom config; defaults to the global one
            client: Prebuilt discovery client, skips building one from credentials
        """
        self.config = content_config or config.content
        self.client = client if client is not None else self._create_client(credentials)

    def _create_client(self, credentials):
        """Create a Content API client from config"""
        client_options = {}
        endpoint = self.config.api_endpoint()
        if endpoint:
            client_options["api_endpoint"] = endpoint
            logger.info(f"Using non-standard API endpoint: {endpoint}")
        return build(
            "content",
            self.config.api_version,
            credentials=credentials,
            client_options=client_options or None,
            cache_discovery=False,
        )

    @property
    def accounts(self):
        return self.client.accounts()

    def _execute(self, where: str, request) -> dict:
        try:
            return request.execute()
        except HttpError as ex:
            raise _format_content_error(where, ex) from ex

    def _get_raw(self, merchant_id: int, account_id: int) -> dict:
        return self._execute(
            "accounts.get", self.accounts.get(merchantId=merchant_id, accountId=account_id)
        )

    def get(self, account_id: int, merchant_id: Optional[int] = None) -> Account:
        """
        Get a single account

        Args:
            account_id: Account to fetch
            merchant_id: Account making the call; an aggregator or the account itself
        """
        if merchant_id is None:
            merchant_id = account_id
        return Account.from_api(self._get_raw(merchant_id, account_id))

    def iter_pages(self, aggregator_id: int, max_results: Optional[int] = None) -> Iterator[AccountsPage]:
        """Lazily walk the sub-account pages of an aggregator in server order"""
        kwargs = {"merchantId": aggregator_id}
        if max_results:
            kwargs["maxResults"] = max_results
        request = self.accounts.list(**kwargs)
        while request is not None:
            response = self._execute("accounts.list", request)
            yield AccountsPage.from_api(response)
            request = self.accounts.list_next(request, response)

    def pages(self, aggregator_id: int, callback: Callable[[AccountsPage], None],
              max_results: Optional[int] = None) -> None:
        """Invoke callback once per page of sub-accounts"""
        for page in self.iter_pages(aggregator_id, max_results=max_results):
            callback(page)

    def list(self, aggregator_id: int, max_results: Optional[int] = None) -> Iterator[Account]:
        """Lazily yield every sub-account of an aggregator"""
        for page in self.iter_pages(aggregator_id, max_results=max_results):
            yield from page.resources

    def insert(self, aggregator_id: int, account: Account) -> Account:
        """Create a sub-account; the server assigns its id"""
        response = self._execute(
            "accounts.insert", self.accounts.insert(merchantId=aggregator_id, body=account.to_api())
        )
        return Account.from_api(response)

    def patch(self, merchant_id: int, account_id: int, partial: Account) -> Account:
        """
        Change only the fields populated on partial

        The accounts resource only accepts full updates, so the current record
        is fetched and the populated fields are overlaid on it. Fields the
        models do not cover are sent back untouched.
        """
        body = self._get_raw(merchant_id, account_id)
        body.update(partial.to_api())
        body["id"] = str(account_id)
        response = self._execute(
            "accounts.update",
            self.accounts.update(merchantId=merchant_id, accountId=account_id, body=body),
        )
        return Account.from_api(response)

    def delete(self, aggregator_id: int, account_id: int) -> None:
        """Delete a sub-account"""
        self._execute("accounts.delete", self.accounts.delete(merchantId=aggregator_id, accountId=account_id))

    def authinfo(self) -> List[AccountIdentifier]:
        """Every (merchantId, aggregatorId) pair the caller is authorized for"""
        response = self._execute("accounts.authinfo", self.accounts.authinfo())
        return [AccountIdentifier.from_api(i) for i in response.get("accountIdentifiers", [])]
