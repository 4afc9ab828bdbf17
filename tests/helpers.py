import copy
import itertools

from merchant.config.settings import MerchantInfo
from merchant.errors import ContentApiError
from merchant.models.account import Account, AccountsPage, AccountUser, AdwordsLink


MERCHANT_ID = 5
AGGREGATOR_ID = 9


def make_account(account_id=MERCHANT_ID, name="Sample Shop", users=None, links=None):
    return Account(
        id=account_id,
        name=name,
        users=users if users is not None else [AccountUser("x@y.com", admin=False)],
        adwords_links=links if links is not None else [],
    )


def make_merchant_info(merchant_id=MERCHANT_ID, user=None, adwords_id=None):
    return MerchantInfo(
        merchant_id=merchant_id,
        account_sample_user=user,
        account_sample_adwords_id=adwords_id,
    )


class FakeAccountsService:
    """In-memory stand-in for ContentAccountsService with merge-on-patch semantics"""

    def __init__(self, accounts=None, identifiers=None, page_size=2):
        self.accounts = {a.id: copy.deepcopy(a) for a in accounts or []}
        self.subaccounts = {}
        self.identifiers = identifiers or []
        self.page_size = page_size
        self.calls = []
        self.patches = []
        self._ids = itertools.count(1000)

    def _missing(self, operation, account_id):
        return ContentApiError(operation, f"account {account_id} not found", status=404)

    def get(self, account_id, merchant_id=None):
        self.calls.append(("get", account_id))
        if account_id not in self.accounts:
            raise self._missing("accounts.get", account_id)
        return copy.deepcopy(self.accounts[account_id])

    def pages(self, aggregator_id, callback, max_results=None):
        self.calls.append(("list", aggregator_id))
        children = [copy.deepcopy(self.accounts[i]) for i in self.subaccounts.get(aggregator_id, [])]
        size = max_results or self.page_size
        for start in range(0, max(len(children), 1), size):
            callback(AccountsPage(resources=children[start:start + size]))

    def list(self, aggregator_id, max_results=None):
        found = []
        self.pages(aggregator_id, lambda page: found.extend(page.resources), max_results)
        return found

    def insert(self, aggregator_id, account):
        self.calls.append(("insert", aggregator_id))
        created = copy.deepcopy(account)
        created.id = next(self._ids)
        created.users = created.users or []
        created.adwords_links = created.adwords_links or []
        self.accounts[created.id] = created
        self.subaccounts.setdefault(aggregator_id, []).append(created.id)
        return copy.deepcopy(created)

    def patch(self, merchant_id, account_id, partial):
        self.calls.append(("patch", account_id))
        self.patches.append(copy.deepcopy(partial))
        if account_id not in self.accounts:
            raise self._missing("accounts.update", account_id)
        current = self.accounts[account_id]
        for name in ("name", "website_url", "users", "adwords_links"):
            value = getattr(partial, name)
            if value is not None:
                setattr(current, name, copy.deepcopy(value))
        return copy.deepcopy(current)

    def delete(self, aggregator_id, account_id):
        self.calls.append(("delete", account_id))
        if account_id not in self.subaccounts.get(aggregator_id, []):
            raise self._missing("accounts.delete", account_id)
        self.subaccounts[aggregator_id].remove(account_id)
        del self.accounts[account_id]

    def authinfo(self):
        self.calls.append(("authinfo", None))
        return list(self.identifiers)


class FailingPatchService(FakeAccountsService):
    def patch(self, merchant_id, account_id, partial):
        self.calls.append(("patch", account_id))
        raise ContentApiError("accounts.update", "backend error", status=500)


class FakeRequest:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class FakeDiscoveryClient:
    """Stand-in for the Content API discovery client holding raw JSON records"""

    def __init__(self, records):
        self.records = {str(r["id"]): copy.deepcopy(r) for r in records}
        self.updates = []

    def accounts(self):
        return self

    def get(self, merchantId, accountId):
        return FakeRequest(lambda: copy.deepcopy(self.records[str(accountId)]))

    def update(self, merchantId, accountId, body):
        def _execute():
            self.updates.append(copy.deepcopy(body))
            self.records[str(accountId)] = copy.deepcopy(body)
            return copy.deepcopy(body)
        return FakeRequest(_execute)
