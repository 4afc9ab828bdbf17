"""Account data models"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


def _to_int(value) -> Optional[int]:
    """Content API sends uint64 ids as decimal strings"""
    if value is None or value == "":
        return None
    return int(value)


class AccountRole(Enum):
    """How the configured account relates to the authenticated user"""
    STANDALONE = "standalone"
    AGGREGATOR = "aggregator"
    SUB_ACCOUNT = "sub_account"

    @property
    def is_mca(self) -> bool:
        return self is AccountRole.AGGREGATOR


USER_FIELDS = ("emailAddress", "admin")
LINK_FIELDS = ("adsId", "status")


def _unmodelled(data: dict, known) -> dict:
    """API fields the models do not cover, sent back as received"""
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class AccountUser:
    """A user registered on a Merchant Center account"""
    email_address: str
    admin: Optional[bool] = None
    # orderManager, reportingManager, readOnly and other per-user permissions
    extra: dict = field(default_factory=dict, repr=False)

    @property
    def is_admin(self) -> bool:
        return bool(self.admin)

    @classmethod
    def from_api(cls, data: dict) -> "AccountUser":
        return cls(
            email_address=data.get("emailAddress", ""),
            admin=data.get("admin"),
            extra=_unmodelled(data, USER_FIELDS),
        )

    def to_api(self) -> dict:
        body = dict(self.extra)
        body["emailAddress"] = self.email_address
        if self.admin is not None:
            body["admin"] = self.admin
        return body


@dataclass
class AdwordsLink:
    """Link between a Merchant Center account and an AdWords account"""
    adwords_id: int
    status: str = "active"
    extra: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: dict) -> "AdwordsLink":
        return cls(
            adwords_id=_to_int(data.get("adsId")),
            status=data.get("status", ""),
            extra=_unmodelled(data, LINK_FIELDS),
        )

    def to_api(self) -> dict:
        body = dict(self.extra)
        body.update({"adsId": str(self.adwords_id), "status": self.status})
        return body

    def __str__(self) -> str:
        return f"{self.adwords_id}: {self.status}"


@dataclass
class Account:
    """
    Merchant Center account model.

    Fields left as None are absent: they are not sent to the API, so a patch
    built from a fresh Account only touches what was filled in. An empty list
    is sent as-is and clears that collection.
    """
    id: Optional[int] = None
    name: Optional[str] = None
    website_url: Optional[str] = None
    users: Optional[List[AccountUser]] = None
    adwords_links: Optional[List[AdwordsLink]] = None

    @classmethod
    def from_api(cls, data: dict) -> "Account":
        users = data.get("users")
        links = data.get("adsLinks")
        return cls(
            id=_to_int(data.get("id")),
            name=data.get("name"),
            website_url=data.get("websiteUrl"),
            users=[AccountUser.from_api(u) for u in users] if users is not None else None,
            adwords_links=[AdwordsLink.from_api(link) for link in links] if links is not None else None,
        )

    def to_api(self) -> dict:
        body = {}
        if self.id is not None:
            body["id"] = str(self.id)
        if self.name is not None:
            body["name"] = self.name
        if self.website_url is not None:
            body["websiteUrl"] = self.website_url
        if self.users is not None:
            body["users"] = [u.to_api() for u in self.users]
        if self.adwords_links is not None:
            body["adsLinks"] = [link.to_api() for link in self.adwords_links]
        return body

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id})"


@dataclass(frozen=True)
class AccountIdentifier:
    """One (merchantId, aggregatorId) pair from Accounts.authinfo"""
    merchant_id: Optional[int] = None
    aggregator_id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "AccountIdentifier":
        return cls(
            merchant_id=_to_int(data.get("merchantId")),
            aggregator_id=_to_int(data.get("aggregatorId")),
        )


@dataclass
class AccountsPage:
    """One page of Accounts.list results"""
    resources: List[Account] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "AccountsPage":
        return cls(
            resources=[Account.from_api(a) for a in data.get("resources", [])],
            next_page_token=data.get("nextPageToken"),
        )
