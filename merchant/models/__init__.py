"""Data models for the Merchant Center account samples"""
from .account import Account, AccountIdentifier, AccountRole, AccountsPage, AccountUser, AdwordsLink

__all__ = ["Account", "AccountIdentifier", "AccountRole", "AccountsPage", "AccountUser", "AdwordsLink"]
