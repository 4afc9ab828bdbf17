"""Human readable rendering of accounts"""
import sys
from typing import TextIO

from merchant.models.account import Account, AccountsPage


def format_account(account: Account) -> str:
    lines = [
        f"Information for account {account.id}:",
        f"- Display name: {account.name}",
    ]
    if not account.users:
        lines.append("- No registered users.")
    else:
        lines.append("- Registered users:")
        for user in account.users:
            prefix = "(ADMIN) " if user.is_admin else ""
            lines.append(f"  - {prefix}{user.email_address}")
    if not account.adwords_links:
        lines.append("- No linked Adwords accounts.")
    else:
        lines.append("- Linked Adwords accounts:")
        for link in account.adwords_links:
            lines.append(f"  - {link}")
    return "\n".join(lines)


def print_account(account: Account, out: TextIO = None) -> None:
    print(format_account(account), file=out or sys.stdout)


def print_accounts_page(page: AccountsPage, out: TextIO = None) -> None:
    for account in page.resources:
        print_account(account, out)
