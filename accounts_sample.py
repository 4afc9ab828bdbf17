"""
Merchant Center account samples

Runs the primary account demo and/or the multi-client account demo against
the account configured in <config_path>/content/merchant-info.json.
"""
import argparse
import logging
import sys

from merchant.config.settings import config, AppConfig
from merchant.errors import MerchantSampleError
from merchant.services.account_status import must_be_mca, resolve_account_role
from merchant.services.account_workflows import multi_client_account_demo, primary_account_demo
from merchant.services.content_service import ContentAccountsService
from merchant.services.credentials import load_credentials

logger = logging.getLogger("merchant_samples")

DEMOS = ("primary", "multi-client", "all")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Content API for Shopping account samples")
    parser.add_argument("--config_path", help="Directory holding content/merchant-info.json")
    parser.add_argument("--demo", choices=DEMOS, default="all", help="Which demo to run")
    parser.add_argument("--max_results", type=int, help="Page size when listing subaccounts")
    parser.add_argument("--log_level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, app_config: AppConfig, service=None, out=None) -> None:
    merchant_info = app_config.content.load_merchant_info()
    if service is None:
        credentials = load_credentials(app_config.content, merchant_info)
        service = ContentAccountsService(credentials=credentials, content_config=app_config.content)

    logger.info("Retrieving MCA status of configured account.")
    role = resolve_account_role(service, merchant_info.merchant_id)
    logger.info(f"Account {merchant_info.merchant_id} resolved as {role.value}.")

    if args.demo in ("primary", "all"):
        primary_account_demo(service, merchant_info, out)
    if args.demo == "multi-client":
        must_be_mca(role, "The multi-client demo requires a multi-client account.")
    if args.demo in ("multi-client", "all"):
        multi_client_account_demo(service, merchant_info, role, out, max_results=args.max_results)


def main(argv=None) -> int:
    args = parse_args(argv)
    app_config = AppConfig(args.config_path) if args.config_path else config

    logging.basicConfig(
        level=(args.log_level or app_config.log_level).upper(),
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    try:
        run(args, app_config)
    except MerchantSampleError as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
