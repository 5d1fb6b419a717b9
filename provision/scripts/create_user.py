"""
Create or update a user from the shell. Run from project root:
  python -m provision.scripts.create_user USER_ID PASSWORD [options]
Example:
  python -m provision.scripts.create_user admin your-secure-password --sysop --sections-all
"""
import argparse
import asyncio
import logging
import sys

from provision.core.config import get_settings
from provision.core.elastic import get_user_store
from provision.core.exceptions import ProvisionError
from provision.core.store import StoreStatus
from provision.schemas.user import UserUpsert
from provision.services.users import upsert_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create or update a user (no registration UI).")
    parser.add_argument("user_id", help="User id")
    parser.add_argument("password", help="Password (empty or REDACTED keeps the stored one)")
    parser.add_argument("--display-name", default="")
    parser.add_argument("--description", default="")
    parser.add_argument("--sysop", action="store_true", help="Grant system operator privilege")
    parser.add_argument("--inactive", action="store_true", help="Create the account disabled")
    parser.add_argument("--section", action="append", default=[], dest="sections")
    parser.add_argument("--sections-all", action="store_true")
    parser.add_argument("--account", action="append", default=[], dest="accounts")
    parser.add_argument("--admin-account", action="append", default=[], dest="admin_accounts")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    user_id = args.user_id.strip()
    if not user_id:
        print("User id must not be empty.", file=sys.stderr)
        return 1

    user = UserUpsert(
        id=user_id,
        password=args.password,
        display_name=args.display_name,
        description=args.description,
        active=not args.inactive,
        sysop=args.sysop,
        sections=args.sections,
        sections_all=args.sections_all,
        accounts=args.accounts,
        admin_accounts=args.admin_accounts,
    )
    try:
        resp = asyncio.run(upsert_user(user, get_user_store(), get_settings()))
    except ProvisionError as e:
        print(e.message, file=sys.stderr)
        return 1
    if resp.status is not StoreStatus.SUCCESS:
        logger.error("Store returned %s: %s", resp.status_code, resp.body)
        return 1
    print(f"Upserted user '{user_id}' ({resp.body.get('result', 'ok')}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
