#!/usr/bin/env python3
"""
Operator tasks on the reservation store file.

Subcommands:
    init              apply migrations and seed an empty store
    reset-credential  set a new credential for the account with an e-mail
    issue-token       print a long-lived bearer token for an account
    stats             print booking counts per status

Usage:
    python reservation_admin.py --store ./reservations.db init
    python reservation_admin.py reset-credential --email admin@reservas.com
    python reservation_admin.py issue-token --email admin@reservas.com --days 365

``--store`` defaults to the configured ``STORE_PATH``.  When
``--credential`` is omitted you are prompted for it.  Existing
credentials are never printed.
"""

import argparse
import getpass
import sys

from reservation_api.app.core.security import create_access_token
from reservation_api.app.core.store import SQLiteStore, get_store_path, init_store
from reservation_api.app.schemas.account import AccountUpdate
from reservation_api.app.services.account_service import AccountService
from reservation_api.app.services.booking_service import BookingService


def cmd_init(store: SQLiteStore, args: argparse.Namespace) -> int:
    init_store(store, seed=not args.no_seed)
    print(f"[+] Store ready: {store.path}")
    return 0


def cmd_reset_credential(store: SQLiteStore, args: argparse.Namespace) -> int:
    accounts = AccountService(store)
    account = accounts.find_by_email(args.email)
    if account is None:
        print(f"[!] No account found with email: {args.email}", file=sys.stderr)
        return 2
    credential = args.credential or getpass.getpass("Enter NEW credential: ")
    result = accounts.update(account.id, AccountUpdate(credential=credential))
    if not result.ok:
        print(f"[!] {result.message}", file=sys.stderr)
        return 1
    print(f"[+] Credential updated for account: {args.email}")
    return 0


def cmd_issue_token(store: SQLiteStore, args: argparse.Namespace) -> int:
    if AccountService(store).find_by_email(args.email) is None:
        print(f"[!] No account found with email: {args.email}", file=sys.stderr)
        return 2
    print(create_access_token({"sub": args.email}, expires_delta=args.days * 24 * 60 * 60))
    return 0


def cmd_stats(store: SQLiteStore, args: argparse.Namespace) -> int:
    counts = BookingService(store).count_by_status()
    for name, value in counts.model_dump().items():
        print(f"{name:>10}: {value}")
    return 0


COMMANDS = {
    "init": cmd_init,
    "reset-credential": cmd_reset_credential,
    "issue-token": cmd_issue_token,
    "stats": cmd_stats,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Reservation store administration.")
    ap.add_argument("--store", help="Path to the SQLite store file (default: STORE_PATH)")
    sub = ap.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Apply migrations and seed an empty store")
    init.add_argument("--no-seed", action="store_true", help="Create empty collections only")

    reset = sub.add_parser("reset-credential", help="Set a new credential for an account")
    reset.add_argument("--email", required=True)
    reset.add_argument("--credential", help="New credential. If omitted, you'll be prompted securely.")

    token = sub.add_parser("issue-token", help="Print a bearer token for an account")
    token.add_argument("--email", required=True)
    token.add_argument("--days", type=int, default=365)

    sub.add_parser("stats", help="Print booking counts per status")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    store = SQLiteStore(args.store or get_store_path())
    if args.command != "init":
        # Other commands expect the schema to exist, but must not seed.
        store.migrate()
    return COMMANDS[args.command](store, args)


if __name__ == "__main__":
    sys.exit(main())
