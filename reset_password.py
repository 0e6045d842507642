#!/usr/bin/env python3
"""
Reset a user's password in the OAuth Identity SQLite database.

This script DOES NOT read or reveal any existing password.  It sends the
new password through ``UserService.create_or_update`` with the user's
id, so the password is hashed exactly as the API would hash it and all
other user fields stay untouched.

Usage:
    python reset_password.py --db ./oauth_identity.db --user-id 1 --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import os
import sqlite3
import sys
from typing import List, Optional

from oauth_identity_api.app.core.exceptions import NotFoundError
from oauth_identity_api.app.schemas.user import UserRequest
from oauth_identity_api.app.services.user_service import UserService


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a user's password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./oauth_identity.db)")
    ap.add_argument("--user-id", required=True, type=int, help="Id of the user to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    def connect() -> sqlite3.Connection:
        conn = sqlite3.connect(args.db)
        conn.row_factory = sqlite3.Row
        return conn

    service = UserService(connection_factory=connect)
    try:
        user = asyncio.run(service.get_entity(args.user_id))
        if user is None:
            print(f"[!] No user found with id: {args.user_id}", file=sys.stderr)
            return 2

        # Only the password is applied on update; username is required by the schema.
        request = UserRequest(id=user.id, username=user.username, password=new_password)
        asyncio.run(service.create_or_update(request))
    except NotFoundError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2
    except sqlite3.DatabaseError as e:
        # Raised for files that were never migrated or are not SQLite at all.
        print(f"[!] Cannot use DB {args.db}: {e}", file=sys.stderr)
        return 1
    print(f"[+] Password updated for user: {user.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
