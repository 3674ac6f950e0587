#!/usr/bin/env python3
"""
Mint a session token for an existing user without logging in.

Useful for calling protected routes from scripts.  The token is signed
with the SECRET_KEY of the current environment, so run this with the
same configuration as the server.

Usage:
    python create_token.py --user-id 65f0c0ffee0000000000beef --email admin@ex.com --minutes 1440
"""

import argparse

from capsulify_api.app.core.config import settings
from capsulify_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a Capsulify session token.")
    ap.add_argument("--user-id", required=True, help="User id (the users collection _id)")
    ap.add_argument("--email", required=True, help="User email")
    ap.add_argument(
        "--minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = ap.parse_args()

    token = create_access_token(
        {"user_id": args.user_id, "email": args.email},
        expires_delta=args.minutes * 60,
    )
    print(token)


if __name__ == "__main__":
    main()
