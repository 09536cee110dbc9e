#!/usr/bin/env python3
"""
DeskMap - Token Issuer
Mints a bearer token for local testing against the API
"""
import argparse
from datetime import timedelta

from deskmap.config import get_settings
from deskmap.services.auth import AuthService, Identity, Role


def main():
    parser = argparse.ArgumentParser(description="Issue a DeskMap bearer token")
    parser.add_argument("--id", default="local-user", help="Subject id")
    parser.add_argument("--email", default="admin@deskmap.local")
    parser.add_argument("--role", choices=[r.value for r in Role], default=Role.ADMIN.value)
    parser.add_argument("--minutes", type=int, default=None, help="Lifetime (default from settings)")
    args = parser.parse_args()

    settings = get_settings()
    identity = Identity(id=args.id, email=args.email, role=Role(args.role))
    expires = timedelta(minutes=args.minutes) if args.minutes else None

    token = AuthService.create_access_token(identity, settings, expires)

    print(f"🔐 {identity.role.value} token for {identity.email}:\n")
    print(token)
    print(f"\nUse it as: Authorization: Bearer <token>")


if __name__ == "__main__":
    main()
