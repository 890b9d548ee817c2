#!/usr/bin/env python3
"""
Issue an email verification link for a tenant user.

Usage:
    python scripts/issue_email_token.py user@example.com acme [--hours 24]

Reads EMAIL_SECRET and the other settings from the environment / .env.
"""

import argparse
from datetime import timedelta
from urllib.parse import urlencode

from app.features.auth.utils.security import create_email_token
from app.platform.config import get_settings


def build_link(email: str, tenant: str, hours: int) -> str:
    settings = get_settings()
    token = create_email_token(email, tenant, settings, expires_delta=timedelta(hours=hours))
    query = urlencode({"token": token, "tenant": tenant})
    return f"{settings.APP_URL}/api/verify-email?{query}"


def main():
    parser = argparse.ArgumentParser(description="Issue an email verification link")
    parser.add_argument("email", help="Address the link is issued for")
    parser.add_argument("tenant", help="Tenant path segment")
    parser.add_argument("--hours", type=int, default=24, help="Link validity in hours")
    args = parser.parse_args()

    print(build_link(args.email, args.tenant, args.hours))


if __name__ == "__main__":
    main()
