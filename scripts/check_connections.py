#!/usr/bin/env python3
"""
Connection Check Script

Verifies the database, document store, Gemini and n8n configuration.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from utopia_hire.core.config import get_settings
from utopia_hire.db.mongodb import test_mongo_connection
from utopia_hire.db.postgres import test_postgres_connection
from utopia_hire.services.gemini_client import get_gemini_client


def main():
    settings = get_settings()
    print("=" * 50)
    print("UTOPIA HIRE - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking relational database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    print("\n[2] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n[3] Checking Gemini API...")
    if settings.gemini_api_key:
        print(f"    Model: {settings.gemini_model}")
        if get_gemini_client().test_connection():
            print("    ✅ Gemini: CONNECTED")
        else:
            print("    ❌ Gemini: FAILED")
    else:
        print("    ⚠️  Gemini: API key not configured")

    print("\n[4] Checking n8n webhooks...")
    print(f"    Base URL: {settings.n8n_base_url}")
    if settings.n8n_api_key:
        print("    ✅ n8n: API key configured")
    else:
        print("    ⚠️  n8n: API key not configured (resume and matching routes will fail)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
