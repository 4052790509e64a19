#!/usr/bin/env python
"""Database initialization script for the auth backend.

Creates all database tables from the SQLAlchemy models. Run this once
before starting the application for the first time.

Usage:
    python init_db.py
"""

import os
import sys
from dualauth import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            db.create_all()
            print("Created tables:")
            for table_name in db.metadata.tables:
                print(f"  - {table_name}")
            print("\nNext steps:")
            print("  1. Start the Flask server: python wsgi.py")
            print("  2. Test registration endpoint: POST /api/auth/register\n")
            return True
        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
