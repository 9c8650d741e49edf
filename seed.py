#!/usr/bin/env python3
"""
SchoolDesk Seeding Script
Deletes all students, classes and grades, then recreates grades R-12 with classes A-F.
Meant for empty or development databases.
"""

import sys
from config import Config


def print_step(step_name):
    """Print a formatted step header"""
    print("\n" + "="*60)
    print(f"STEP: {step_name}")
    print("="*60)


def main(config_class=Config):
    """Run the seeding job; returns True on success"""
    from schooldesk import create_app, db
    from schooldesk.commands import run_seed

    print_step("Seeding Grades and Classes")
    app = create_app(config_class)
    with app.app_context():
        try:
            return run_seed()
        finally:
            db.session.remove()
            db.engine.dispose()
            print("\n🔌 Database connection closed")


if __name__ == "__main__":
    try:
        success = main()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n❌ Seeding interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Unexpected error during seeding: {e}")
        sys.exit(1)
