#!/usr/bin/env python3
"""
Repair class -> grade links.

Reads the grade level from every class name ("2D" -> 2, "RF" -> R) and points
the class at the matching grade. Safe to run repeatedly.
"""

import sys
from config import Config


def main(config_class=Config):
    """Run the reconciliation job; returns True on success"""
    from schooldesk import create_app, db
    from schooldesk.commands import run_fix_class_grades

    app = create_app(config_class)
    with app.app_context():
        try:
            return run_fix_class_grades()
        finally:
            db.session.remove()
            db.engine.dispose()


if __name__ == "__main__":
    try:
        success = main()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n❌ Interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
