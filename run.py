#!/usr/bin/env python3
"""
Bank Account Entry Point

Starts the FastAPI server serving a single in-memory bank account.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from bank_account.api import run_server
from bank_account.config import get_config


if __name__ == "__main__":
    settings = get_config()
    print("🏦 Starting Bank Account API...")
    print(f"📏 Daily limits: {settings.max_daily_withdrawal_amount} per day, "
          f"{settings.max_daily_withdrawal_count} withdrawals per day")
    print(f"🌐 API available at: http://localhost:{settings.api_port}")
    print(f"📚 Documentation at: http://localhost:{settings.api_port}/docs")
    print()

    try:
        run_server(debug=False)
    except KeyboardInterrupt:
        print("\n👋 Shutting down Bank Account API...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
