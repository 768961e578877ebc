"""Local development entry point.

Usage:
    python run.py

Starts the API on port 5000 (override with PORT).
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load .env before anything else

from cloudself import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
