#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Serves booking_engine.main:app with auto-reload; tables are created on
startup for any non-production environment.
"""
import os
import sys
from pathlib import Path

backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

os.environ.setdefault("BOOKING_ENVIRONMENT", "development")

import uvicorn

if __name__ == "__main__":
    print("Starting booking engine development server")
    print("Access at: http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run("booking_engine.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
