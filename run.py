#!/usr/bin/env python3
"""
Launcher script for the Volunteer Hub API.
Run this from the root directory to start the application.
"""

import uvicorn

if __name__ == "__main__":
    print("Starting Volunteer Hub API with auto-reload...")
    print("API Documentation: http://localhost:8000/docs")
    print("Health Check: http://localhost:8000/health")
    print("-" * 50)

    uvicorn.run(
        "volunteer_hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["volunteer_hub"],
        log_level="info"
    )
