#!/usr/bin/env python3
"""
Environment setup for the Volunteer Hub API.
Writes a .env file with a fresh secret key and the default settings.
"""

import os
import secrets
import string

def generate_secret_key(length=64):
    """Generate a random secret key."""
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return ''.join(secrets.choice(alphabet) for _ in range(length))

def main():
    if os.path.exists('.env'):
        response = input(".env file already exists. Overwrite it? (y/n): ").lower().strip()
        if response != 'y':
            print("Setup cancelled.")
            return

    admin_username = input("Administrator username [admin]: ").strip() or "admin"
    secret_key = generate_secret_key(64)

    env_content = f"""# Volunteer Hub API Environment Variables
SECRET_KEY={secret_key}
ALGORITHM=HS256
ACCESS_TOKEN_EXPIRE_MINUTES=30
REFRESH_TOKEN_EXPIRE_DAYS=7
DATABASE_URL=sqlite:///./volunteer_hub.db
ADMIN_USERNAME={admin_username}
ORGANIZATION_NAME=Team-Aptiv-Org
LOG_LEVEL=INFO
"""

    with open('.env', 'w') as f:
        f.write(env_content)

    print("Environment setup completed.")
    print(f"Register the account '{admin_username}' to get administrator access.")
    print("\nNext steps:")
    print("1. Install dependencies: pip install -e .")
    print("2. Run the application: python run.py")
    print("3. Open http://localhost:8000/docs in your browser")

if __name__ == "__main__":
    main()
