import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./volunteer_hub.db")

SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# Registering this username yields the administrator account
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")

# Name given to the organization row when it is first created
ORGANIZATION_NAME = os.getenv("ORGANIZATION_NAME", "Team-Aptiv-Org")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
