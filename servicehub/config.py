import os

# Remote marketplace API
API_BASE_URL = os.environ.get("SERVICEHUB_API_BASE", "http://localhost:8080/api").rstrip("/")
API_TIMEOUT = float(os.environ.get("SERVICEHUB_API_TIMEOUT", "15"))

# Cookie signing
SECRET_KEY = os.environ.get("SERVICEHUB_SECRET", "servicehub-dev-secret-change-me")
SESSION_MAX_AGE = 86400 * 30

# Only this role may book a provider
CUSTOMER_ROLE = os.environ.get("SERVICEHUB_CUSTOMER_ROLE", "ROLE_CUSTOMER")

SERVICES_PATH = "/services"
CUSTOMER_DASHBOARD_PATH = "/customer-dashboard"
