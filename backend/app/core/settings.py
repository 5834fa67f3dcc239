import os


class Settings:
    def __init__(self):
        self.app_name = "Freelance Invoicing"
        self.api_version = "1.0.0"
        self.environment = os.getenv("INVOICING_ENVIRONMENT", "development")
        self.secret_key = os.getenv("INVOICING_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("INVOICING_ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("INVOICING_DATABASE_URL", "sqlite:///./invoicing.db")
        self.api_prefix = os.getenv("INVOICING_API_PREFIX", "/api")
        self.log_level = os.getenv("INVOICING_LOG_LEVEL")
        # "fake" keeps payments in-process; "stripe" talks to the Stripe API
        self.payment_gateway = os.getenv("INVOICING_PAYMENT_GATEWAY", "fake")
        self.stripe_secret_key = os.getenv("STRIPE_SECRET_KEY")
        self.currency = os.getenv("INVOICING_CURRENCY", "usd")
        self.invoice_number_max_attempts = 5


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
