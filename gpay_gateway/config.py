"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "gpay-gateway"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 4242

    # Payment processor
    stripe_secret_key: str = "sk_test_xxx"  # Replace with your Stripe secret key
    stripe_api_base: str = "https://api.stripe.com"
    subscription_price_id: str = "29"  # Replace with your Stripe monthly price ID

    # HTTP Client
    http_timeout_seconds: float = 10.0

    # Wallet provider
    merchant_id: str = "BCR2DN4T26363CST"
    merchant_name: str = "Yassin"
    gateway: str = "example"
    gateway_merchant_id: str = "exampleGatewayMerchantId"
    wallet_environment: str = "TEST"  # TEST | PRODUCTION
    country_code: str = "US"
    currency_code: str = "USD"

    # Browser-side endpoints
    backend_url: str = "http://localhost:4242"
    success_url: str = "./success.html"


settings = Settings()
